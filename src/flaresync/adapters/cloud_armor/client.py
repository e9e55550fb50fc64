"""Cloud Armor security policy store backed by ``google-cloud-compute``."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Protocol

from google.api_core import exceptions as api_exceptions
from google.auth import exceptions as auth_exceptions
from google.cloud import compute_v1

from flaresync.domain.errors import (
    AccessError,
    ConflictError,
    NotFoundError,
    OperationError,
    PolicyStoreError,
)

from .translator import build_rule, translate_policy

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from types import TracebackType

    from flaresync.config.cloud_armor import CloudArmorConfig
    from flaresync.domain.model import ManagedRuleTemplate, PolicySnapshot

log = getLogger(__name__)


class _Transport(Protocol):
    def close(self) -> None: ...


class _Operation(Protocol):
    def result(self, timeout: float | None = None) -> object: ...


class SecurityPoliciesAPI(Protocol):
    """Subset of ``compute_v1.SecurityPoliciesClient`` used by the store."""

    @property
    def transport(self) -> _Transport: ...

    def get(
        self, request: compute_v1.GetSecurityPolicyRequest, *, timeout: float
    ) -> compute_v1.SecurityPolicy: ...

    def patch(
        self, request: compute_v1.PatchSecurityPolicyRequest, *, timeout: float
    ) -> _Operation: ...

    def add_rule(
        self, request: compute_v1.AddRuleSecurityPolicyRequest, *, timeout: float
    ) -> _Operation: ...

    def patch_rule(
        self, request: compute_v1.PatchRuleSecurityPolicyRequest, *, timeout: float
    ) -> _Operation: ...

    def remove_rule(
        self, request: compute_v1.RemoveRuleSecurityPolicyRequest, *, timeout: float
    ) -> _Operation: ...


def _default_api_factory() -> SecurityPoliciesAPI:
    try:
        return compute_v1.SecurityPoliciesClient()
    except auth_exceptions.DefaultCredentialsError as exc:
        raise AccessError(f"No Google Cloud credentials available: {exc}") from exc


_API_ERRORS = (
    api_exceptions.GoogleAPIError,
    auth_exceptions.GoogleAuthError,
    TimeoutError,
)


def _translate_api_error(
    exc: Exception,
    *,
    operation: str,
    priority: int | None = None,
    policy: str,
) -> PolicyStoreError:
    message = f"{policy}: {exc}"
    if isinstance(exc, api_exceptions.NotFound) and operation == "read-policy":
        return NotFoundError(message, operation=operation, priority=priority)
    if isinstance(
        exc,
        api_exceptions.Unauthorized
        | api_exceptions.Forbidden
        | auth_exceptions.RefreshError
        | auth_exceptions.DefaultCredentialsError,
    ):
        return AccessError(message, operation=operation, priority=priority)
    if isinstance(exc, api_exceptions.Conflict | api_exceptions.PreconditionFailed):
        return ConflictError(message, operation=operation, priority=priority)
    if isinstance(exc, TimeoutError):
        return OperationError(
            f"{policy}: timed out waiting for the operation to finish",
            operation=operation,
            priority=priority,
        )
    return OperationError(message, operation=operation, priority=priority)


@dataclass(slots=True)
class CloudArmorPolicyStore:
    """Reads and mutates one security policy.

    Every call, including waiting on the returned extended operation, is
    bounded by the time left until the run deadline.
    """

    config: CloudArmorConfig
    api_factory: Callable[[], SecurityPoliciesAPI] = field(default=_default_api_factory)
    clock: Callable[[], float] = field(default=time.monotonic)
    _api: SecurityPoliciesAPI | None = field(default=None, init=False, repr=False)
    _deadline: float = field(default=0.0, init=False, repr=False)

    def __post_init__(self) -> None:
        self._deadline = self.clock() + self.config.timeout_seconds

    @property
    def api(self) -> SecurityPoliciesAPI:
        if self._api is None:
            self._api = self.api_factory()
        return self._api

    def close(self) -> None:
        """Close the underlying API transport if a client was created."""
        if self._api is not None:
            self._api.transport.close()
            self._api = None

    def __enter__(self) -> CloudArmorPolicyStore:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def read_policy(self) -> PolicySnapshot:
        operation = "read-policy"
        request = compute_v1.GetSecurityPolicyRequest(
            project=self.config.project,
            security_policy=self.config.policy,
        )
        try:
            policy = self.api.get(request=request, timeout=self._remaining(operation))
        except _API_ERRORS as exc:
            raise _translate_api_error(exc, operation=operation, policy=self.config.policy) from exc
        return translate_policy(policy)

    def patch_description(self, *, fingerprint: str, description: str) -> None:
        request = compute_v1.PatchSecurityPolicyRequest(
            project=self.config.project,
            security_policy=self.config.policy,
            security_policy_resource=compute_v1.SecurityPolicy(
                description=description,
                fingerprint=fingerprint,
            ),
        )
        self._run("patch-policy-description", self.api.patch, request)

    def add_rule(
        self,
        *,
        priority: int,
        cidrs: Sequence[str],
        template: ManagedRuleTemplate,
    ) -> None:
        request = compute_v1.AddRuleSecurityPolicyRequest(
            project=self.config.project,
            security_policy=self.config.policy,
            security_policy_rule_resource=build_rule(
                priority=priority, cidrs=cidrs, template=template
            ),
        )
        self._run("add-rule", self.api.add_rule, request, priority=priority)

    def patch_rule(
        self,
        *,
        priority: int,
        cidrs: Sequence[str],
        template: ManagedRuleTemplate,
    ) -> None:
        request = compute_v1.PatchRuleSecurityPolicyRequest(
            project=self.config.project,
            security_policy=self.config.policy,
            priority=priority,
            security_policy_rule_resource=build_rule(
                priority=priority, cidrs=cidrs, template=template
            ),
        )
        self._run("patch-rule", self.api.patch_rule, request, priority=priority)

    def remove_rule(self, *, priority: int) -> None:
        request = compute_v1.RemoveRuleSecurityPolicyRequest(
            project=self.config.project,
            security_policy=self.config.policy,
            priority=priority,
        )
        self._run("remove-rule", self.api.remove_rule, request, priority=priority)

    def _run(
        self,
        operation: str,
        call: Callable[..., _Operation],
        request: object,
        *,
        priority: int | None = None,
    ) -> None:
        log.debug("Calling %s on %s (priority=%s)", operation, self.config.policy, priority)
        try:
            pending = call(request=request, timeout=self._remaining(operation, priority))
            pending.result(timeout=self._remaining(operation, priority))
        except _API_ERRORS as exc:
            raise _translate_api_error(
                exc, operation=operation, priority=priority, policy=self.config.policy
            ) from exc

    def _remaining(self, operation: str, priority: int | None = None) -> float:
        remaining = self._deadline - self.clock()
        if remaining <= 0:
            raise OperationError(
                f"{self.config.policy}: run deadline of {self.config.timeout_seconds}s exceeded",
                operation=operation,
                priority=priority,
            )
        return remaining
