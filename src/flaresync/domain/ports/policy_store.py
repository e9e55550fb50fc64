"""Ports for reading and mutating the security policy."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from flaresync.domain.model import ManagedRuleTemplate, PolicySnapshot


@runtime_checkable
class PolicyStore(Protocol):
    """The five calls the reconciliation core needs from the policy store.

    Each mutation blocks until the store reports the change as applied, so the
    next call observes the resulting fingerprint.
    """

    def read_policy(self) -> PolicySnapshot: ...

    def patch_description(self, *, fingerprint: str, description: str) -> None: ...

    def add_rule(
        self, *, priority: int, cidrs: Sequence[str], template: ManagedRuleTemplate
    ) -> None: ...

    def patch_rule(
        self, *, priority: int, cidrs: Sequence[str], template: ManagedRuleTemplate
    ) -> None: ...

    def remove_rule(self, *, priority: int) -> None: ...


__all__ = ["PolicyStore"]
