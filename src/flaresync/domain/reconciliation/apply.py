"""Apply a plan against the policy store and stamp the new version marker.

Calls are strictly sequential: each mutation changes the policy fingerprint,
and the stamp must carry the fingerprint observed after the last one. The
first failure propagates and nothing after it is attempted, including the
stamp, so the next run re-detects the change and plans what is left.
"""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from .plan import AddRule, PatchRule, RemoveRule, describe_operation

if TYPE_CHECKING:
    from collections.abc import Iterable

    from flaresync.domain.model import ManagedRuleTemplate
    from flaresync.domain.ports import PolicyStore

    from .plan import PlannedOperation

log = getLogger(__name__)


@dataclass(slots=True)
class ExecutionResult:
    """Counts of mutations applied to the policy."""

    added: int = 0
    patched: int = 0
    removed: int = 0

    @property
    def total(self) -> int:
        return self.added + self.patched + self.removed


def execute_plan(
    store: PolicyStore,
    operations: Iterable[PlannedOperation],
    *,
    template: ManagedRuleTemplate,
) -> ExecutionResult:
    result = ExecutionResult()
    for operation in operations:
        log.info("Applying: %s", describe_operation(operation))
        match operation:
            case AddRule(priority=priority, cidrs=cidrs):
                store.add_rule(priority=priority, cidrs=cidrs, template=template)
                result.added += 1
            case PatchRule(priority=priority, cidrs=cidrs):
                store.patch_rule(priority=priority, cidrs=cidrs, template=template)
                result.patched += 1
            case RemoveRule(priority=priority):
                store.remove_rule(priority=priority)
                result.removed += 1
    return result


def stamp_version(store: PolicyStore, version_tag: str) -> str:
    """Write ``version_tag`` into the policy description; return the fingerprint used."""

    snapshot = store.read_policy()
    log.info("Updating the policy description with version tag %s", version_tag)
    store.patch_description(fingerprint=snapshot.fingerprint, description=version_tag)
    return snapshot.fingerprint
