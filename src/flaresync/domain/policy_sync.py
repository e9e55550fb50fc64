"""Application service reconciling a security policy with the published ranges."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from flaresync.domain.model import MAX_RULE_CIDRS, ManagedRuleTemplate
from flaresync.domain.reconciliation import (
    BatchComparison,
    ExecutionResult,
    batch_rule_cidrs,
    describe_operation,
    execute_plan,
    plan_rule_operations,
    should_reconcile,
    stamp_version,
)

if TYPE_CHECKING:
    from flaresync.domain.ports import DesiredStateFetcher, PolicyStore
    from flaresync.domain.reconciliation import PlannedOperation

log = getLogger(__name__)


@dataclass(slots=True)
class PolicySyncResult:
    """Outcome of one reconciliation run."""

    version_tag: str
    previous_marker: str
    changed: bool
    operations: tuple[PlannedOperation, ...] = ()
    execution: ExecutionResult = field(default_factory=ExecutionResult)
    dry_run: bool = False


def sync_policy(
    *,
    fetcher: DesiredStateFetcher,
    store: PolicyStore,
    template: ManagedRuleTemplate | None = None,
    comparison: BatchComparison = BatchComparison.ORDERED,
    batch_size: int = MAX_RULE_CIDRS,
    dry_run: bool = False,
) -> PolicySyncResult:
    """Fetch, gate, plan, apply and stamp; the first error aborts the run."""

    effective_template = template or ManagedRuleTemplate()

    desired = fetcher()
    log.info("Published version tag is %s", desired.version_tag)
    for entry in desired.entries:
        log.debug("Published range: %s", entry)

    snapshot = store.read_policy()
    log.info("Found version marker %r on policy %s", snapshot.version_marker, snapshot.name)

    if not should_reconcile(desired.version_tag, snapshot.version_marker):
        log.info("Policy and published ranges share the same version tag, nothing to do")
        return PolicySyncResult(
            version_tag=desired.version_tag,
            previous_marker=snapshot.version_marker,
            changed=False,
            dry_run=dry_run,
        )

    managed = snapshot.managed_rules(effective_template.description)
    log.debug(
        "Found %s managed rules; %s needed for %s ranges",
        len(managed),
        len(batch_rule_cidrs(desired.entries, batch_size)),
        len(desired.entries),
    )
    operations = plan_rule_operations(
        desired.entries,
        managed,
        batch_size=batch_size,
        comparison=comparison,
    )
    log.info("Planned %s rule operations", len(operations))

    if dry_run:
        for operation in operations:
            log.info("Dry run, would apply: %s", describe_operation(operation))
        return PolicySyncResult(
            version_tag=desired.version_tag,
            previous_marker=snapshot.version_marker,
            changed=True,
            operations=operations,
            dry_run=True,
        )

    execution = execute_plan(store, operations, template=effective_template)
    stamp_version(store, desired.version_tag)

    return PolicySyncResult(
        version_tag=desired.version_tag,
        previous_marker=snapshot.version_marker,
        changed=True,
        operations=operations,
        execution=execution,
    )
