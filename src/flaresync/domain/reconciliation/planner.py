"""Rule planner: diff the batched desired ranges against the managed rules.

Desired ranges are split into windows of at most ``batch_size`` entries; the
window for slot ``i`` is derived from the index alone
(``entries[i * batch_size:(i + 1) * batch_size]``) and becomes the rule at
priority ``i``. Each slot is then compared with the managed rule already at
that priority:

- needed and present: patch unless the ranges already match
- needed and absent: add
- present but no longer needed: remove

Operations are emitted in ascending priority order.
"""

from __future__ import annotations

from collections import Counter
from logging import getLogger
from math import ceil
from typing import TYPE_CHECKING

from flaresync.domain.model import MAX_RULE_CIDRS

from .plan import AddRule, BatchComparison, PatchRule, PlannedOperation, RemoveRule

if TYPE_CHECKING:
    from collections.abc import Sequence

    from flaresync.domain.model import RuleBatch

log = getLogger(__name__)


def batch_rule_cidrs(
    entries: Sequence[str],
    batch_size: int = MAX_RULE_CIDRS,
) -> tuple[tuple[str, ...], ...]:
    """Split ``entries`` into consecutive windows of at most ``batch_size``."""

    _check_batch_size(batch_size)
    needed = ceil(len(entries) / batch_size)
    return tuple(
        tuple(entries[index * batch_size : min((index + 1) * batch_size, len(entries))])
        for index in range(needed)
    )


def plan_rule_operations(
    entries: Sequence[str],
    current: Sequence[RuleBatch],
    *,
    batch_size: int = MAX_RULE_CIDRS,
    comparison: BatchComparison = BatchComparison.ORDERED,
) -> tuple[PlannedOperation, ...]:
    """Return the operations that turn ``current`` into the batched ``entries``.

    ``current`` must contain managed rules only. The function is pure; running
    it again against the state produced by applying its result yields ``()``.
    """

    desired = batch_rule_cidrs(entries, batch_size)
    existing: dict[int, RuleBatch] = {}
    for rule in current:
        if rule.priority < 0:
            raise ValueError(f"Managed rule has negative priority {rule.priority}")
        if rule.priority in existing:
            raise ValueError(f"Duplicate managed rule priority {rule.priority}")
        existing[rule.priority] = rule

    log.debug(
        "Planning %s desired batches against %s managed rules",
        len(desired),
        len(existing),
    )

    operations: list[PlannedOperation] = []
    for priority, cidrs in enumerate(desired):
        rule = existing.get(priority)
        if rule is None:
            operations.append(AddRule(priority=priority, cidrs=cidrs))
        elif _same_ranges(rule.cidrs, cidrs, comparison):
            log.debug("Rule %s unchanged, skipping", priority)
        else:
            operations.append(PatchRule(priority=priority, cidrs=cidrs))

    operations.extend(
        RemoveRule(priority=priority)
        for priority in sorted(existing)
        if priority >= len(desired)
    )
    return tuple(operations)


def _same_ranges(
    current: Sequence[str],
    desired: Sequence[str],
    comparison: BatchComparison,
) -> bool:
    if len(current) != len(desired):
        return False
    if comparison is BatchComparison.UNORDERED:
        return Counter(current) == Counter(desired)
    return tuple(current) == tuple(desired)


def _check_batch_size(batch_size: int) -> None:
    if not 1 <= batch_size <= MAX_RULE_CIDRS:
        raise ValueError(f"Batch size must be between 1 and {MAX_RULE_CIDRS}, got {batch_size}")
