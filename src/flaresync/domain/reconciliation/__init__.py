"""Reconciliation core: change gate, rule planner, executor and version stamper.

Flow for one run:
1) compare the published version tag with the marker stored on the policy
2) batch the desired ranges and diff them against the managed rules
3) apply the resulting operations one by one
4) stamp the new version tag using the latest policy fingerprint
"""

from __future__ import annotations

from .apply import ExecutionResult, execute_plan, stamp_version
from .change_detection import should_reconcile
from .plan import (
    AddRule,
    BatchComparison,
    OperationKind,
    PatchRule,
    PlannedOperation,
    RemoveRule,
    describe_operation,
)
from .planner import batch_rule_cidrs, plan_rule_operations

__all__ = [
    "AddRule",
    "BatchComparison",
    "ExecutionResult",
    "OperationKind",
    "PatchRule",
    "PlannedOperation",
    "RemoveRule",
    "batch_rule_cidrs",
    "describe_operation",
    "execute_plan",
    "plan_rule_operations",
    "should_reconcile",
    "stamp_version",
]
