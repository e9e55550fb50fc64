"""Planned mutations produced by the rule planner.

The plan is the contract between planning (pure, no I/O) and execution
(sequential calls against the policy store). Operations are applied in the
order the planner emits them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum


class BatchComparison(StrEnum):
    """How an existing rule's ranges are compared against the desired slice."""

    ORDERED = "ordered"
    UNORDERED = "unordered"


class OperationKind(StrEnum):
    ADD = "add"
    PATCH = "patch"
    REMOVE = "remove"


@dataclass(slots=True, frozen=True)
class AddRule:
    priority: int
    cidrs: tuple[str, ...]
    kind: OperationKind = field(default=OperationKind.ADD, init=False)


@dataclass(slots=True, frozen=True)
class PatchRule:
    priority: int
    cidrs: tuple[str, ...]
    kind: OperationKind = field(default=OperationKind.PATCH, init=False)


@dataclass(slots=True, frozen=True)
class RemoveRule:
    priority: int
    kind: OperationKind = field(default=OperationKind.REMOVE, init=False)


type PlannedOperation = AddRule | PatchRule | RemoveRule


def describe_operation(operation: PlannedOperation) -> str:
    match operation:
        case AddRule(priority=priority, cidrs=cidrs) | PatchRule(priority=priority, cidrs=cidrs):
            return f"{operation.kind} rule {priority} ({len(cidrs)} ranges)"
        case RemoveRule(priority=priority):
            return f"{operation.kind} rule {priority}"
