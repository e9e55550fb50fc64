"""Value types shared by adapters and the reconciliation core."""

from __future__ import annotations

from dataclasses import dataclass

MAX_RULE_CIDRS = 10
"""Cloud Armor accepts at most ten source ranges per rule matcher."""

DEFAULT_RULE_DESCRIPTION = "cloudflare - dont change"
DEFAULT_RULE_ACTION = "allow"
DEFAULT_VERSIONED_EXPR = "SRC_IPS_V1"


@dataclass(slots=True, frozen=True)
class DesiredState:
    """Snapshot of the published ranges identified by an opaque version tag."""

    version_tag: str
    entries: tuple[str, ...]
    ipv6_entries: tuple[str, ...] = ()


@dataclass(slots=True, frozen=True)
class RuleBatch:
    """One security policy rule as far as reconciliation is concerned."""

    priority: int
    cidrs: tuple[str, ...]
    description: str = ""

    def is_managed(self, sentinel: str) -> bool:
        return self.description == sentinel


@dataclass(slots=True, frozen=True)
class PolicySnapshot:
    """State of a security policy as read from the store.

    ``rules`` may contain rules created by other means; only rules whose
    description equals the managed sentinel take part in planning.
    """

    name: str
    fingerprint: str
    version_marker: str
    rules: tuple[RuleBatch, ...] = ()

    def managed_rules(self, sentinel: str) -> tuple[RuleBatch, ...]:
        managed = (rule for rule in self.rules if rule.is_managed(sentinel))
        return tuple(sorted(managed, key=lambda rule: rule.priority))


@dataclass(slots=True, frozen=True)
class ManagedRuleTemplate:
    """Attributes every managed rule is written with."""

    description: str = DEFAULT_RULE_DESCRIPTION
    action: str = DEFAULT_RULE_ACTION
    versioned_expr: str = DEFAULT_VERSIONED_EXPR

