"""Translate between Cloud Armor protobuf messages and domain types."""

from __future__ import annotations

from typing import TYPE_CHECKING

from google.cloud import compute_v1

from flaresync.domain.model import PolicySnapshot, RuleBatch

if TYPE_CHECKING:
    from collections.abc import Sequence

    from flaresync.domain.model import ManagedRuleTemplate


def translate_rule(rule: compute_v1.SecurityPolicyRule) -> RuleBatch:
    return RuleBatch(
        priority=rule.priority,
        cidrs=tuple(rule.match.config.src_ip_ranges),
        description=rule.description,
    )


def translate_policy(policy: compute_v1.SecurityPolicy) -> PolicySnapshot:
    """Decode every rule; callers filter managed ones by description."""

    return PolicySnapshot(
        name=policy.name,
        fingerprint=policy.fingerprint,
        version_marker=policy.description,
        rules=tuple(translate_rule(rule) for rule in policy.rules),
    )


def build_rule(
    *,
    priority: int,
    cidrs: Sequence[str],
    template: ManagedRuleTemplate,
) -> compute_v1.SecurityPolicyRule:
    return compute_v1.SecurityPolicyRule(
        description=template.description,
        action=template.action,
        priority=priority,
        match=compute_v1.SecurityPolicyRuleMatcher(
            versioned_expr=template.versioned_expr,
            config=compute_v1.SecurityPolicyRuleMatcherConfig(src_ip_ranges=list(cidrs)),
        ),
    )
