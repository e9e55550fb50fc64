"""Public interface for the Cloud Armor adapter."""

from __future__ import annotations

from .client import CloudArmorPolicyStore, SecurityPoliciesAPI
from .translator import build_rule, translate_policy, translate_rule

__all__ = [
    "CloudArmorPolicyStore",
    "SecurityPoliciesAPI",
    "build_rule",
    "translate_policy",
    "translate_rule",
]
