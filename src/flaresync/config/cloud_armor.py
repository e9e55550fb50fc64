"""Cloud Armor configuration values."""

from __future__ import annotations

from dataclasses import dataclass, field

from flaresync.domain.model import (
    DEFAULT_RULE_ACTION,
    DEFAULT_RULE_DESCRIPTION,
    DEFAULT_VERSIONED_EXPR,
    ManagedRuleTemplate,
)

from .env import env_float, env_str
from .errors import ConfigurationError

DEFAULT_TIMEOUT_SECONDS = 600.0


@dataclass(frozen=True)
class CloudArmorConfig:
    """Identifies the security policy and bounds how long a run may take."""

    project: str
    policy: str
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    template: ManagedRuleTemplate = field(default_factory=ManagedRuleTemplate)


def get_cloud_armor_config(
    *,
    project: str,
    policy: str,
    timeout_seconds: float | None = None,
) -> CloudArmorConfig:
    if not project.strip() or not policy.strip():
        raise ConfigurationError("Both a project and a policy name are required")
    if timeout_seconds is not None and timeout_seconds <= 0:
        raise ConfigurationError(f"Timeout must be positive, got {timeout_seconds}")
    return CloudArmorConfig(
        project=project.strip(),
        policy=policy.strip(),
        timeout_seconds=timeout_seconds
        or env_float("FLARESYNC_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS),
        template=ManagedRuleTemplate(
            description=env_str("FLARESYNC_RULE_DESCRIPTION", DEFAULT_RULE_DESCRIPTION),
            action=DEFAULT_RULE_ACTION,
            versioned_expr=DEFAULT_VERSIONED_EXPR,
        ),
    )
