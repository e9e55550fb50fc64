"""Application configuration helpers."""

from __future__ import annotations

from .cloud_armor import CloudArmorConfig, get_cloud_armor_config
from .cloudflare import CLOUDFLARE_IPS_URL, CloudflareConfig, get_cloudflare_config
from .env import env_float, env_str
from .errors import ConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging

__all__ = [
    "CLOUDFLARE_IPS_URL",
    "CloudArmorConfig",
    "CloudflareConfig",
    "ConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "configure_logging",
    "env_float",
    "env_str",
    "get_cloud_armor_config",
    "get_cloudflare_config",
]
