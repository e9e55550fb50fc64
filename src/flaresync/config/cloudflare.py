"""Cloudflare configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_str
from .http_resilience import RateLimit, ResilienceConfig

CLOUDFLARE_IPS_URL = "https://api.cloudflare.com/client/v4/ips"
CLOUDFLARE_TIMEOUT_SECONDS = 10.0


@dataclass(frozen=True)
class CloudflareConfig:
    """Where and how to fetch Cloudflare's published IP ranges."""

    url: str
    resilience: ResilienceConfig


def default_cloudflare_resilience() -> ResilienceConfig:
    return ResilienceConfig(
        name="cloudflare",
        timeout_seconds=CLOUDFLARE_TIMEOUT_SECONDS,
        ratelimit=RateLimit(max_calls=4, per_seconds=1.0),
        default_headers={"Accept": "application/json"},
    )


def get_cloudflare_config(*, resilience: ResilienceConfig | None = None) -> CloudflareConfig:
    return CloudflareConfig(
        url=env_str("FLARESYNC_CLOUDFLARE_URL", CLOUDFLARE_IPS_URL),
        resilience=resilience or default_cloudflare_resilience(),
    )
