"""HTTP client for Cloudflare's published IP ranges."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from json import JSONDecodeError
from logging import getLogger
from typing import TYPE_CHECKING

import httpx

from flaresync.adapters.http_resilience import ResilientClient
from flaresync.config.cloudflare import CloudflareConfig, get_cloudflare_config
from flaresync.domain.errors import FetchError, ParseError
from flaresync.domain.ports.fetching import DesiredStateFetcher

from .translator import translate_ip_ranges

if TYPE_CHECKING:
    from collections.abc import Callable

    from flaresync.config.http_resilience import ResilienceConfig
    from flaresync.domain.model import DesiredState

log = getLogger(__name__)


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


@dataclass(slots=True)
class CloudflareRangesFetcher:
    config: CloudflareConfig = field(default_factory=get_cloudflare_config)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )

    def __call__(self) -> DesiredState:
        return asyncio.run(self._fetch_async())

    async def _fetch_async(self) -> DesiredState:
        async with self.client_factory(self.config.resilience) as client:
            payload = await self._perform_request(client=client)
        desired = translate_ip_ranges(payload)
        log.debug(
            "Fetched %s IPv4 and %s IPv6 ranges from %s",
            len(desired.entries),
            len(desired.ipv6_entries),
            self.config.url,
        )
        return desired

    async def _perform_request(self, *, client: ResilientClient) -> object:
        try:
            response = await client.get(self.config.url)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            raise FetchError(f"Cloudflare returned HTTP {status} for {self.config.url}") from exc
        except httpx.HTTPError as exc:
            raise FetchError(f"Failed to fetch {self.config.url}: {exc}") from exc

        try:
            return response.json()
        except (JSONDecodeError, UnicodeDecodeError) as exc:
            raise ParseError(f"Cloudflare response is not valid JSON: {exc}") from exc


if TYPE_CHECKING:
    _fetcher_check: DesiredStateFetcher = CloudflareRangesFetcher()
