"""Public interface for the Cloudflare adapter."""

from __future__ import annotations

from .client import CloudflareRangesFetcher
from .schema import IpRangesResponse, IpRangesResult
from .translator import parse_ip_ranges, translate_ip_ranges

__all__ = [
    "CloudflareRangesFetcher",
    "IpRangesResponse",
    "IpRangesResult",
    "parse_ip_ranges",
    "translate_ip_ranges",
]
