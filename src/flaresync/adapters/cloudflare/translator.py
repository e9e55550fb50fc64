"""Translate a Cloudflare IP ranges payload into the desired allowlist state."""

from __future__ import annotations

from pydantic import ValidationError as PydanticValidationError

from flaresync.domain.errors import ParseError, ValidationError
from flaresync.domain.model import DesiredState

from .schema import IpRangesResponse, IpRangesResult


def parse_ip_ranges(payload: object) -> IpRangesResult:
    try:
        response = IpRangesResponse.model_validate(payload)
    except PydanticValidationError as exc:
        raise ParseError(f"Unexpected Cloudflare payload: {exc}") from exc

    if not response.success:
        details = "; ".join(
            f"{error.code}: {error.message}" if error.code is not None else error.message
            for error in response.errors
        )
        raise ParseError(f"Cloudflare reported failure: {details or 'no details'}")
    if response.result is None:
        raise ParseError("Cloudflare payload has no result")
    return response.result


def translate_ip_ranges(payload: object) -> DesiredState:
    """Validate ``payload`` and return the IPv4 ranges keyed by Cloudflare's etag."""

    result = parse_ip_ranges(payload)
    if not result.etag.strip():
        raise ValidationError("Cloudflare returned an empty ETag")
    if not result.ipv4_cidrs:
        raise ValidationError("Cloudflare returned an empty IP ranges list")
    return DesiredState(
        version_tag=result.etag,
        entries=tuple(result.ipv4_cidrs),
        ipv6_entries=tuple(result.ipv6_cidrs),
    )
