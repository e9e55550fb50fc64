from __future__ import annotations

import pytest

from flaresync.adapters.cloudflare import translate_ip_ranges
from flaresync.domain.errors import ParseError, ValidationError


def test_translate_keeps_published_order(cloudflare_payload: dict[str, object]) -> None:
    desired = translate_ip_ranges(cloudflare_payload)

    assert desired.entries[:3] == ("173.245.48.0/20", "103.21.244.0/22", "103.22.200.0/22")
    assert len(desired.ipv6_entries) == 7


def test_translate_rejects_empty_ipv4_list() -> None:
    payload = {
        "result": {"ipv4_cidrs": [], "ipv6_cidrs": ["2400:cb00::/32"], "etag": "x"},
        "success": True,
    }

    with pytest.raises(ValidationError, match="empty IP ranges"):
        translate_ip_ranges(payload)


def test_translate_rejects_blank_etag() -> None:
    payload = {"result": {"ipv4_cidrs": ["10.0.0.0/8"], "etag": "   "}, "success": True}

    with pytest.raises(ValidationError, match="empty ETag"):
        translate_ip_ranges(payload)


def test_translate_reports_cloudflare_errors() -> None:
    payload = {
        "result": None,
        "success": False,
        "errors": [{"code": 10000, "message": "Authentication error"}],
        "messages": [],
    }

    with pytest.raises(ParseError, match="10000: Authentication error"):
        translate_ip_ranges(payload)


@pytest.mark.parametrize(
    "payload",
    [
        [],
        {"result": {"ipv4_cidrs": "10.0.0.0/8", "etag": "x"}, "success": True},
        {"result": {"ipv4_cidrs": ["10.0.0.0/8"], "etag": "x"}},
        {"success": True},
    ],
)
def test_translate_rejects_unexpected_shapes(payload: object) -> None:
    with pytest.raises(ParseError):
        translate_ip_ranges(payload)
