from __future__ import annotations

import json
from pathlib import Path

import pytest

DATA_DIR = Path(__file__).resolve().parent / "data"


@pytest.fixture
def cloudflare_payload() -> dict[str, object]:
    return json.loads((DATA_DIR / "cloudflare_ips.json").read_text())


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "FLARESYNC_CLOUDFLARE_URL",
        "FLARESYNC_TIMEOUT_SECONDS",
        "FLARESYNC_RULE_DESCRIPTION",
    ):
        monkeypatch.delenv(name, raising=False)
