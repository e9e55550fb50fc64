from __future__ import annotations

import logging

import pytest

from flaresync.domain.errors import ConflictError
from flaresync.domain.reconciliation import BatchComparison
from flaresync.ui import cli as cli_module


def test_cli_passes_required_identifiers(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}

    def fake_sync(**kwargs: object) -> None:
        captured.update(kwargs)

    monkeypatch.setattr(cli_module, "sync_cloudflare_ranges", fake_sync)

    cli_module.main(["--project", "proj", "--policy", "edge"])

    assert captured == {
        "project": "proj",
        "policy": "edge",
        "comparison": BatchComparison.ORDERED,
        "timeout_seconds": None,
        "dry_run": False,
    }


def test_cli_optional_flags(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}

    def fake_sync(**kwargs: object) -> None:
        captured.update(kwargs)

    monkeypatch.setattr(cli_module, "sync_cloudflare_ranges", fake_sync)

    cli_module.main(
        [
            "--project",
            "proj",
            "--policy",
            "edge",
            "--debug",
            "--dry-run",
            "--order-insensitive",
            "--timeout",
            "120",
        ]
    )

    assert captured["comparison"] is BatchComparison.UNORDERED
    assert captured["timeout_seconds"] == 120.0
    assert captured["dry_run"] is True
    assert logging.getLogger().level == logging.DEBUG


@pytest.mark.parametrize(
    "argv",
    [
        [],
        ["--project", "proj"],
        ["--policy", "edge"],
        ["--project", "proj", "--policy", "edge", "--timeout", "-5"],
        ["--project", "  ", "--policy", "edge"],
    ],
)
def test_cli_usage_errors_exit_with_2(
    monkeypatch: pytest.MonkeyPatch, argv: list[str]
) -> None:
    def fake_sync(**_: object) -> None:
        pytest.fail("sync must not run on usage errors")

    monkeypatch.setattr(cli_module, "sync_cloudflare_ranges", fake_sync)

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(argv)

    assert excinfo.value.code == 2


def test_cli_run_failure_exits_with_1(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    def fake_sync(**_: object) -> None:
        raise ConflictError("stale fingerprint", operation="patch-policy-description")

    monkeypatch.setattr(cli_module, "sync_cloudflare_ranges", fake_sync)

    with caplog.at_level(logging.ERROR), pytest.raises(SystemExit) as excinfo:
        cli_module.main(["--project", "proj", "--policy", "edge"])

    assert excinfo.value.code == 1
    assert "stale fingerprint" in caplog.text


@pytest.mark.parametrize("blank", ["--project", "--policy"])
def test_cli_blank_identifier_prints_usage(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str], blank: str
) -> None:
    monkeypatch.setattr(cli_module, "sync_cloudflare_ranges", lambda **_: None)
    values = {"--project": "proj", "--policy": "edge", blank: " "}
    argv = [item for pair in values.items() for item in pair]

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(argv)

    assert excinfo.value.code == 2
    err = capsys.readouterr().err
    assert err.startswith("usage: flaresync")
    assert "must be non-empty" in err
