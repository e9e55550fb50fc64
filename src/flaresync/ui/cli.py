from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from flaresync.app import sync_cloudflare_ranges
from flaresync.config import configure_logging
from flaresync.domain.reconciliation import BatchComparison

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _positive_float(value: str) -> float:
    try:
        parsed = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Invalid number: {value}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError(f"Must be positive: {value}")
    return parsed


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="flaresync",
        description="Sync a Cloud Armor policy with Cloudflare's published IP ranges",
    )
    parser.add_argument(
        "--project",
        type=str,
        required=True,
        help="Google Cloud project that owns the policy",
    )
    parser.add_argument(
        "--policy",
        type=str,
        required=True,
        help="Cloud Armor security policy name",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Add additional debugging output",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Plan rule changes and log them without modifying the policy",
    )
    parser.add_argument(
        "--order-insensitive",
        action="store_true",
        help="Treat a rule as unchanged when it holds the same ranges in any order",
    )
    parser.add_argument(
        "--timeout",
        type=_positive_float,
        default=None,
        help="Deadline in seconds for the whole run (defaults to config)",
    )
    args = parser.parse_args(list(argv))
    if not args.project.strip() or not args.policy.strip():
        parser.error("both --project and --policy must be non-empty")
    return args


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    configure_logging()
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)

    if parsed_args.debug:
        configure_logging(level=logging.DEBUG, force=True)

    comparison = (
        BatchComparison.UNORDERED if parsed_args.order_insensitive else BatchComparison.ORDERED
    )

    try:
        sync_cloudflare_ranges(
            project=parsed_args.project,
            policy=parsed_args.policy,
            comparison=comparison,
            timeout_seconds=parsed_args.timeout,
            dry_run=parsed_args.dry_run,
        )
    except Exception:
        log.exception("Fatal error during sync")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
