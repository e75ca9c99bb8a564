from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from orgsync.app import sync_organization
from orgsync.config import (
    ConfigurationError,
    configure_logging,
    get_github_config,
    get_sync_config,
)

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from orgsync.domain.reconciliation import AggregateReport

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="orgsync",
        description="Synchronise a GitHub organization with a YAML declaration",
    )
    parser.add_argument(
        "--file",
        type=Path,
        default=os.getenv("ORGSYNC_FILE") or None,
        help="Path to the organization declaration (defaults to $ORGSYNC_FILE)",
    )
    parser.add_argument(
        "--organization",
        type=str,
        help="Organization login (defaults to $GITHUB_ORGANIZATION)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        default=None,
        help="Log the intended writes without sending them",
    )
    parser.add_argument(
        "--page-size",
        type=int,
        default=None,
        help="Number of items to request per API page (defaults to config)",
    )
    parser.add_argument(
        "--output",
        type=Path,
        help="Write the JSON report to this file instead of stdout",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    args = parser.parse_args(list(argv))
    if args.file is None:
        parser.error("--file is required unless ORGSYNC_FILE is set")
    return args


def _write_report(report: AggregateReport, output: Path | None) -> None:
    content = report.to_json(indent=2)
    if output is None:
        sys.stdout.write(content + "\n")
        return
    output.write_text(content + "\n", encoding="utf-8")
    log.info("Wrote sync report to %s", output)


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        github = get_github_config(organization=parsed_args.organization)
        sync = get_sync_config(dry_run=parsed_args.dry_run, page_size=parsed_args.page_size)
        report = sync_organization(declaration_path=parsed_args.file, github=github, sync=sync)
    except ConfigurationError:
        log.exception("Configuration error")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error during sync")
        sys.exit(1)

    _write_report(report, parsed_args.output)


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
