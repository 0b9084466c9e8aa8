"""Command line entry point for the registry service."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from regrecon.app import import_registry_mirror, reconcile_registrations
from regrecon.config import configure_logging

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8000


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Reconcile Brazilian company registrations")
    subparsers = parser.add_subparsers(dest="command", required=True)

    reconcile = subparsers.add_parser(
        "reconcile",
        help="Reconcile new registrations for one date and region",
    )
    reconcile.add_argument(
        "--date",
        type=str,
        required=True,
        help="Registration date (YYYY-MM-DD)",
    )
    reconcile.add_argument(
        "--region",
        type=str,
        required=True,
        help="Two-letter federative unit, e.g. SP",
    )
    reconcile.add_argument(
        "--token",
        type=str,
        help="API token identifying the caller (see REGRECON_API_TOKENS)",
    )

    mirror = subparsers.add_parser("mirror", help="Federal registry mirror commands")
    mirror_sub = mirror.add_subparsers(dest="mirror_command", required=True)
    mirror_import = mirror_sub.add_parser("import", help="Import a registry CSV dump")
    mirror_import.add_argument("file", type=str, help="Path to the CSV dump")
    mirror_import.add_argument(
        "--dataset-version",
        type=str,
        help="Dataset version to record (defaults to the file name)",
    )
    mirror_import.add_argument(
        "--delimiter",
        type=str,
        default=",",
        help="CSV field delimiter",
    )
    mirror_import.add_argument(
        "--today",
        type=str,
        help="Reference date for temporal anomaly checks (YYYY-MM-DD, defaults to today)",
    )

    serve = subparsers.add_parser("serve", help="Serve the HTTP API")
    serve.add_argument("--host", type=str, default=DEFAULT_HOST, help="Bind address")
    serve.add_argument("--port", type=int, default=DEFAULT_PORT, help="Bind port")

    return parser.parse_args(list(argv))


def _parse_iso_date(value: str) -> date:
    try:
        return date.fromisoformat(value.strip())
    except ValueError as exc:
        raise ValueError(f"Invalid ISO date: {value}") from exc


def _serve(host: str, port: int) -> None:
    import uvicorn  # noqa: PLC0415

    uvicorn.run("regrecon.web:create_default_app", factory=True, host=host, port=port)


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    configure_logging()
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
        today = None
        if parsed_args.command == "mirror" and parsed_args.today:
            today = _parse_iso_date(parsed_args.today)
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if parsed_args.command == "reconcile":
            response = reconcile_registrations(
                registration_date=parsed_args.date,
                region=parsed_args.region,
                token=parsed_args.token,
            )
            print(json.dumps(response.to_payload(), indent=2, ensure_ascii=False))  # noqa: T201
            if not response.ok:
                log.error("Reconciliation rejected: %s", response.to_payload()["error"])
                sys.exit(2)
        elif parsed_args.command == "mirror" and parsed_args.mirror_command == "import":
            summary = import_registry_mirror(
                parsed_args.file,
                dataset_version=parsed_args.dataset_version,
                delimiter=parsed_args.delimiter,
                today=today,
            )
            log.info(
                "Mirror import finished: imported=%s, skipped=%s, anomalies=%s, regions=%s",
                summary.imported,
                summary.skipped,
                summary.anomalies,
                summary.by_region,
            )
        elif parsed_args.command == "serve":
            _serve(parsed_args.host, parsed_args.port)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except Exception:
        log.exception("Fatal error")
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
