# ============================================================================
# ReportDesk - Command Line Interface
#
# Purpose: CLI entry point for routing, drafting, rendering and submitting
#          department reports
# Inputs: Command-line arguments, report instance JSON files
# Outputs: Template decisions, instance drafts, report text, stored records
# Dependencies: argparse, config, router, reporting, session, stores
# Usage: reportdesk new --department Finance --user "Ama Mensah" --out draft.json
#        reportdesk submit draft.json
#
# Changelog:
#   2026-10-09: Initial CLI with 'route', 'new', 'render' and 'submit' commands
#   2026-10-12: --directory snapshot for staff and client defaults;
#               submit --report-id updates an existing record
# ============================================================================

import argparse
import sys
from datetime import date
from pathlib import Path
from typing import Optional

from ReportDesk import __version__
from ReportDesk.collaborators import StaticDirectory
from ReportDesk.config import Config
from ReportDesk.errors import ConfigurationError, ReportDeskError
from ReportDesk.logging_utils import get_logger, setup_logging_from_config
from ReportDesk.reporting.registry import template_for
from ReportDesk.reporting.renderers.base import RenderOptions
from ReportDesk.reporting.report_builder import ReportBuilder
from ReportDesk.reporting.schema import ActingUser, ContentMode
from ReportDesk.reporting.serializer import serialize_report
from ReportDesk.router import route
from ReportDesk.session import ReportSession
from ReportDesk.stores import store_from_config
from ReportDesk.utils.serialization import parse_report_json, serialize_report_to_json
from ReportDesk.utils.time import parse_iso_date

logger = get_logger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """
    Create the argument parser for the CLI.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="reportdesk",
        description="Author, render and submit structured department reports",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to a YAML config file (default: configs/default.yaml)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Route command
    route_parser = subparsers.add_parser(
        "route",
        help="Show which report template a department gets",
    )
    route_parser.add_argument("--department", type=str, required=True, help="Department name")
    route_parser.add_argument(
        "--hint",
        type=str,
        default=None,
        help="Report type hint (e.g., weekly-client-officer, client-specific-activities)",
    )
    route_parser.add_argument("--title", type=str, default=None, help="Existing report title")

    # New command
    new_parser = subparsers.add_parser(
        "new",
        help="Draft a fresh report instance with its defaults",
    )
    new_parser.add_argument("--department", type=str, required=True, help="Department name")
    new_parser.add_argument("--hint", type=str, default=None, help="Report type hint")
    new_parser.add_argument("--user", type=str, default="", help="Acting user's name")
    new_parser.add_argument("--position", type=str, default="", help="Acting user's position")
    new_parser.add_argument(
        "--date",
        type=str,
        default=None,
        help="Reference date YYYY-MM-DD (default: today)",
    )
    new_parser.add_argument(
        "--directory",
        type=str,
        default=None,
        help="Directory snapshot JSON with staff and clients lists",
    )
    new_parser.add_argument(
        "--out",
        type=str,
        default=None,
        help="Write the instance JSON here instead of stdout",
    )

    # Render command
    render_parser = subparsers.add_parser(
        "render",
        help="Render a report instance as it would be stored",
    )
    render_parser.add_argument("instance", type=str, help="Report instance JSON file")
    render_parser.add_argument(
        "--mode",
        type=str,
        choices=["text", "json"],
        default=None,
        help="Content mode (default: the template's own mode)",
    )

    # Submit command
    submit_parser = subparsers.add_parser(
        "submit",
        help="Validate a report instance and write it to the configured store",
    )
    submit_parser.add_argument("instance", type=str, help="Report instance JSON file")
    submit_parser.add_argument(
        "--report-id",
        type=str,
        default=None,
        help="Update this existing record instead of creating a new one",
    )
    submit_parser.add_argument("--user", type=str, default="", help="Acting user's name")

    return parser


def _load_config(path: Optional[str]) -> Config:
    config = Config.from_yaml(path) if path else Config.from_default()
    setup_logging_from_config(config.logging)
    return config


def _reference_date(value: Optional[str]) -> date:
    if value is None:
        return date.today()
    parsed = parse_iso_date(value)
    if parsed is None:
        raise ConfigurationError(f"Invalid date: {value!r} (expected YYYY-MM-DD)")
    return parsed


def _read_instance(path: str):
    source = Path(path)
    try:
        text = source.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Cannot read report instance {path}", details=str(e)) from e
    try:
        return parse_report_json(text)
    except ValueError as e:
        raise ConfigurationError(f"{path} is not a report instance", details=str(e)) from e


def _print_error(e: ReportDeskError) -> None:
    print(f"\n✗ Error: {e}\n", file=sys.stderr)


def route_command(args: argparse.Namespace) -> int:
    """Print the template chosen for a department."""
    try:
        _load_config(args.config)
        spec = route(args.department, args.hint, args.title)
    except ReportDeskError as e:
        _print_error(e)
        return 1
    print(f"{spec.tag}\t{spec.label}\t{spec.content_mode.value}")
    return 0


def new_command(args: argparse.Namespace) -> int:
    """
    Draft a fresh instance and write it as JSON.

    Returns:
        Exit code (0 success, non-zero failure)
    """
    try:
        config = _load_config(args.config)
        today = _reference_date(args.date)
        directory = StaticDirectory.from_json(args.directory) if args.directory else None
        spec = route(args.department, args.hint)
        instance = ReportBuilder(config).new_instance(
            spec,
            ActingUser(name=args.user, position=args.position),
            today,
            staff=directory.list_staff() if directory else None,
            clients=directory.list_clients() if directory else None,
            department_name=args.department,
        )
        payload = serialize_report_to_json(instance, indent=2)
    except ReportDeskError as e:
        logger.error(f"Drafting failed: {e}")
        _print_error(e)
        return 1

    if args.out:
        Path(args.out).write_text(payload + "\n", encoding="utf-8")
        print(f"✓ Draft written to {args.out}")
    else:
        print(payload)
    return 0


def render_command(args: argparse.Namespace) -> int:
    """Print the stored content of an instance file."""
    try:
        config = _load_config(args.config)
        instance = _read_instance(args.instance)
        mode = ContentMode(args.mode) if args.mode else None
        print(serialize_report(instance, mode, RenderOptions.from_config(config.rendering)))
    except ReportDeskError as e:
        _print_error(e)
        return 1
    return 0


def submit_command(args: argparse.Namespace) -> int:
    """
    Validate and store an instance file.

    Returns:
        Exit code (0 success, 1 rejected, 2 unexpected failure)
    """
    try:
        config = _load_config(args.config)
        instance = _read_instance(args.instance)
        store = store_from_config(config.store)
        existing = store.get_report(args.report_id) if args.report_id else None
        session = ReportSession(
            template_for(instance),
            instance,
            ActingUser(name=args.user),
            date.today(),
            store,
            existing=existing,
            options=RenderOptions.from_config(config.rendering),
        )
        record = session.submit()
    except ReportDeskError as e:
        logger.error(f"Submission failed: {e}")
        _print_error(e)
        return 1
    except Exception as e:
        logger.exception("Unexpected error during submission")
        print(f"\n✗ Unexpected error: {e}\n", file=sys.stderr)
        return 2

    print(f"\n✓ Stored report {record.id}: {record.title}\n")
    return 0


def main(argv: Optional[list] = None) -> int:
    """
    Main CLI entry point.

    Returns:
        Exit code
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    if args.command == "route":
        return route_command(args)
    if args.command == "new":
        return new_command(args)
    if args.command == "render":
        return render_command(args)
    if args.command == "submit":
        return submit_command(args)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
