"""
Command-line interface for recording and browsing activities.

Usage:
    activity-planner schemas [--locale tr]
    activity-planner add --type <record_type> --field name=value [--field ...]
    activity-planner list [--type <record_type>] [--json]
    activity-planner show <event_id>
    activity-planner edit <event_id> --field name=value [--field ...]
    activity-planner delete <event_id>
    activity-planner clear --yes
    activity-planner metrics
"""

import argparse
import asyncio
import json
import sqlite3
import sys
from typing import Any

from pydantic import ValidationError as SettingsError

from activity_planner.config import Settings
from activity_planner.core.models import RECORD_TYPES, EventRecord, StoreResult
from activity_planner.observability import metrics
from activity_planner.observability.logger import get_logger
from activity_planner.service import ALL_EVENTS, ActivityPlanner, SubmissionResult, build_planner
from activity_planner.utils.validation import InputValidationError, parse_field_assignments, validate_locale

logger = get_logger(__name__)


def format_event_row(record: EventRecord, planner: ActivityPlanner, locale: str) -> str:
    """One-line summary of an event: id, type, date, then the remaining fields."""
    schema = planner.registry.get_schema(record.type)
    parts = []
    for field in schema.fields if schema else ():
        if field.name == "date":
            continue
        value = record.get(field.name)
        if value:
            parts.append(f"{field.label(locale)}: {value}")
    date = record.get("date") or "-"
    return f"{record.id:<6} {record.type:<10} {date:<12} {'; '.join(parts)}"


def print_failure(result: SubmissionResult | StoreResult) -> None:
    errors = result.errors if isinstance(result, SubmissionResult) else [result.error or "Operation failed"]
    print("\nError:")
    for error in errors:
        print(f"  - {error}")


def schemas_command(args, planner: ActivityPlanner) -> int:
    """List the event types and their fields."""
    for schema in planner.registry:
        print(f"\n{schema.record_type} - {schema.title(args.locale)}")
        print(f"{'-' * 60}")
        summary = planner.validator.engines[schema.record_type].get_rule_summary()
        by_type = ", ".join(f"{rule_type}: {count}" for rule_type, count in summary["rules_by_type"].items())
        print(f"  rules: {summary['total_rules']} ({by_type})")
        for field in schema.fields:
            marker = "*" if field.required else " "
            role = f" [{field.role}]" if field.role != "plain" else ""
            print(f"  {marker} {field.name:<12} {field.kind:<9} {field.label(args.locale)}{role}")
    print()
    return 0


async def add_command(args, planner: ActivityPlanner) -> int:
    """Validate and store a new event."""
    fields = parse_field_assignments(args.field)
    result = await planner.submit_event(args.type, fields, args.locale)
    if not result.success:
        print_failure(result)
        return 1
    print(f"Event added with id {result.store.id}")
    return 0


async def list_command(args, planner: ActivityPlanner) -> int:
    """List events sorted by date."""
    result = await planner.list_events(args.type or ALL_EVENTS)
    if not result.success:
        print_failure(result)
        return 1

    if args.json:
        print(json.dumps([record.to_dict() for record in result.records], ensure_ascii=False, indent=2))
        return 0

    if not result.records:
        print("\nNo events found.")
        return 0

    print(f"\n{'ID':<6} {'Type':<10} {'Date':<12} Details")
    print(f"{'-' * 80}")
    for record in result.records:
        print(format_event_row(record, planner, args.locale))
    print(f"\nTotal events: {len(result.records)}\n")
    return 0


async def show_command(args, planner: ActivityPlanner) -> int:
    """Show one event as JSON."""
    result = await planner.get_event(args.event_id)
    if not result.success:
        print_failure(result)
        return 1
    print(json.dumps(result.record.to_dict(), ensure_ascii=False, indent=2))
    return 0


async def edit_command(args, planner: ActivityPlanner) -> int:
    """Validate and apply changes to an event."""
    fields = parse_field_assignments(args.field)
    result = await planner.edit_event(args.event_id, fields, args.locale)
    if not result.success:
        print_failure(result)
        return 1
    print(f"Event {result.store.id} updated")
    return 0


async def delete_command(args, planner: ActivityPlanner) -> int:
    """Delete an event permanently."""
    result = await planner.delete_event(args.event_id)
    if not result.success:
        print_failure(result)
        return 1
    print(f"Event {result.id} deleted")
    return 0


async def clear_command(args, planner: ActivityPlanner) -> int:
    """Delete every event."""
    if not args.yes:
        print("Refusing to clear the store without --yes")
        return 1
    result = await planner.reset()
    if not result.success:
        print_failure(result)
        return 1
    print(f"Removed {result.count} event(s)")
    return 0


def metrics_command(args, planner: ActivityPlanner) -> int:
    """Print the metrics collected by this process."""
    sys.stdout.write(metrics.get_metrics().decode("utf-8"))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="activity-planner",
        description="Record and browse activities (weddings, funerals, breakfasts, musical events)",
    )
    parser.add_argument("--db", dest="db_path", help="SQLite database file (env: ACTIVITY_DB_PATH)")
    parser.add_argument(
        "--locale",
        type=validate_locale,
        metavar="{en,tr}",
        help="Label and message locale (env: ACTIVITY_LOCALE)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (env: LOG_LEVEL)",
    )
    parser.add_argument("--env-file", help="Load settings from this .env file")

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("schemas", help="List event types and their fields")

    add_parser = subparsers.add_parser("add", help="Add an event")
    add_parser.add_argument("--type", required=True, choices=RECORD_TYPES, help="Event type")
    add_parser.add_argument("--field", action="append", default=[], metavar="NAME=VALUE", help="Field value")

    list_parser = subparsers.add_parser("list", help="List events sorted by date")
    list_parser.add_argument("--type", choices=RECORD_TYPES, help="Only this event type")
    list_parser.add_argument("--json", action="store_true", help="Print JSON")

    show_parser = subparsers.add_parser("show", help="Show one event")
    show_parser.add_argument("event_id", help="Event ID")

    edit_parser = subparsers.add_parser("edit", help="Edit an event")
    edit_parser.add_argument("event_id", help="Event ID")
    edit_parser.add_argument("--field", action="append", default=[], metavar="NAME=VALUE", help="Field value")

    delete_parser = subparsers.add_parser("delete", help="Delete an event")
    delete_parser.add_argument("event_id", help="Event ID")

    clear_parser = subparsers.add_parser("clear", help="Delete all events")
    clear_parser.add_argument("--yes", action="store_true", help="Confirm")

    subparsers.add_parser("metrics", help="Print Prometheus metrics for this run")

    return parser


COMMANDS = {
    "schemas": schemas_command,
    "add": add_command,
    "list": list_command,
    "show": show_command,
    "edit": edit_command,
    "delete": delete_command,
    "clear": clear_command,
    "metrics": metrics_command,
}


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = Settings.from_env(
            args.env_file,
            db_path=args.db_path,
            locale=args.locale,
            log_level=args.log_level,
        )
    except SettingsError as e:
        print(f"\nInvalid configuration: {e}")
        return 2

    args.locale = settings.locale

    try:
        planner = build_planner(settings)
    except (ValueError, OSError, sqlite3.Error) as e:
        logger.error(f"Failed to start: {e}", exc_info=True)
        print(f"\nError: {e}")
        return 1

    handler = COMMANDS[args.command]
    try:
        outcome: Any = handler(args, planner)
        if asyncio.iscoroutine(outcome):
            outcome = asyncio.run(outcome)
    except InputValidationError as e:
        print(f"\nError: {e}")
        return 2

    return outcome


if __name__ == "__main__":
    sys.exit(main())
