#!/usr/bin/env python3
"""
Activity ledger CLI

Usage:
    python -m src.ledger --owner ID list --date YYYY-MM-DD [--format json|text]
    python -m src.ledger --owner ID add --name "Name" --category Work --duration 60 --date YYYY-MM-DD
    python -m src.ledger --owner ID update --id ID [--name ...] [--category ...] [--duration ...] [--date ...]
    python -m src.ledger --owner ID delete --id ID
    python -m src.ledger --owner ID summary --date YYYY-MM-DD [--format json|text]
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Dict

from src.daylog.config import Config
from src.daylog.logger import setup_logger

from .aggregator import Rollup, category_highlight, dominant_category
from .errors import LedgerError, ValidationError
from .models import ActivityPatch, ActivityRecord, Category
from .repository import ActivityRepository
from .service import LedgerService

CATEGORY_CHOICES = [c.value for c in Category]


def format_activity_text(record: ActivityRecord) -> str:
    return (
        f"[{record.id}] {record.date} | {record.name} | "
        f"{record.category.value} | {record.duration_minutes} mins"
    )


def format_activity_json(record: ActivityRecord) -> Dict[str, Any]:
    return {
        "id": record.id,
        "name": record.name,
        "category": record.category.value,
        "duration": record.duration_minutes,
        "date": record.date,
        "created_at": record.created_at,
        "updated_at": record.updated_at,
    }


def format_rollup_json(date: str, rollup: Rollup) -> Dict[str, Any]:
    top = dominant_category(rollup)
    return {
        "date": date,
        "total_minutes": rollup.total_minutes,
        "remaining_minutes": rollup.remaining_minutes,
        "completion_percent": rollup.completion_percent,
        "per_category_minutes": {
            category.value: minutes
            for category, minutes in rollup.per_category_minutes.items()
        },
        "dominant_category": top.value if top else None,
    }


def print_error(exc: LedgerError) -> None:
    if isinstance(exc, ValidationError):
        for field, reason in exc.errors.items():
            print(f"Error: {field} {reason}", file=sys.stderr)
    else:
        print(f"Error: {exc}", file=sys.stderr)


def cmd_list(service: LedgerService, owner_id: str, date: str, output_format: str) -> int:
    records = service.list_by_date(owner_id, date)
    if output_format == "json":
        print(json.dumps([format_activity_json(r) for r in records], ensure_ascii=False))
    elif not records:
        print(f"No activities logged for {date}.")
    else:
        for record in records:
            print(format_activity_text(record))
    return 0


def cmd_add(service: LedgerService, owner_id: str, args: argparse.Namespace) -> int:
    record = service.add(owner_id, args.name, args.category, args.duration, args.date)
    if args.format == "json":
        print(json.dumps(format_activity_json(record), ensure_ascii=False))
    else:
        print(f"Added: {format_activity_text(record)}")
    return 0


def cmd_update(service: LedgerService, owner_id: str, args: argparse.Namespace) -> int:
    patch = ActivityPatch(
        name=args.name,
        category=args.category,
        duration_minutes=args.duration,
        date=args.date,
    )
    record = service.update(owner_id, args.id, patch)
    if args.format == "json":
        print(json.dumps(format_activity_json(record), ensure_ascii=False))
    else:
        print(f"Updated: {format_activity_text(record)}")
    return 0


def cmd_delete(service: LedgerService, owner_id: str, record_id: int, output_format: str) -> int:
    service.delete(owner_id, record_id)
    if output_format == "json":
        print(json.dumps({"success": True, "id": record_id}))
    else:
        print(f"Deleted: ID {record_id}")
    return 0


def cmd_summary(service: LedgerService, owner_id: str, date: str, output_format: str) -> int:
    rollup = service.aggregate_for_date(owner_id, date)
    if output_format == "json":
        print(json.dumps(format_rollup_json(date, rollup), ensure_ascii=False))
        return 0

    print(f"{date}: {rollup.total_minutes} / 1440 min ({rollup.completion_percent}%)")
    print(f"{rollup.remaining_minutes} minutes remaining")
    for category, minutes in sorted(
        rollup.per_category_minutes.items(), key=lambda item: (-item[1], item[0].value)
    ):
        print(f"  {category.value}: {minutes} mins")
    label, tip = category_highlight(dominant_category(rollup))
    print(f"{label} - {tip}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Daily activity ledger CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--owner", required=True, help="Owner ID the records belong to")
    parser.add_argument(
        "--db-path",
        type=str,
        help="SQLite database path (default: ledger.db_path from config/app_config.yaml)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run", required=True)

    def add_format(sub: argparse.ArgumentParser) -> None:
        sub.add_argument(
            "--format",
            choices=["json", "text"],
            default="text",
            help="Output format (default: text)",
        )

    parser_list = subparsers.add_parser("list", help="List activities for a date")
    parser_list.add_argument("--date", required=True, help="Date (YYYY-MM-DD)")
    add_format(parser_list)

    parser_add = subparsers.add_parser("add", help="Log a new activity")
    parser_add.add_argument("--name", required=True, help="Activity name")
    parser_add.add_argument("--category", required=True, choices=CATEGORY_CHOICES)
    parser_add.add_argument("--duration", required=True, type=int, help="Duration in minutes")
    parser_add.add_argument("--date", required=True, help="Date (YYYY-MM-DD)")
    add_format(parser_add)

    parser_update = subparsers.add_parser("update", help="Update an existing activity")
    parser_update.add_argument("--id", type=int, required=True, help="Activity ID")
    parser_update.add_argument("--name", help="New name")
    parser_update.add_argument("--category", choices=CATEGORY_CHOICES, help="New category")
    parser_update.add_argument("--duration", type=int, help="New duration in minutes")
    parser_update.add_argument("--date", help="New date (YYYY-MM-DD)")
    add_format(parser_update)

    parser_delete = subparsers.add_parser("delete", help="Delete an activity")
    parser_delete.add_argument("--id", type=int, required=True, help="Activity ID")
    add_format(parser_delete)

    parser_summary = subparsers.add_parser("summary", help="Show the day's rollup")
    parser_summary.add_argument("--date", required=True, help="Date (YYYY-MM-DD)")
    add_format(parser_summary)

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point"""
    args = build_parser().parse_args(argv)

    config = Config.from_yaml()
    setup_logger(log_level=config.log_level, log_file=config.log_file)
    db_path = args.db_path or config.ledger.resolved_db_path()
    service = LedgerService(ActivityRepository(db_path=db_path))

    try:
        if args.command == "list":
            return cmd_list(service, args.owner, args.date, args.format)
        elif args.command == "add":
            return cmd_add(service, args.owner, args)
        elif args.command == "update":
            return cmd_update(service, args.owner, args)
        elif args.command == "delete":
            return cmd_delete(service, args.owner, args.id, args.format)
        elif args.command == "summary":
            return cmd_summary(service, args.owner, args.date, args.format)
        else:
            print(f"Error: unknown command: {args.command}", file=sys.stderr)
            return 1
    except LedgerError as exc:
        print_error(exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())
