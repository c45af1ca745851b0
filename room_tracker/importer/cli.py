"""
Seed the room catalog from a checklist README.

Deletes ALL existing progress, rooms and categories, then inserts the
categories and rooms parsed from the document. Every user's progress is lost.

Usage:
    room-tracker-seed                     # seed from ./README.md
    room-tracker-seed path/to/README.md
    room-tracker-seed --dry-run           # parse and print, no database access
"""

from __future__ import annotations

import argparse
import sys

from pydantic import ValidationError as SettingsValidationError

from room_tracker.config.database import get_import_client
from room_tracker.config.settings import get_settings
from room_tracker.importer.parser import parse_checklist, read_checklist
from room_tracker.importer.seeder import ChecklistSeeder
from room_tracker.models.catalog import ParsedCategory
from room_tracker.services.db_service import DbService
from room_tracker.utils.exceptions import ConfigurationError, DatabaseError, SourceReadError
from room_tracker.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="room-tracker-seed",
        description="Replace the stored categories and rooms with those parsed from a checklist README",
    )
    parser.add_argument("path", nargs="?", help="Checklist document (default: CHECKLIST_PATH or README.md)")
    parser.add_argument(
        "--dry-run", action="store_true", help="Parse and print the outline without touching the database"
    )
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL")
    parser.add_argument(
        "--log-format", choices=("json", "console"), default=None, help="Override LOG_FORMAT (default: json)"
    )
    return parser


def format_outline(categories: list[ParsedCategory]) -> str:
    lines = []
    for category in categories:
        lines.append(f"{category.display_order}. {category.name} ({category.total_rooms} rooms)")
        for room in category.rooms:
            lines.append(f"   {room.display_order}. {room.title} <{room.url}>")
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        settings = get_settings()
    except SettingsValidationError as exc:
        print(f"❌ Invalid configuration: {exc.error_count()} setting(s) failed validation", file=sys.stderr)
        for error in exc.errors():
            field = ".".join(str(part) for part in error["loc"])
            print(f"   - {field}: {error['msg']}", file=sys.stderr)
        return 1
    setup_logging(args.log_level, args.log_format)

    path = args.path or settings.checklist_path
    logger.info("Reading checklist", path=path)
    try:
        content = read_checklist(path)
    except SourceReadError as exc:
        print(f"❌ {exc.message}", file=sys.stderr)
        return 1

    categories = parse_checklist(content)
    logger.info(
        "Parsed checklist",
        categories=len(categories),
        rooms=sum(category.total_rooms for category in categories),
    )

    if args.dry_run:
        print("=== DRY RUN MODE ===")
        print(format_outline(categories))
        return 0

    try:
        client = get_import_client()
    except ConfigurationError as exc:
        logger.error("Configuration error", error=exc.message, **exc.details)
        print(f"❌ {exc.message}", file=sys.stderr)
        return 1

    seeder = ChecklistSeeder(DbService(client))
    try:
        report = seeder.seed(categories)
    except DatabaseError as exc:
        logger.error("Clearing existing data failed", error=exc.message)
        print(f"❌ {exc.message}", file=sys.stderr)
        return 1

    print(report.get_summary())
    if report.has_failures:
        print("⚠️ Database seeded with errors. Check the log for details.")
    else:
        print("✅ Database seeded successfully!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
