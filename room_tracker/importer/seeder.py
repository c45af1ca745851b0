"""Replace the stored catalog with freshly parsed categories and rooms."""

from __future__ import annotations

from datetime import datetime

from room_tracker.constants import CATEGORIES_TABLE, ROOMS_TABLE, WIPE_ORDER
from room_tracker.models.catalog import ParsedCategory
from room_tracker.services.db_service import DbService
from room_tracker.utils.exceptions import DatabaseError
from room_tracker.utils.logging import get_logger

logger = get_logger(__name__)


class SeedReport:
    """Track what a seeding run inserted and what it had to skip."""

    def __init__(self, categories_processed: int = 0, rooms_parsed: int = 0):
        self.categories_processed = categories_processed
        self.rooms_parsed = rooms_parsed
        self.categories_inserted = 0
        self.rooms_inserted = 0
        self.rows_deleted: dict[str, int] = {}
        self.failed_operations: list[str] = []
        self.start_time = datetime.now()

    def add_failure(self, operation: str, error: str):
        self.failed_operations.append(f"{operation}: {error}")

    @property
    def has_failures(self) -> bool:
        return bool(self.failed_operations)

    def get_summary(self) -> str:
        duration = datetime.now() - self.start_time
        lines = [
            "Seed Summary:",
            "=============",
            f"Duration: {duration.total_seconds():.1f} seconds",
            f"Categories processed: {self.categories_processed}",
            f"Categories inserted: {self.categories_inserted}",
            f"Rooms parsed: {self.rooms_parsed}",
            f"Rooms inserted: {self.rooms_inserted}",
            f"Failed operations: {len(self.failed_operations)}",
        ]
        if self.failed_operations:
            lines.append("")
            lines.append("Failures:")
            lines.extend(f"  - {failure}" for failure in self.failed_operations[:10])
            if len(self.failed_operations) > 10:
                lines.append("  ... and more")
        return "\n".join(lines)


class ChecklistSeeder:
    """Wipes categories, rooms and progress, then inserts a parsed checklist.

    Inserts run one at a time. A failed category skips its rooms, a failed
    room skips only itself; neither stops the run.
    """

    def __init__(self, db: DbService):
        self.db = db

    def clear_existing(self, report: SeedReport | None = None) -> None:
        """Delete progress, rooms and categories, in that order.

        Raises ``DatabaseError`` on the first failed wipe.
        """
        logger.info("Clearing existing data", tables=list(WIPE_ORDER))
        for table in WIPE_ORDER:
            deleted = self.db.delete_all(table)
            if report is not None:
                report.rows_deleted[table] = deleted
            logger.info("Table cleared", table=table, rows_deleted=deleted)

    def seed(self, categories: list[ParsedCategory]) -> SeedReport:
        report = SeedReport(
            categories_processed=len(categories),
            rooms_parsed=sum(category.total_rooms for category in categories),
        )

        self.clear_existing(report)

        logger.info("Seeding categories", count=len(categories))
        for category in categories:
            try:
                row = self.db.create(
                    CATEGORIES_TABLE,
                    {
                        "name": category.name,
                        "display_order": category.display_order,
                        "total_rooms": category.total_rooms,
                    },
                )
            except DatabaseError as exc:
                logger.error("Error inserting category", category=category.name, error=exc.message)
                report.add_failure(f"Insert category {category.name}", exc.message)
                continue

            report.categories_inserted += 1
            category_id = row["id"]
            logger.info("Seeding rooms", category=category.name, count=category.total_rooms)

            for room in category.rooms:
                try:
                    self.db.create(
                        ROOMS_TABLE,
                        {
                            "title": room.title,
                            "url": room.url,
                            "category_id": category_id,
                            "display_order": room.display_order,
                        },
                    )
                except DatabaseError as exc:
                    logger.error(
                        "Error inserting room",
                        room=room.title,
                        category=category.name,
                        error=exc.message,
                    )
                    report.add_failure(f"Insert room {room.title} ({category.name})", exc.message)
                    continue
                report.rooms_inserted += 1

        logger.info(
            "Seeding finished",
            categories_inserted=report.categories_inserted,
            rooms_inserted=report.rooms_inserted,
            failures=len(report.failed_operations),
        )
        return report
