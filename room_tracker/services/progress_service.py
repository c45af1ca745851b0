"""Per-user room completion, stored one row per (user, room) in user_progress."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from room_tracker.constants import PROGRESS_TABLE
from room_tracker.models.progress import CategoryProgress, ProgressSummary, UserProgress
from room_tracker.services.catalog_service import CatalogService
from room_tracker.shared.errors import ErrorCode
from room_tracker.utils.exceptions import AppError, DatabaseError
from room_tracker.utils.logging import get_logger
from supabase import Client

logger = get_logger(__name__)


class ProgressService:
    """RLS-aware progress service; callers pass the request-scoped client."""

    def __init__(self, client: Client, catalog: CatalogService | None = None):
        self.db = client
        self.catalog = catalog or CatalogService(client)

    def get_progress_map(self, user_id: str) -> dict[str, bool]:
        res = (
            self.db.table(PROGRESS_TABLE)
            .select("room_id, completed")
            .eq("user_id", user_id)
            .execute()
        )
        return {str(row["room_id"]): bool(row["completed"]) for row in (res.data or [])}

    def _find_record(self, user_id: str, room_id: str) -> dict[str, Any] | None:
        res = (
            self.db.table(PROGRESS_TABLE)
            .select("id, completed")
            .eq("user_id", user_id)
            .eq("room_id", room_id)
            .limit(1)
            .execute()
        )
        return res.data[0] if res.data else None

    def _require_room(self, room_id: str) -> None:
        if self.catalog.get_room(room_id) is None:
            raise AppError(
                f"Room not found: {room_id}",
                error_code=ErrorCode.NOT_FOUND,
                details={"room_id": room_id},
            )

    def set_room_completion(
        self,
        user_id: str,
        room_id: UUID | str,
        completed: bool,
        now: datetime | None = None,
    ) -> UserProgress:
        room_id = str(room_id)
        self._require_room(room_id)
        return self._write(user_id, room_id, completed, self._find_record(user_id, room_id), now)

    def toggle_room(self, user_id: str, room_id: UUID | str, now: datetime | None = None) -> UserProgress:
        """Flip a room's completion; a room without a record counts as not completed."""
        room_id = str(room_id)
        self._require_room(room_id)
        existing = self._find_record(user_id, room_id)
        completed = not (existing and existing.get("completed"))
        return self._write(user_id, room_id, completed, existing, now)

    def _write(
        self,
        user_id: str,
        room_id: str,
        completed: bool,
        existing: dict[str, Any] | None,
        now: datetime | None,
    ) -> UserProgress:
        completed_at = (now or datetime.now(timezone.utc)).isoformat() if completed else None
        payload = {"completed": completed, "completed_at": completed_at}

        table = self.db.table(PROGRESS_TABLE)
        if existing:
            res = table.update(payload).eq("user_id", user_id).eq("room_id", room_id).execute()
        else:
            res = table.insert({"user_id": user_id, "room_id": room_id, **payload}).execute()

        if not res.data:
            raise DatabaseError(
                "Failed to save room progress",
                details={"room_id": room_id, "user_id": user_id},
            )
        logger.info("Room progress saved", user_id=user_id, room_id=room_id, completed=completed)
        return UserProgress(**res.data[0])

    def get_summary(self, user_id: str) -> ProgressSummary:
        progress = self.get_progress_map(user_id)
        summary = ProgressSummary()

        for category in self.catalog.get_catalog():
            done = sum(1 for room in category.rooms if progress.get(str(room.id)))
            summary.categories.append(
                CategoryProgress(
                    category_id=category.id,
                    name=category.name,
                    display_order=category.display_order,
                    completed=done,
                    total=len(category.rooms),
                )
            )
            summary.completed += done
            summary.total += len(category.rooms)
            for room in category.rooms:
                summary.rooms[str(room.id)] = progress.get(str(room.id), False)

        return summary
