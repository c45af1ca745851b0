"""Read access to the seeded categories and rooms."""

from __future__ import annotations

from uuid import UUID

from room_tracker.constants import CATEGORIES_TABLE, ROOMS_TABLE
from room_tracker.models.catalog import Category, CategoryWithRooms, Room
from room_tracker.utils.logging import get_logger
from supabase import Client

logger = get_logger(__name__)


class CatalogService:
    """Categories and rooms in display order; readable by any caller under RLS."""

    def __init__(self, client: Client):
        self.db = client

    def list_categories(self) -> list[Category]:
        res = self.db.table(CATEGORIES_TABLE).select("*").order("display_order").execute()
        return [Category(**row) for row in (res.data or [])]

    def list_rooms(self) -> list[Room]:
        res = self.db.table(ROOMS_TABLE).select("*").order("display_order").execute()
        return [Room(**row) for row in (res.data or [])]

    def get_room(self, room_id: UUID | str) -> Room | None:
        res = self.db.table(ROOMS_TABLE).select("*").eq("id", str(room_id)).limit(1).execute()
        if not res.data:
            return None
        return Room(**res.data[0])

    def get_catalog(self) -> list[CategoryWithRooms]:
        categories = [
            CategoryWithRooms(**category.model_dump()) for category in self.list_categories()
        ]
        by_id = {category.id: category for category in categories}

        orphaned = 0
        for room in self.list_rooms():
            owner = by_id.get(room.category_id)
            if owner is None:
                orphaned += 1
                continue
            owner.rooms.append(room)

        if orphaned:
            logger.warning("Rooms without a known category skipped", count=orphaned)
        return categories
