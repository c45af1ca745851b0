from __future__ import annotations

from typing import Any

from room_tracker.constants import NIL_UUID
from room_tracker.utils.exceptions import DatabaseError
from room_tracker.utils.logging import get_logger
from supabase import Client


class DbService:
    """Minimal shared CRUD helpers over a Supabase client.

    Every failure surfaces as ``DatabaseError`` so callers decide per call
    whether it is fatal.
    """

    def __init__(self, client: Client) -> None:
        self.logger = get_logger(self.__class__.__name__)
        self.db = client

    def create(self, table: str, data: dict[str, Any]) -> dict[str, Any]:
        """Insert one row and return it as stored (with generated id)."""
        try:
            result = self.db.table(table).insert(data).execute()
            if not result.data:
                raise DatabaseError(f"Failed to create in {table}")
            return dict(result.data[0])
        except DatabaseError:
            raise
        except Exception as exc:  # noqa: BLE001
            self.logger.error("create failed", table=table, error=str(exc))
            raise DatabaseError(f"Failed to create in {table}: {exc}", details={"table": table}) from exc

    def delete_all(self, table: str) -> int:
        """Delete every row of ``table``; returns the number of rows removed."""
        try:
            result = self.db.table(table).delete().neq("id", NIL_UUID).execute()
            return len(result.data or [])
        except Exception as exc:  # noqa: BLE001
            self.logger.error("delete_all failed", table=table, error=str(exc))
            raise DatabaseError(f"Failed to clear {table}: {exc}", details={"table": table}) from exc
