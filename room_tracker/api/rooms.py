"""Catalog and progress endpoints.

Endpoints are plain ``def`` so the blocking Supabase calls run in the
threadpool.
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends

from room_tracker.config.database import get_db_client_for_request
from room_tracker.models.catalog import CategoryWithRooms
from room_tracker.models.progress import ProgressSummary, ProgressUpdateRequest, UserProgress
from room_tracker.models.user import UserContext
from room_tracker.services.auth_service import get_user_context
from room_tracker.services.catalog_service import CatalogService
from room_tracker.services.progress_service import ProgressService

router = APIRouter(prefix="/api", tags=["Rooms"])

DB_CLIENT_DEP = Depends(get_db_client_for_request)
CURRENT_USER_DEP = Depends(get_user_context)


@router.get("/categories", response_model=list[CategoryWithRooms])
def list_categories(db=DB_CLIENT_DEP):
    """All categories in display order, each with its rooms."""
    return CatalogService(db).get_catalog()


@router.get("/progress", response_model=ProgressSummary)
def get_progress(user: UserContext = CURRENT_USER_DEP, db=DB_CLIENT_DEP):
    return ProgressService(db).get_summary(user.id)


@router.put("/rooms/{room_id}/progress", response_model=UserProgress)
def set_room_progress(
    room_id: UUID,
    body: ProgressUpdateRequest,
    user: UserContext = CURRENT_USER_DEP,
    db=DB_CLIENT_DEP,
):
    return ProgressService(db).set_room_completion(user.id, room_id, body.completed)


@router.post("/rooms/{room_id}/toggle", response_model=UserProgress)
def toggle_room(room_id: UUID, user: UserContext = CURRENT_USER_DEP, db=DB_CLIENT_DEP):
    """Flip the caller's completion state for a room."""
    return ProgressService(db).toggle_room(user.id, room_id)
