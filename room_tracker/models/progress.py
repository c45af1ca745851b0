"""Pydantic models for per-user room progress."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class UserProgress(BaseModel):
    """Row of the user_progress table; one per (user, room)."""

    model_config = ConfigDict(from_attributes=True, extra="ignore")

    id: UUID | None = None
    user_id: UUID
    room_id: UUID
    completed: bool = False
    completed_at: datetime | None = None
    created_at: datetime | None = None


class ProgressUpdateRequest(BaseModel):
    completed: bool = Field(..., description="New completion state for the room")


class CategoryProgress(BaseModel):
    category_id: UUID
    name: str
    display_order: int
    completed: int = Field(0, ge=0)
    total: int = Field(0, ge=0)


class ProgressSummary(BaseModel):
    """Completion counts for one user, overall and per category."""

    completed: int = Field(0, ge=0)
    total: int = Field(0, ge=0)
    categories: list[CategoryProgress] = Field(default_factory=list)
    rooms: dict[str, bool] = Field(default_factory=dict, description="room_id -> completed")
