"""Pydantic models for categories and rooms, parsed and stored."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ParsedRoom(BaseModel):
    """A room extracted from the checklist document, not yet stored."""

    title: str = Field(..., description="Room title with the site prefix removed")
    url: str = Field(..., description="Room URL, kept verbatim")
    display_order: int = Field(..., ge=1, description="1-based position within its category")


class ParsedCategory(BaseModel):
    """A category heading and the rooms listed under it."""

    name: str = Field(..., description="Category name after normalization")
    display_order: int = Field(..., ge=1, description="1-based position in the document")
    rooms: list[ParsedRoom] = Field(default_factory=list)

    @property
    def total_rooms(self) -> int:
        return len(self.rooms)


class Category(BaseModel):
    """Row of the categories table"""

    model_config = ConfigDict(from_attributes=True, extra="ignore")

    id: UUID
    name: str
    display_order: int
    total_rooms: int = 0
    created_at: datetime | None = None


class Room(BaseModel):
    """Row of the rooms table"""

    model_config = ConfigDict(from_attributes=True, extra="ignore")

    id: UUID
    title: str
    url: str
    category_id: UUID
    display_order: int
    created_at: datetime | None = None


class CategoryWithRooms(Category):
    rooms: list[Room] = Field(default_factory=list)
