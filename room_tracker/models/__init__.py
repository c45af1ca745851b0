from .catalog import Category, CategoryWithRooms, ParsedCategory, ParsedRoom, Room
from .progress import (
    CategoryProgress,
    ProgressSummary,
    ProgressUpdateRequest,
    UserProgress,
)
from .user import UserContext

__all__ = [
    # Catalog models
    "Category",
    "CategoryWithRooms",
    "ParsedCategory",
    "ParsedRoom",
    "Room",
    # Progress models
    "CategoryProgress",
    "ProgressSummary",
    "ProgressUpdateRequest",
    "UserProgress",
    # User models
    "UserContext",
]
