"""API module initialization."""

from .auth import router as auth_router
from . import rooms

__all__ = ["auth_router", "rooms"]
