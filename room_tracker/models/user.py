from typing import Optional

from pydantic import BaseModel, Field


class UserContext(BaseModel):
    """Authenticated caller as verified by Supabase Auth"""

    id: str = Field(description="User ID (UUID string)")
    email: Optional[str] = Field(None, description="User email address")
    is_authenticated: bool = Field(False, description="Whether user is authenticated")

    @classmethod
    def authenticated(cls, user_id: str, email: str | None) -> "UserContext":
        """Create authenticated user context"""
        return cls(id=user_id, email=email, is_authenticated=True)
