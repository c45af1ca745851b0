from typing import Any

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from room_tracker.config.database import get_supabase_auth_client
from room_tracker.models.user import UserContext
from room_tracker.utils.exceptions import AppError, AuthenticationError
from room_tracker.utils.logging import get_logger
from supabase import Client

logger = get_logger(__name__)

# Missing credentials are reported through AuthenticationError, not HTTPBearer's own 403
security = HTTPBearer(auto_error=False)


class AuthService:
    """Authentication service for Supabase Auth integration"""

    def __init__(self, client: Client | None = None):
        self.supabase_client = client or get_supabase_auth_client()

    async def sign_up(self, email: str, password: str) -> dict[str, Any]:
        """Sign up a new user"""
        try:
            response = self.supabase_client.auth.sign_up({"email": email, "password": password})
        except Exception as e:
            logger.error("Sign up failed", email=email, error=str(e), error_type=type(e).__name__)
            raise AuthenticationError("Sign up failed") from e

        if not response.user:
            logger.error("No user returned from Supabase auth.sign_up", email=email)
            raise AuthenticationError("Sign up failed")

        logger.info("User signed up", user_id=response.user.id)
        return {
            "success": True,
            "message": "Check your email for the confirmation link!",
            "user_id": str(response.user.id),
            "email": email,
        }

    async def sign_in(self, email: str, password: str) -> dict[str, Any]:
        """Sign in an existing user"""
        try:
            response = self.supabase_client.auth.sign_in_with_password({"email": email, "password": password})
        except Exception as e:
            logger.error("Sign in failed with exception", email=email, error=str(e), error_type=type(e).__name__)
            raise AuthenticationError("Invalid credentials") from e

        if not (response.user and response.session):
            logger.error(
                "Sign in failed - missing user or session",
                email=email,
                has_user=bool(response.user),
                has_session=bool(response.session),
            )
            raise AuthenticationError("Invalid credentials")

        logger.info("User signed in", user_id=response.user.id)
        return {
            "success": True,
            "message": "Signed in successfully",
            "access_token": response.session.access_token,
            "refresh_token": response.session.refresh_token,
            "user_id": str(response.user.id),
            "email": response.user.email,
            "expires_at": str(response.session.expires_at),
        }

    async def sign_out(self, access_token: str) -> dict[str, Any]:
        """Revoke the session behind ``access_token``"""
        try:
            self.supabase_client.auth.admin.sign_out(access_token)
        except Exception as e:
            logger.error("Sign out failed", error=str(e))
            raise AppError("Sign out failed") from e

        logger.info("User signed out")
        return {"success": True, "message": "Signed out successfully"}

    async def get_current_user_context(self, access_token: str) -> UserContext | None:
        """Verify the access token with Supabase and return UserContext."""
        try:
            response = self.supabase_client.auth.get_user(access_token)
        except Exception as e:
            logger.warning("Token verification failed", error=str(e))
            return None

        if not response or not response.user or not response.user.id:
            logger.warning("Failed to verify access token - no user returned")
            return None

        return UserContext.authenticated(user_id=str(response.user.id), email=response.user.email)


_auth_service: AuthService | None = None


def get_auth_service() -> AuthService:
    """Get auth service singleton"""
    global _auth_service
    if _auth_service is None:
        _auth_service = AuthService()
    return _auth_service


async def get_user_context(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    auth: AuthService = Depends(get_auth_service),
) -> UserContext:
    """Dependency to get current authenticated user as UserContext"""
    if credentials is None:
        raise AuthenticationError()

    user_context = await auth.get_current_user_context(credentials.credentials)
    if not user_context:
        raise AuthenticationError("Invalid authentication credentials")

    return user_context
