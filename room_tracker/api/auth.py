from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.security import HTTPAuthorizationCredentials
from pydantic import BaseModel, EmailStr, Field

from room_tracker.models.user import UserContext
from room_tracker.services.auth_service import AuthService, get_auth_service, get_user_context, security
from room_tracker.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()


class CredentialsRequest(BaseModel):
    """Email/password pair for sign up and sign in"""

    email: EmailStr
    password: str = Field(..., min_length=6)


class AuthResponse(BaseModel):
    """Authentication response model"""

    success: bool
    message: str
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    user_id: Optional[str] = None
    email: Optional[str] = None
    expires_at: Optional[str] = None


@router.post("/signup", response_model=AuthResponse)
async def sign_up(request: CredentialsRequest, auth: AuthService = Depends(get_auth_service)):
    """Sign up a new user"""
    result = await auth.sign_up(request.email, request.password)
    return AuthResponse(**result)


@router.post("/signin", response_model=AuthResponse)
async def sign_in(request: CredentialsRequest, auth: AuthService = Depends(get_auth_service)):
    """Sign in an existing user"""
    result = await auth.sign_in(request.email, request.password)
    return AuthResponse(**result)


@router.post("/signout", response_model=AuthResponse)
async def sign_out(
    user: UserContext = Depends(get_user_context),
    credentials: HTTPAuthorizationCredentials = Depends(security),
    auth: AuthService = Depends(get_auth_service),
):
    """Sign out the current user"""
    result = await auth.sign_out(credentials.credentials)
    logger.info("Signed out", user_id=user.id)
    return AuthResponse(**result)


@router.get("/me", response_model=UserContext)
async def get_current_user_info(user: UserContext = Depends(get_user_context)):
    """Get current user information"""
    return user
