"""Local session endpoints (login, signup, logout)."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from ...domain.models.session import UserProfile
from ...domain.services.session_service import (
    AuthenticationError,
    NotAuthenticatedError,
    SessionService,
)
from ...infrastructure.dependencies import get_session_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


class LoginRequest(BaseModel):
    """Request model for login."""

    email: str = ""
    password: str = ""


class SignupRequest(BaseModel):
    """Request model for signup."""

    name: str = ""
    email: str = ""
    password: str = ""
    confirm_password: str = Field("", alias="confirm")

    class Config:
        """Pydantic model configuration."""
        populate_by_name = True


class MessageResponse(BaseModel):
    """Plain informational response."""

    message: str


@router.post("/login", response_model=UserProfile)
async def login(
    request: LoginRequest,
    session_service: SessionService = Depends(get_session_service),
) -> UserProfile:
    """Log in locally (presence of credentials only)."""
    try:
        return session_service.login(request.email, request.password)
    except AuthenticationError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/signup", response_model=UserProfile)
async def signup(
    request: SignupRequest,
    session_service: SessionService = Depends(get_session_service),
) -> UserProfile:
    """Create a local user and log them in."""
    try:
        return session_service.signup(
            request.name, request.email, request.password, request.confirm_password
        )
    except AuthenticationError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/logout", response_model=MessageResponse)
async def logout(session_service: SessionService = Depends(get_session_service)) -> MessageResponse:
    """Log out the current user."""
    session_service.logout()
    return MessageResponse(message="Successfully logged out")


@router.get("/me", response_model=UserProfile)
async def current_user(session_service: SessionService = Depends(get_session_service)) -> UserProfile:
    """Get the logged-in user."""
    try:
        return session_service.require_user()
    except NotAuthenticatedError as e:
        raise HTTPException(status_code=401, detail=str(e))
