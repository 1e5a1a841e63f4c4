"""Authentication API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from blogpad.api.dependencies import get_app_settings, get_current_user
from blogpad.config import Settings
from blogpad.database import get_db
from blogpad.models.user import User
from blogpad.schemas.auth import AuthResponse, UserLogin, UserRegister, UserResponse
from blogpad.services.auth import create_user, issue_token, verify_credentials

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    user_data: UserRegister,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
):
    """Register a new user."""
    user = create_user(db, user_data.name, user_data.email, user_data.password)

    return AuthResponse(
        token=issue_token(user.id, settings),
        user=UserResponse.model_validate(user),
    )


@router.post("/login", response_model=AuthResponse)
async def login(
    credentials: UserLogin,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
):
    """Login with email and password."""
    user = verify_credentials(db, credentials.email, credentials.password)

    return AuthResponse(
        token=issue_token(user.id, settings),
        user=UserResponse.model_validate(user),
    )


@router.get("/me", response_model=UserResponse)
async def get_me(
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Get current user information."""
    return current_user
