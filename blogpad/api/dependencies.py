"""FastAPI dependencies for authentication and database."""

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from blogpad.config import Settings
from blogpad.database import get_db
from blogpad.exceptions import AuthError
from blogpad.models.user import User
from blogpad.services.auth import get_user, verify_token
from blogpad.services.blog_service import BlogService

# auto_error is off so a missing header reaches get_current_user and becomes a 401
security = HTTPBearer(auto_error=False)


def get_app_settings(request: Request) -> Settings:
    """Settings the running application was built with."""
    return request.app.state.settings


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> User:
    """Get the current authenticated user from the bearer token.

    No token is a 401, a bad or expired token is a 403, and a valid token for
    a user that no longer exists is a 401.
    """
    if credentials is None or not credentials.credentials:
        raise AuthError()

    user_id = verify_token(credentials.credentials, settings)

    user = get_user(db, user_id)
    if user is None:
        raise AuthError("Invalid token")

    return user


def get_blog_service(
    db: Annotated[Session, Depends(get_db)],
) -> BlogService:
    """Get blog service bound to the request's session."""
    return BlogService(db)
