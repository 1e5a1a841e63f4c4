"""SQLAlchemy models."""

from blogpad.models.blog import Blog
from blogpad.models.enums import BlogStatus
from blogpad.models.user import User

__all__ = [
    "User",
    "Blog",
    "BlogStatus",
]
