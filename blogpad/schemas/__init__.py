"""Pydantic schemas for API requests and responses."""

from blogpad.schemas.auth import AuthResponse, UserLogin, UserRegister, UserResponse
from blogpad.schemas.blog import BlogCreate, BlogResponse, BlogUpdate, MessageResponse

__all__ = [
    "UserRegister",
    "UserLogin",
    "UserResponse",
    "AuthResponse",
    "BlogCreate",
    "BlogUpdate",
    "BlogResponse",
    "MessageResponse",
]
