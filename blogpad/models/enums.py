"""Enums for model fields."""

from enum import Enum


class BlogStatus(str, Enum):
    """Publication state of a blog post."""

    DRAFT = "draft"
    PUBLISHED = "published"

    def is_published(self) -> bool:
        """Check if this status makes the post public."""
        return self == BlogStatus.PUBLISHED
