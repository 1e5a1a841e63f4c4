"""Blog store: persistence and search for blog posts."""

import logging
from typing import Any

from sqlalchemy import or_
from sqlalchemy.orm import Session

from blogpad.exceptions import NotFoundError
from blogpad.models.blog import Blog
from blogpad.models.enums import BlogStatus
from blogpad.models.mixins import utcnow

logger = logging.getLogger(__name__)

# Columns callers may change through update(); id, author and creation time are fixed.
UPDATABLE_FIELDS = frozenset({"title", "content", "tags", "status"})

LIKE_ESCAPE = "\\"


def _like_pattern(query: str) -> str:
    """Build a literal substring LIKE pattern for ``query``."""
    escaped = (
        query.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


class BlogService:
    """Service for blog CRUD and search.

    Ownership is not enforced by the lookups themselves; ``get_owned`` is the
    checked entry point used by the API layer.
    """

    def __init__(self, db: Session):
        self.db = db

    def create(
        self,
        author_id: str,
        title: str,
        content: str,
        tags: list[str] | None = None,
        status: BlogStatus = BlogStatus.DRAFT,
    ) -> Blog:
        """Create a blog with both timestamps set to now."""
        now = utcnow()
        blog = Blog(
            title=title,
            content=content,
            tags=list(tags or []),
            status=BlogStatus(status).value,
            author_id=author_id,
            created_at=now,
            updated_at=now,
        )
        self.db.add(blog)
        self.db.commit()
        self.db.refresh(blog)
        logger.info(f"Created {blog.status} blog {blog.id} for user {author_id}")
        return blog

    def get_by_id(self, blog_id: str) -> Blog | None:
        return self.db.query(Blog).filter(Blog.id == blog_id).first()

    def get_owned(self, blog_id: str, author_id: str) -> Blog:
        """Get a blog the author owns, or raise NotFoundError.

        A blog owned by someone else is reported exactly like a missing one.
        """
        blog = self.get_by_id(blog_id)
        if blog is None or blog.author_id != author_id:
            raise NotFoundError("Blog")
        return blog

    def list_by_author(self, author_id: str) -> list[Blog]:
        """All blogs of an author, most recently updated first."""
        return (
            self.db.query(Blog)
            .filter(Blog.author_id == author_id)
            .order_by(Blog.updated_at.desc())
            .all()
        )

    def update(self, blog_id: str, fields: dict[str, Any]) -> Blog | None:
        """Merge ``fields`` into a blog and refresh updated_at.

        Keys outside UPDATABLE_FIELDS are ignored. Returns None if the blog
        does not exist.
        """
        blog = self.get_by_id(blog_id)
        if blog is None:
            return None

        for key, value in fields.items():
            if key not in UPDATABLE_FIELDS:
                continue
            if key == "status":
                value = BlogStatus(value).value
            elif key == "tags":
                value = list(value)
            setattr(blog, key, value)

        blog.touch()
        self.db.commit()
        self.db.refresh(blog)
        logger.info(f"Updated blog {blog.id}")
        return blog

    def delete(self, blog_id: str) -> bool:
        """Delete a blog. Returns True if a record was removed."""
        deleted = self.db.query(Blog).filter(Blog.id == blog_id).delete()
        self.db.commit()
        if deleted:
            logger.info(f"Deleted blog {blog_id}")
        return deleted > 0

    def search(self, author_id: str, query: str) -> list[Blog]:
        """Case-insensitive substring search over id, title and content.

        Results are limited to the author's blogs, most recently updated first.
        """
        pattern = _like_pattern(query)
        return (
            self.db.query(Blog)
            .filter(
                Blog.author_id == author_id,
                or_(
                    Blog.id.ilike(pattern, escape=LIKE_ESCAPE),
                    Blog.title.ilike(pattern, escape=LIKE_ESCAPE),
                    Blog.content.ilike(pattern, escape=LIKE_ESCAPE),
                ),
            )
            .order_by(Blog.updated_at.desc())
            .all()
        )
