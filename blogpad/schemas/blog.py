"""Blog schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from blogpad.models.enums import BlogStatus


class BlogCreate(BaseModel):
    """Body of save-draft and publish. Status comes from the route."""

    title: str = Field(..., min_length=1, max_length=500)
    content: str = Field(..., min_length=1)
    tags: list[str] = Field(default_factory=list)


class BlogUpdate(BaseModel):
    """Partial update of a blog; omitted or null fields are left alone."""

    title: str | None = Field(None, min_length=1, max_length=500)
    content: str | None = Field(None, min_length=1)
    tags: list[str] | None = None
    status: BlogStatus | None = None

    def changes(self) -> dict:
        """Fields the client actually provided, without nulls."""
        return self.model_dump(exclude_unset=True, exclude_none=True)


class BlogResponse(BaseModel):
    """Blog response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    content: str
    tags: list[str]
    status: BlogStatus
    author_id: str
    created_at: datetime
    updated_at: datetime


class MessageResponse(BaseModel):
    """Plain confirmation message."""

    message: str
