"""Blog model."""

from sqlalchemy import JSON, Column, ForeignKey, String, Text
from sqlalchemy.orm import relationship

from blogpad.database import Base
from blogpad.models.enums import BlogStatus
from blogpad.models.ids import ID_LENGTH, generate_id
from blogpad.models.mixins import TimestampMixin


class Blog(Base, TimestampMixin):
    """A blog post, draft or published, owned by a single user."""

    __tablename__ = "blogs"

    id = Column(String(ID_LENGTH), primary_key=True, default=generate_id)
    title = Column(String(500), nullable=False)
    content = Column(Text, nullable=False)
    tags = Column(JSON, nullable=False, default=list)
    status = Column(String(20), nullable=False, default=BlogStatus.DRAFT.value)
    author_id = Column(String(ID_LENGTH), ForeignKey("users.id"), nullable=False, index=True)

    # Relationships
    author = relationship("User", backref="blogs")
