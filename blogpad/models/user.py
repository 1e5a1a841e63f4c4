"""User model."""

from sqlalchemy import Column, String

from blogpad.database import Base
from blogpad.models.ids import ID_LENGTH, generate_id
from blogpad.models.mixins import UTCDateTime, utcnow


class User(Base):
    """User model for authentication and ownership.

    Users are immutable after registration, so only created_at is tracked.
    """

    __tablename__ = "users"

    id = Column(String(ID_LENGTH), primary_key=True, default=generate_id)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(UTCDateTime, default=utcnow, nullable=False)
