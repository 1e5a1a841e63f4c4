"""Authentication service for JWT and password handling."""

import logging
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from blogpad.config import Settings, get_settings
from blogpad.exceptions import ConflictError, InvalidCredentialsError, InvalidTokenError
from blogpad.models.user import User

logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def issue_token(user_id: str, settings: Settings | None = None) -> str:
    """Create a signed bearer token for a user, valid for the configured period."""
    settings = settings or get_settings()
    expire = datetime.now(UTC) + timedelta(minutes=settings.jwt_expiration_minutes)
    to_encode = {
        "sub": user_id,
        "exp": expire,
    }
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: Settings | None = None) -> str:
    """Validate a bearer token and return the user id it was issued to.

    Raises InvalidTokenError for bad signatures, malformed tokens and expired
    tokens alike.
    """
    settings = settings or get_settings()
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError as e:
        logger.info(f"Rejected bearer token: {e}")
        raise InvalidTokenError() from e

    user_id = payload.get("sub")
    if not user_id:
        raise InvalidTokenError()
    return user_id


def get_user(db: Session, user_id: str) -> User | None:
    """Get a user by id."""
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_email(db: Session, email: str) -> User | None:
    """Get a user by email."""
    return db.query(User).filter(User.email == email).first()


def create_user(db: Session, name: str, email: str, password: str) -> User:
    """Create a new user, refusing an email that is already registered."""
    if get_user_by_email(db, email):
        raise ConflictError()

    user = User(name=name, email=email, password_hash=get_password_hash(password))
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        # Lost a race with a concurrent registration for the same email
        db.rollback()
        raise ConflictError() from e
    db.refresh(user)
    logger.info(f"Registered user {user.id}")
    return user


def verify_credentials(db: Session, email: str, password: str) -> User:
    """Authenticate a user by email and password."""
    user = get_user_by_email(db, email)
    if not user or not verify_password(password, user.password_hash):
        logger.info("Failed login attempt")
        raise InvalidCredentialsError()
    return user
