"""Authentication service for JWT and password handling."""

import logging
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from storerate.config import get_settings
from storerate.errors import ConflictError, NotFoundError, UnauthenticatedError
from storerate.models.enums import Role
from storerate.models.user import User

logger = logging.getLogger(__name__)

settings = get_settings()

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def normalize_email(email: str) -> str:
    """Emails are unique case-insensitively, so they are stored lower-cased."""
    return email.strip().lower()


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def create_access_token(user: User) -> str:
    """Create a JWT access token carrying the user's role and store."""
    expire = datetime.now(UTC) + timedelta(minutes=settings.jwt_expiration_minutes)
    to_encode = {
        "sub": str(user.id),
        "email": user.email,
        "role": Role(user.role).value,
        "store_id": user.store_id,
        "exp": expire,
    }
    encoded_jwt = jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)
    return encoded_jwt


def decode_access_token(token: str) -> dict | None:
    """Decode and validate a JWT token."""
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
        return payload
    except JWTError:
        return None


def get_user_by_email(db: Session, email: str) -> User | None:
    """Get a user by email."""
    return db.query(User).filter(User.email == normalize_email(email)).first()


def authenticate_user(db: Session, email: str, password: str) -> User | None:
    """Authenticate a user by email and password."""
    user = get_user_by_email(db, email)
    if not user:
        return None
    if not verify_password(password, user.password_hash):
        return None
    return user


def register_user(
    db: Session, name: str, email: str, password: str, address: str | None = None
) -> User:
    """Sign up a new account; self-registered accounts are always plain users."""
    if get_user_by_email(db, email):
        raise ConflictError("User with this email already exists")

    user = User(
        name=name,
        email=normalize_email(email),
        password_hash=get_password_hash(password),
        address=address,
        role=Role.USER,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info(f"Registered user {user.id}")
    return user


def change_password(db: Session, user_id: int, current_password: str, new_password: str) -> None:
    """Replace a user's password after verifying the current one."""
    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        raise NotFoundError("User not found")

    if not verify_password(current_password, user.password_hash):
        raise UnauthenticatedError("Current password is incorrect")

    user.password_hash = get_password_hash(new_password)
    db.commit()
    logger.info(f"Password updated for user {user_id}")
