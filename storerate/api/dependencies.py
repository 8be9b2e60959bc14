"""FastAPI dependencies for authentication, authorization and services."""

from collections.abc import Callable
from typing import Annotated

from fastapi import Depends, Path
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from storerate.database import get_db
from storerate.errors import UnauthenticatedError
from storerate.models.enums import Role
from storerate.models.user import User
from storerate.schemas.common import MAX_RECORD_ID
from storerate.services.access_policy import Operation, Principal, enforce
from storerate.services.aggregation import AggregationEngine
from storerate.services.auth import decode_access_token
from storerate.services.catalog import CatalogService
from storerate.services.lifecycle import DirectoryService
from storerate.services.rating_ledger import RatingLedger

# auto_error is off so a missing header is a 401 like any other bad token
security = HTTPBearer(auto_error=False)

RecordIdPath = Annotated[int, Path(gt=0, le=MAX_RECORD_ID)]


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """Get the current authenticated user from JWT token."""
    if credentials is None:
        raise UnauthenticatedError("Not authorized to access this route. Please login.")

    payload = decode_access_token(credentials.credentials)
    if payload is None:
        raise UnauthenticatedError("Invalid authentication credentials")

    user_id = payload.get("sub")
    if user_id is None or not str(user_id).isdigit():
        raise UnauthenticatedError("Invalid authentication credentials")

    user = db.query(User).filter(User.id == int(user_id)).first()
    if user is None:
        raise UnauthenticatedError("User not found")

    return user


def get_principal(current_user: Annotated[User, Depends(get_current_user)]) -> Principal:
    """Build the request principal from the stored user row.

    Role and store are read from the database rather than the token, so an
    admin's changes apply to tokens that were issued earlier.
    """
    return Principal(
        id=current_user.id,
        role=Role(current_user.role),
        store_id=current_user.store_id,
        email=current_user.email,
    )


def require(operation: Operation) -> Callable[..., Principal]:
    """Dependency factory that authorizes the principal for an operation."""

    def dependency(principal: Annotated[Principal, Depends(get_principal)]) -> Principal:
        enforce(principal, operation)
        return principal

    return dependency


def get_aggregation_engine(
    db: Annotated[Session, Depends(get_db)],
) -> AggregationEngine:
    """Get aggregation engine bound to the request session."""
    return AggregationEngine(db)


def get_catalog_service(
    db: Annotated[Session, Depends(get_db)],
) -> CatalogService:
    """Get catalog service with dependencies."""
    return CatalogService(db, AggregationEngine(db))


def get_rating_ledger(
    db: Annotated[Session, Depends(get_db)],
) -> RatingLedger:
    """Get rating ledger bound to the request session."""
    return RatingLedger(db)


def get_directory_service(
    db: Annotated[Session, Depends(get_db)],
) -> DirectoryService:
    """Get user/store lifecycle service."""
    return DirectoryService(db)
