"""SQLAlchemy models."""

from storerate.models.enums import Role
from storerate.models.rating import Rating
from storerate.models.store import Store
from storerate.models.user import User

__all__ = [
    "Role",
    "User",
    "Store",
    "Rating",
]
