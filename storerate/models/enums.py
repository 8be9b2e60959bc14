"""Enums for model fields."""

from enum import Enum


class Role(str, Enum):
    """Account roles."""

    ADMIN = "admin"
    USER = "user"
    STORE_OWNER = "store_owner"

    @property
    def owns_store(self) -> bool:
        """Check if this role can be associated with a store."""
        return self == Role.STORE_OWNER
