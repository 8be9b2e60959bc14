"""User management schemas."""

from pydantic import EmailStr, Field

from storerate.models.enums import Role
from storerate.schemas.common import AddressStr, CamelModel, NameStr, PasswordStr, RecordId


class UserCreate(CamelModel):
    """Admin-created account with an explicit role."""

    name: NameStr
    email: EmailStr = Field(..., max_length=255)
    password: PasswordStr
    address: AddressStr | None = None
    role: Role
    store_id: RecordId | None = None


class UserViewResponse(CamelModel):
    """User row as shown to admins."""

    id: int
    name: str
    email: str
    address: str | None = None
    role: Role
    store_id: int | None = None
    store_name: str | None = None
    average_rating: float | None = None
