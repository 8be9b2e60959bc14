"""Store schemas."""

from pydantic import EmailStr, Field

from storerate.schemas.common import AddressStr, CamelModel, NameStr, PasswordStr


class StoreCreate(CamelModel):
    """Create a store, optionally with an owner account."""

    name: NameStr
    email: EmailStr = Field(..., max_length=255)
    address: AddressStr = ""
    owner_name: NameStr | None = None
    owner_password: PasswordStr | None = None


class StoreUpdate(CamelModel):
    """Replace a store's fields."""

    name: NameStr
    email: EmailStr = Field(..., max_length=255)
    address: AddressStr = ""


class StoreResponse(CamelModel):
    """Store fields without rating data."""

    id: int
    name: str
    email: str
    address: str


class StoreCreatedResponse(StoreResponse):
    """Newly created store and the owner account created with it, if any."""

    owner_id: int | None = None


class StoreViewResponse(StoreResponse):
    """Store with its rating summary and the viewer's own rating."""

    average_rating: float
    total_ratings: int
    user_rating: int | None = None
