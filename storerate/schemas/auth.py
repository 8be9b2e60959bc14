"""Authentication schemas."""

from pydantic import EmailStr, Field

from storerate.models.enums import Role
from storerate.schemas.common import AddressStr, CamelModel, NameStr, PasswordStr


class SignupRequest(CamelModel):
    """Self-service registration request."""

    name: NameStr
    email: EmailStr = Field(..., max_length=255)
    password: PasswordStr
    address: AddressStr | None = None


class LoginRequest(CamelModel):
    """Login request."""

    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=1, max_length=128)


class PasswordUpdateRequest(CamelModel):
    """Change the current user's password."""

    current_password: str = Field(..., min_length=1, max_length=128)
    new_password: PasswordStr


class UserResponse(CamelModel):
    """User information response."""

    id: int
    name: str
    email: str
    address: str | None = None
    role: Role
    store_id: int | None = None


class AuthData(CamelModel):
    """Authenticated user and bearer token."""

    user: UserResponse
    token: str
    token_type: str = "bearer"  # noqa: S105
