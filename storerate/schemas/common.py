"""Shared schema building blocks: envelope, camelCase base and field rules."""

import re
from typing import Annotated, Generic, TypeVar

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, StringConstraints
from pydantic.alias_generators import to_camel

T = TypeVar("T")

PASSWORD_SPECIAL_CHARACTERS = "!@#$%^&*"
_UPPERCASE = re.compile(r"[A-Z]")
_SPECIAL = re.compile(f"[{re.escape(PASSWORD_SPECIAL_CHARACTERS)}]")


def check_password_strength(value: str) -> str:
    """Require at least one uppercase letter and one special character."""
    if not _UPPERCASE.search(value) or not _SPECIAL.search(value):
        raise ValueError(
            "Password must contain at least one uppercase letter and one special character"
        )
    return value


NameStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=20, max_length=60)]
AddressStr = Annotated[str, StringConstraints(strip_whitespace=True, max_length=400)]
PasswordStr = Annotated[
    str,
    StringConstraints(min_length=8, max_length=16),
    AfterValidator(check_password_strength),
]

# Primary keys are INTEGER columns; larger values never reach the driver.
MAX_RECORD_ID = 2**31 - 1
RecordId = Annotated[int, Field(gt=0, le=MAX_RECORD_ID)]


class CamelModel(BaseModel):
    """Base schema exchanged as camelCase JSON; snake_case is accepted on input too."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ApiResponse(BaseModel, Generic[T]):
    """Response envelope shared by every endpoint."""

    success: bool = True
    message: str | None = None
    count: int | None = None
    data: T | None = None


class FieldError(BaseModel):
    field: str
    message: str


class ErrorResponse(BaseModel):
    """Envelope for failed requests."""

    success: bool = False
    message: str
    error: str
    errors: list[FieldError] | None = None
