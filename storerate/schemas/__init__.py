"""Pydantic schemas for API request/response validation."""

from storerate.schemas.auth import (
    AuthData,
    LoginRequest,
    PasswordUpdateRequest,
    SignupRequest,
    UserResponse,
)
from storerate.schemas.common import ApiResponse, ErrorResponse, FieldError
from storerate.schemas.dashboard import AdminDashboardResponse, StoreOwnerDashboardResponse
from storerate.schemas.rating import (
    RaterResponse,
    RatingResponse,
    RatingSubmit,
    StoreRatingsResponse,
    UserRatingResponse,
)
from storerate.schemas.store import (
    StoreCreate,
    StoreCreatedResponse,
    StoreResponse,
    StoreUpdate,
    StoreViewResponse,
)
from storerate.schemas.user import UserCreate, UserViewResponse

__all__ = [
    "ApiResponse",
    "ErrorResponse",
    "FieldError",
    "SignupRequest",
    "LoginRequest",
    "PasswordUpdateRequest",
    "UserResponse",
    "AuthData",
    "StoreCreate",
    "StoreUpdate",
    "StoreResponse",
    "StoreCreatedResponse",
    "StoreViewResponse",
    "UserCreate",
    "UserViewResponse",
    "RatingSubmit",
    "RatingResponse",
    "UserRatingResponse",
    "RaterResponse",
    "StoreRatingsResponse",
    "AdminDashboardResponse",
    "StoreOwnerDashboardResponse",
]
