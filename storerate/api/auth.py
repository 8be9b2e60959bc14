"""Authentication API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from storerate.api.dependencies import get_current_user, get_principal
from storerate.database import get_db
from storerate.errors import UnauthenticatedError
from storerate.models.user import User
from storerate.schemas.auth import (
    AuthData,
    LoginRequest,
    PasswordUpdateRequest,
    SignupRequest,
    UserResponse,
)
from storerate.schemas.common import ApiResponse
from storerate.services.access_policy import Operation, Principal, Target, enforce
from storerate.services.auth import (
    authenticate_user,
    change_password,
    create_access_token,
    register_user,
)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/signup", response_model=ApiResponse[AuthData], status_code=status.HTTP_201_CREATED
)
def signup(
    user_data: SignupRequest,
    db: Annotated[Session, Depends(get_db)],
):
    """Register a new user. Self-registered accounts always get the user role."""
    user = register_user(
        db,
        name=user_data.name,
        email=user_data.email,
        password=user_data.password,
        address=user_data.address,
    )

    return ApiResponse(
        message="User registered successfully",
        data=AuthData(token=create_access_token(user), user=UserResponse.model_validate(user)),
    )


@router.post("/login", response_model=ApiResponse[AuthData])
def login(
    credentials: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
):
    """Login with email and password."""
    user = authenticate_user(db, credentials.email, credentials.password)
    if not user:
        raise UnauthenticatedError("Invalid credentials")

    return ApiResponse(
        message="Login successful",
        data=AuthData(token=create_access_token(user), user=UserResponse.model_validate(user)),
    )


@router.get("/me", response_model=ApiResponse[UserResponse])
def get_me(
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Get current user information."""
    return ApiResponse(data=UserResponse.model_validate(current_user))


@router.put("/update-password", response_model=ApiResponse[None])
def update_password(
    passwords: PasswordUpdateRequest,
    principal: Annotated[Principal, Depends(get_principal)],
    db: Annotated[Session, Depends(get_db)],
):
    """Change the current user's password."""
    enforce(principal, Operation.UPDATE_OWN_PASSWORD, Target(user_id=principal.id))
    change_password(db, principal.id, passwords.current_password, passwords.new_password)
    return ApiResponse(message="Password updated successfully")
