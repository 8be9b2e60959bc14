"""User management API endpoints (admin only)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from storerate.api.dependencies import (
    RecordIdPath,
    get_catalog_service,
    get_directory_service,
    require,
)
from storerate.models.enums import Role
from storerate.schemas.auth import UserResponse
from storerate.schemas.common import ApiResponse
from storerate.schemas.user import UserCreate, UserViewResponse
from storerate.services.access_policy import Operation, Principal
from storerate.services.catalog import CatalogService, SortSpec, UserFilter
from storerate.services.lifecycle import DirectoryService

router = APIRouter(prefix="/users", tags=["users"])

AdminPrincipal = Annotated[Principal, Depends(require(Operation.MANAGE_USERS))]


@router.get("", response_model=ApiResponse[list[UserViewResponse]])
def list_users(
    principal: AdminPrincipal,
    catalog: Annotated[CatalogService, Depends(get_catalog_service)],
    name: str | None = None,
    email: str | None = None,
    address: str | None = None,
    role: Role | None = None,
    sort_by: Annotated[str | None, Query(alias="sortBy")] = None,
    sort_order: Annotated[str | None, Query(alias="sortOrder")] = None,
):
    """List users filtered by name/email/address/role and sorted."""
    users = catalog.list_users(
        UserFilter(name=name, email=email, address=address, role=role),
        SortSpec(field=sort_by, order=sort_order),
    )
    data = [UserViewResponse.model_validate(user) for user in users]
    return ApiResponse(count=len(data), data=data)


@router.get("/{user_id}", response_model=ApiResponse[UserViewResponse])
def get_user(
    user_id: RecordIdPath,
    principal: AdminPrincipal,
    catalog: Annotated[CatalogService, Depends(get_catalog_service)],
):
    """Get a single user."""
    return ApiResponse(data=UserViewResponse.model_validate(catalog.get_user(user_id)))


@router.post("", response_model=ApiResponse[UserResponse], status_code=status.HTTP_201_CREATED)
def create_user(
    user_data: UserCreate,
    principal: AdminPrincipal,
    directory: Annotated[DirectoryService, Depends(get_directory_service)],
):
    """Create a user with any role."""
    user = directory.create_user(
        name=user_data.name,
        email=user_data.email,
        password=user_data.password,
        role=user_data.role,
        address=user_data.address,
        store_id=user_data.store_id,
    )
    return ApiResponse(message="User created successfully", data=UserResponse.model_validate(user))


@router.delete("/{user_id}", response_model=ApiResponse[None])
def delete_user(
    user_id: RecordIdPath,
    principal: AdminPrincipal,
    directory: Annotated[DirectoryService, Depends(get_directory_service)],
):
    """Delete a user and their ratings."""
    directory.delete_user(user_id, acting_user_id=principal.id)
    return ApiResponse(message="User deleted successfully")
