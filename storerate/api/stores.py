"""Store API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from storerate.api.dependencies import (
    RecordIdPath,
    get_catalog_service,
    get_directory_service,
    require,
)
from storerate.schemas.common import ApiResponse
from storerate.schemas.store import (
    StoreCreate,
    StoreCreatedResponse,
    StoreResponse,
    StoreUpdate,
    StoreViewResponse,
)
from storerate.services.access_policy import Operation, Principal
from storerate.services.catalog import CatalogService, SortSpec, StoreFilter
from storerate.services.lifecycle import DirectoryService

router = APIRouter(prefix="/stores", tags=["stores"])


@router.get("", response_model=ApiResponse[list[StoreViewResponse]])
def list_stores(
    principal: Annotated[Principal, Depends(require(Operation.BROWSE_STORES))],
    catalog: Annotated[CatalogService, Depends(get_catalog_service)],
    name: str | None = None,
    address: str | None = None,
    sort_by: Annotated[str | None, Query(alias="sortBy")] = None,
    sort_order: Annotated[str | None, Query(alias="sortOrder")] = None,
):
    """List stores with ratings, filtered by name/address and sorted."""
    stores = catalog.list_stores(
        StoreFilter(name=name, address=address),
        SortSpec(field=sort_by, order=sort_order),
        viewer_id=principal.id,
    )
    data = [StoreViewResponse.model_validate(store) for store in stores]
    return ApiResponse(count=len(data), data=data)


@router.get("/{store_id}", response_model=ApiResponse[StoreViewResponse])
def get_store(
    store_id: RecordIdPath,
    principal: Annotated[Principal, Depends(require(Operation.READ_STORE))],
    catalog: Annotated[CatalogService, Depends(get_catalog_service)],
):
    """Get a single store with its rating summary."""
    store = catalog.get_store(store_id, viewer_id=principal.id)
    return ApiResponse(data=StoreViewResponse.model_validate(store))


@router.post(
    "", response_model=ApiResponse[StoreCreatedResponse], status_code=status.HTTP_201_CREATED
)
def create_store(
    store_data: StoreCreate,
    principal: Annotated[Principal, Depends(require(Operation.MANAGE_STORES))],
    directory: Annotated[DirectoryService, Depends(get_directory_service)],
):
    """Create a store, and its owner account when owner details are supplied (admin only)."""
    store, owner = directory.create_store(
        name=store_data.name,
        email=store_data.email,
        address=store_data.address,
        owner_name=store_data.owner_name,
        owner_password=store_data.owner_password,
    )

    response = StoreCreatedResponse.model_validate(store)
    response.owner_id = owner.id if owner else None
    return ApiResponse(message="Store created successfully", data=response)


@router.put("/{store_id}", response_model=ApiResponse[StoreResponse])
def update_store(
    store_id: RecordIdPath,
    store_data: StoreUpdate,
    principal: Annotated[Principal, Depends(require(Operation.MANAGE_STORES))],
    directory: Annotated[DirectoryService, Depends(get_directory_service)],
):
    """Update a store's fields (admin only)."""
    store = directory.update_store(
        store_id, name=store_data.name, email=store_data.email, address=store_data.address
    )
    return ApiResponse(
        message="Store updated successfully", data=StoreResponse.model_validate(store)
    )


@router.delete("/{store_id}", response_model=ApiResponse[None])
def delete_store(
    store_id: RecordIdPath,
    principal: Annotated[Principal, Depends(require(Operation.MANAGE_STORES))],
    directory: Annotated[DirectoryService, Depends(get_directory_service)],
):
    """Delete a store and all of its ratings (admin only)."""
    directory.delete_store(store_id)
    return ApiResponse(message="Store deleted successfully")
