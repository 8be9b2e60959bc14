"""Dashboard API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from storerate.api.dependencies import get_aggregation_engine, require
from storerate.config import get_settings
from storerate.schemas.common import ApiResponse
from storerate.schemas.dashboard import (
    AdminDashboardResponse,
    DistributionBucketResponse,
    RecentRatingResponse,
    StoreOwnerDashboardResponse,
    TopStoreResponse,
)
from storerate.schemas.rating import RaterResponse
from storerate.schemas.store import StoreResponse
from storerate.services.access_policy import Operation, Principal
from storerate.services.aggregation import AggregationEngine

router = APIRouter(prefix="/dashboard", tags=["dashboard"])

settings = get_settings()


@router.get("/admin", response_model=ApiResponse[AdminDashboardResponse])
def get_admin_dashboard(
    principal: Annotated[Principal, Depends(require(Operation.VIEW_ADMIN_DASHBOARD))],
    aggregation: Annotated[AggregationEngine, Depends(get_aggregation_engine)],
):
    """Platform totals, latest ratings and the best-rated stores."""
    counts = aggregation.platform_counts()
    recent = aggregation.recent_ratings(settings.recent_ratings_limit)
    top = aggregation.top_stores(settings.top_stores_limit)

    return ApiResponse(
        data=AdminDashboardResponse(
            total_users=counts.total_users,
            total_stores=counts.total_stores,
            total_ratings=counts.total_ratings,
            users_by_role=counts.users_by_role,
            recent_ratings=[RecentRatingResponse.model_validate(r) for r in recent],
            top_stores=[TopStoreResponse.model_validate(s) for s in top],
        )
    )


@router.get("/store-owner", response_model=ApiResponse[StoreOwnerDashboardResponse])
def get_store_owner_dashboard(
    principal: Annotated[Principal, Depends(require(Operation.VIEW_OWNER_DASHBOARD))],
    aggregation: Annotated[AggregationEngine, Depends(get_aggregation_engine)],
):
    """Rating summary, distribution and raters for the owner's store."""
    store_id = principal.store_id
    store = aggregation.get_store(store_id)
    summary = aggregation.store_summary(store_id)

    return ApiResponse(
        data=StoreOwnerDashboardResponse(
            store=StoreResponse.model_validate(store),
            average_rating=summary.average_rating,
            total_ratings=summary.total_ratings,
            rating_distribution=[
                DistributionBucketResponse.model_validate(bucket)
                for bucket in aggregation.rating_distribution(store_id)
            ],
            raters=[RaterResponse.model_validate(r) for r in aggregation.store_raters(store_id)],
        )
    )
