"""Dashboard schemas."""

from datetime import datetime

from pydantic import Field

from storerate.schemas.common import CamelModel
from storerate.schemas.rating import RaterResponse
from storerate.schemas.store import StoreResponse


class RecentRatingResponse(CamelModel):
    id: int
    rating: int = Field(validation_alias="value")
    created_at: datetime
    user_id: int
    user_name: str
    store_id: int
    store_name: str


class TopStoreResponse(CamelModel):
    store_id: int
    name: str
    address: str
    average_rating: float
    total_ratings: int


class DistributionBucketResponse(CamelModel):
    rating: int = Field(validation_alias="value")
    count: int


class AdminDashboardResponse(CamelModel):
    """Platform-wide totals for administrators."""

    total_users: int
    total_stores: int
    total_ratings: int
    users_by_role: dict[str, int]
    recent_ratings: list[RecentRatingResponse]
    top_stores: list[TopStoreResponse]


class StoreOwnerDashboardResponse(CamelModel):
    """Feedback summary for a store owner's store."""

    store: StoreResponse
    average_rating: float
    total_ratings: int
    rating_distribution: list[DistributionBucketResponse]
    raters: list[RaterResponse]
