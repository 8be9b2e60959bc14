"""Rating schemas."""

from datetime import datetime

from pydantic import Field

from storerate.schemas.common import CamelModel, RecordId


class RatingSubmit(CamelModel):
    """Submit or update a rating."""

    store_id: RecordId
    rating: int = Field(..., ge=1, le=5)


class RatingResponse(CamelModel):
    """A stored rating."""

    id: int
    user_id: int
    store_id: int
    rating: int
    created_at: datetime
    updated_at: datetime


class UserRatingResponse(CamelModel):
    """The current user's rating for a store, or null."""

    rating: int | None = None


class RaterResponse(CamelModel):
    """A rating together with who submitted it."""

    rating_id: int
    user_id: int
    name: str
    email: str
    rating: int = Field(validation_alias="value")
    created_at: datetime
    updated_at: datetime


class StoreRatingsResponse(CamelModel):
    """All ratings for the store owner's store."""

    store_id: int
    average_rating: float
    total_ratings: int
    ratings: list[RaterResponse]
