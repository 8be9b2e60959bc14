"""Rating API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from storerate.api.dependencies import (
    RecordIdPath,
    get_aggregation_engine,
    get_rating_ledger,
    require,
)
from storerate.schemas.common import ApiResponse
from storerate.schemas.rating import (
    RaterResponse,
    RatingResponse,
    RatingSubmit,
    StoreRatingsResponse,
    UserRatingResponse,
)
from storerate.services.access_policy import Operation, Principal
from storerate.services.aggregation import AggregationEngine
from storerate.services.rating_ledger import RatingLedger

router = APIRouter(prefix="/ratings", tags=["ratings"])


@router.post("", response_model=ApiResponse[RatingResponse], status_code=status.HTTP_201_CREATED)
def submit_rating(
    rating_data: RatingSubmit,
    response: Response,
    principal: Annotated[Principal, Depends(require(Operation.SUBMIT_RATING))],
    ledger: Annotated[RatingLedger, Depends(get_rating_ledger)],
):
    """Submit a rating, or update the existing one for the same store."""
    result = ledger.submit(principal.id, rating_data.store_id, rating_data.rating)

    if result.created:
        message = "Rating submitted successfully"
    else:
        response.status_code = status.HTTP_200_OK
        message = "Rating updated successfully"

    rating = result.rating
    return ApiResponse(
        message=message,
        data=RatingResponse(
            id=rating.id,
            user_id=rating.user_id,
            store_id=rating.store_id,
            rating=rating.value,
            created_at=rating.created_at,
            updated_at=rating.updated_at,
        ),
    )


@router.get("/my-store", response_model=ApiResponse[StoreRatingsResponse])
def get_my_store_ratings(
    principal: Annotated[Principal, Depends(require(Operation.READ_OWN_STORE_RATINGS))],
    aggregation: Annotated[AggregationEngine, Depends(get_aggregation_engine)],
):
    """All ratings for the store owner's own store.

    The store always comes from the principal; there is no way to ask for
    another store here.
    """
    store_id = principal.store_id
    summary = aggregation.store_summary(store_id)
    raters = aggregation.store_raters(store_id)

    return ApiResponse(
        data=StoreRatingsResponse(
            store_id=store_id,
            average_rating=summary.average_rating,
            total_ratings=summary.total_ratings,
            ratings=[RaterResponse.model_validate(rater) for rater in raters],
        )
    )


@router.get("/store/{store_id}", response_model=ApiResponse[UserRatingResponse])
def get_user_rating_for_store(
    store_id: RecordIdPath,
    principal: Annotated[Principal, Depends(require(Operation.READ_OWN_RATING))],
    ledger: Annotated[RatingLedger, Depends(get_rating_ledger)],
):
    """The current user's rating for a store, or null when they have not rated it."""
    rating = ledger.get_for_user_and_store(principal.id, store_id)
    return ApiResponse(data=UserRatingResponse(rating=rating.value if rating else None))


@router.delete("/store/{store_id}", response_model=ApiResponse[None])
def delete_rating(
    store_id: RecordIdPath,
    principal: Annotated[Principal, Depends(require(Operation.DELETE_OWN_RATING))],
    ledger: Annotated[RatingLedger, Depends(get_rating_ledger)],
):
    """Delete the current user's rating for a store."""
    ledger.delete(principal.id, store_id)
    return ApiResponse(message="Rating deleted successfully")
