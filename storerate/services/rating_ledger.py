"""Rating ledger: create, update and delete a user's rating for a store."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storerate.errors import InvalidRatingValue, NotFoundError
from storerate.models.rating import MAX_RATING, MIN_RATING, Rating
from storerate.models.store import Store

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubmitResult:
    """Stored rating plus whether this submission created it."""

    rating: Rating
    created: bool


def validate_rating_value(value) -> int:
    """Return value if it is an integer star rating, else raise."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidRatingValue(f"Rating must be an integer between {MIN_RATING} and {MAX_RATING}")
    if not MIN_RATING <= value <= MAX_RATING:
        raise InvalidRatingValue(f"Rating must be between {MIN_RATING} and {MAX_RATING}")
    return value


class RatingLedger:
    """Owns the one-rating-per-(user, store) invariant.

    Aggregates are never cached, so there is nothing to invalidate after a
    write: the next read from AggregationEngine sees the committed row.
    """

    def __init__(self, db: Session):
        self.db = db

    def submit(self, user_id: int, store_id: int, value: int) -> SubmitResult:
        """Create the user's rating for a store, or overwrite the existing one."""
        validate_rating_value(value)

        store = self.db.query(Store.id).filter(Store.id == store_id).first()
        if store is None:
            raise NotFoundError("Store not found")

        rating = self.get_for_user_and_store(user_id, store_id)
        created = False

        if rating is None:
            rating = Rating(user_id=user_id, store_id=store_id, value=value)
            try:
                with self.db.begin_nested():
                    self.db.add(rating)
                    self.db.flush()
                created = True
            except IntegrityError:
                # Another request inserted the row first; overwrite its value.
                logger.info(f"Concurrent insert for user {user_id} store {store_id}, updating")
                rating = self.get_for_user_and_store(user_id, store_id)
                if rating is None:
                    raise

        if not created:
            rating.value = value
            rating.updated_at = datetime.now(UTC)

        self.db.commit()
        self.db.refresh(rating)

        action = "Created" if created else "Updated"
        logger.info(f"{action} rating {rating.id}: user {user_id} store {store_id} value {value}")
        return SubmitResult(rating=rating, created=created)

    def get_for_user_and_store(self, user_id: int, store_id: int) -> Rating | None:
        """Get the user's rating for a store, if any."""
        return (
            self.db.query(Rating)
            .filter(Rating.user_id == user_id, Rating.store_id == store_id)
            .first()
        )

    def delete(self, user_id: int, store_id: int) -> None:
        """Delete the user's rating for a store."""
        rating = self.get_for_user_and_store(user_id, store_id)
        if rating is None:
            raise NotFoundError("Rating not found")

        rating_id = rating.id
        self.db.delete(rating)
        self.db.commit()
        logger.info(f"Deleted rating {rating_id}: user {user_id} store {store_id}")
