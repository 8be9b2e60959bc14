"""Aggregation engine: read-only rollups over ratings."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from sqlalchemy import func
from sqlalchemy.orm import Session

from storerate.errors import NotFoundError
from storerate.models.enums import Role
from storerate.models.rating import MAX_RATING, MIN_RATING, Rating
from storerate.models.store import Store
from storerate.models.user import User


@dataclass(frozen=True)
class StoreSummary:
    average_rating: float
    total_ratings: int


@dataclass(frozen=True)
class DistributionBucket:
    value: int
    count: int


@dataclass(frozen=True)
class TopStore:
    store_id: int
    name: str
    address: str
    average_rating: float
    total_ratings: int


@dataclass(frozen=True)
class PlatformCounts:
    total_users: int
    total_stores: int
    total_ratings: int
    users_by_role: dict[str, int]


@dataclass(frozen=True)
class RecentRating:
    id: int
    value: int
    created_at: datetime
    user_id: int
    user_name: str
    store_id: int
    store_name: str


@dataclass(frozen=True)
class RaterEntry:
    rating_id: int
    user_id: int
    name: str
    email: str
    value: int
    created_at: datetime
    updated_at: datetime


def round_average(value: float | Decimal | None) -> float:
    """Round an SQL AVG result for display; no ratings means 0."""
    if value is None:
        return 0.0
    return round(float(value), 2)


class AggregationEngine:
    """Computes rating rollups for a store, a set of stores, or the platform.

    Nothing is cached: every call reads the current database state, so a
    rating written earlier in the same session is always reflected.
    """

    def __init__(self, db: Session):
        self.db = db

    def summary_subquery(self):
        """Per-store average and count, for joining into larger queries.

        Stores without ratings have no row; callers outer-join and coalesce.
        """
        return (
            self.db.query(
                Rating.store_id.label("store_id"),
                func.avg(Rating.value).label("average_rating"),
                func.count(Rating.id).label("total_ratings"),
            )
            .group_by(Rating.store_id)
            .subquery()
        )

    def store_summary(self, store_id: int) -> StoreSummary:
        """Average rating and rating count for one store."""
        self.get_store(store_id)

        average, total = (
            self.db.query(func.avg(Rating.value), func.count(Rating.id))
            .filter(Rating.store_id == store_id)
            .one()
        )
        return StoreSummary(average_rating=round_average(average), total_ratings=total or 0)

    def rating_distribution(self, store_id: int) -> list[DistributionBucket]:
        """Count of ratings per star value, highest value first.

        Every value from 5 down to 1 is present, with zero counts filled in.
        """
        self.get_store(store_id)

        rows = (
            self.db.query(Rating.value, func.count(Rating.id))
            .filter(Rating.store_id == store_id)
            .group_by(Rating.value)
            .all()
        )
        counts = dict(rows)
        return [
            DistributionBucket(value=value, count=counts.get(value, 0))
            for value in range(MAX_RATING, MIN_RATING - 1, -1)
        ]

    def top_stores(self, limit: int) -> list[TopStore]:
        """Best-rated stores that have at least one rating."""
        if limit <= 0:
            return []

        summary = self.summary_subquery()
        rows = (
            self.db.query(
                Store.id,
                Store.name,
                Store.address,
                summary.c.average_rating,
                summary.c.total_ratings,
            )
            .join(summary, summary.c.store_id == Store.id)
            .filter(summary.c.total_ratings > 0)
            .order_by(summary.c.average_rating.desc(), Store.id.asc())
            .limit(limit)
            .all()
        )
        return [
            TopStore(
                store_id=store_id,
                name=name,
                address=address,
                average_rating=round_average(average),
                total_ratings=total,
            )
            for store_id, name, address, average, total in rows
        ]

    def platform_counts(self) -> PlatformCounts:
        """Totals across the whole platform, with users broken down by role."""
        total_users = self.db.query(func.count(User.id)).scalar() or 0
        total_stores = self.db.query(func.count(Store.id)).scalar() or 0
        total_ratings = self.db.query(func.count(Rating.id)).scalar() or 0

        users_by_role = {role.value: 0 for role in Role}
        for role, count in self.db.query(User.role, func.count(User.id)).group_by(User.role):
            users_by_role[Role(role).value] = count

        return PlatformCounts(
            total_users=total_users,
            total_stores=total_stores,
            total_ratings=total_ratings,
            users_by_role=users_by_role,
        )

    def recent_ratings(self, limit: int) -> list[RecentRating]:
        """Most recently created ratings across all stores."""
        rows = (
            self.db.query(
                Rating.id,
                Rating.value,
                Rating.created_at,
                User.id,
                User.name,
                Store.id,
                Store.name,
            )
            .join(User, Rating.user_id == User.id)
            .join(Store, Rating.store_id == Store.id)
            .order_by(Rating.created_at.desc(), Rating.id.desc())
            .limit(limit)
            .all()
        )
        return [
            RecentRating(
                id=rating_id,
                value=value,
                created_at=created_at,
                user_id=user_id,
                user_name=user_name,
                store_id=store_id,
                store_name=store_name,
            )
            for rating_id, value, created_at, user_id, user_name, store_id, store_name in rows
        ]

    def store_raters(self, store_id: int) -> list[RaterEntry]:
        """Every rating for a store together with who submitted it, newest first."""
        self.get_store(store_id)

        rows = (
            self.db.query(Rating, User)
            .join(User, Rating.user_id == User.id)
            .filter(Rating.store_id == store_id)
            .order_by(Rating.created_at.desc(), Rating.id.desc())
            .all()
        )
        return [
            RaterEntry(
                rating_id=rating.id,
                user_id=user.id,
                name=user.name,
                email=user.email,
                value=rating.value,
                created_at=rating.created_at,
                updated_at=rating.updated_at,
            )
            for rating, user in rows
        ]

    def get_store(self, store_id: int) -> Store:
        """Get a store or raise NotFoundError."""
        store = self.db.query(Store).filter(Store.id == store_id).first()
        if store is None:
            raise NotFoundError("Store not found")
        return store
