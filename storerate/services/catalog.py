"""Catalog service: filtered, sorted store and user listings with rollups."""

from dataclasses import dataclass

from sqlalchemy import and_, func
from sqlalchemy.orm import Session, aliased

from storerate.errors import NotFoundError
from storerate.models.enums import Role
from storerate.models.rating import Rating
from storerate.models.store import Store
from storerate.models.user import User
from storerate.services.aggregation import AggregationEngine, round_average

DEFAULT_SORT_FIELD = "name"


@dataclass(frozen=True)
class SortSpec:
    """Requested sort; unknown fields and orders fall back to name ascending."""

    field: str | None = None
    order: str | None = None

    @property
    def descending(self) -> bool:
        return (self.order or "").lower() == "desc"


@dataclass(frozen=True)
class StoreFilter:
    name: str | None = None
    address: str | None = None


@dataclass(frozen=True)
class UserFilter:
    name: str | None = None
    email: str | None = None
    address: str | None = None
    role: Role | None = None


@dataclass(frozen=True)
class StoreView:
    id: int
    name: str
    email: str
    address: str
    average_rating: float
    total_ratings: int
    user_rating: int | None


@dataclass(frozen=True)
class UserView:
    id: int
    name: str
    email: str
    address: str | None
    role: Role
    store_id: int | None
    store_name: str | None
    average_rating: float | None


def _contains(column, text: str | None):
    """Case-insensitive literal substring match, or None when no filter was given."""
    if not text:
        return None
    return column.icontains(text, autoescape=True)


def _order_by(sort: SortSpec, columns: dict, tiebreaker):
    column = columns.get(sort.field or DEFAULT_SORT_FIELD, columns[DEFAULT_SORT_FIELD])
    primary = column.desc() if sort.descending else column.asc()
    return primary, tiebreaker.asc()


class CatalogService:
    """Read-side listings composed from the data store and the aggregation engine."""

    def __init__(self, db: Session, aggregation: AggregationEngine | None = None):
        self.db = db
        self.aggregation = aggregation or AggregationEngine(db)

    def list_stores(
        self,
        filters: StoreFilter | None = None,
        sort: SortSpec | None = None,
        viewer_id: int | None = None,
    ) -> list[StoreView]:
        """List stores with their rating summary and the viewer's own rating."""
        filters = filters or StoreFilter()
        sort = sort or SortSpec()

        query, average = self._store_query(viewer_id)
        conditions = [
            c
            for c in (_contains(Store.name, filters.name), _contains(Store.address, filters.address))
            if c is not None
        ]
        if conditions:
            query = query.filter(and_(*conditions))

        sort_columns = {
            "name": Store.name,
            "email": Store.email,
            "address": Store.address,
            "averageRating": average,
            "average_rating": average,
        }
        query = query.order_by(*_order_by(sort, sort_columns, Store.id))

        return [self._store_view(*row) for row in query.all()]

    def get_store(self, store_id: int, viewer_id: int | None = None) -> StoreView:
        """Get a single store view."""
        query, _ = self._store_query(viewer_id)
        row = query.filter(Store.id == store_id).first()
        if row is None:
            raise NotFoundError("Store not found")
        return self._store_view(*row)

    def list_users(
        self,
        filters: UserFilter | None = None,
        sort: SortSpec | None = None,
    ) -> list[UserView]:
        """List users; store owners carry their store's average rating."""
        filters = filters or UserFilter()
        sort = sort or SortSpec()

        query = self._user_query()
        conditions = [
            c
            for c in (
                _contains(User.name, filters.name),
                _contains(User.email, filters.email),
                _contains(User.address, filters.address),
            )
            if c is not None
        ]
        if filters.role is not None:
            conditions.append(User.role == filters.role)
        if conditions:
            query = query.filter(and_(*conditions))

        sort_columns = {
            "name": User.name,
            "email": User.email,
            "address": User.address,
            "role": User.role,
        }
        query = query.order_by(*_order_by(sort, sort_columns, User.id))

        return [self._user_view(*row) for row in query.all()]

    def get_user(self, user_id: int) -> UserView:
        """Get a single user view."""
        row = self._user_query().filter(User.id == user_id).first()
        if row is None:
            raise NotFoundError("User not found")
        return self._user_view(*row)

    def _store_query(self, viewer_id: int | None):
        summary = self.aggregation.summary_subquery()
        viewer_rating = aliased(Rating)
        average = func.coalesce(summary.c.average_rating, 0)

        query = (
            self.db.query(
                Store,
                average,
                func.coalesce(summary.c.total_ratings, 0),
                viewer_rating.value,
            )
            .outerjoin(summary, summary.c.store_id == Store.id)
            .outerjoin(
                viewer_rating,
                and_(viewer_rating.store_id == Store.id, viewer_rating.user_id == viewer_id),
            )
        )
        return query, average

    def _user_query(self):
        summary = self.aggregation.summary_subquery()
        return (
            self.db.query(User, Store.name, summary.c.average_rating)
            .outerjoin(Store, User.store_id == Store.id)
            .outerjoin(summary, summary.c.store_id == Store.id)
        )

    @staticmethod
    def _store_view(store: Store, average, total, user_rating) -> StoreView:
        return StoreView(
            id=store.id,
            name=store.name,
            email=store.email,
            address=store.address,
            average_rating=round_average(average),
            total_ratings=int(total or 0),
            user_rating=user_rating,
        )

    @staticmethod
    def _user_view(user: User, store_name: str | None, average) -> UserView:
        owns_store = user.role == Role.STORE_OWNER and user.store_id is not None
        return UserView(
            id=user.id,
            name=user.name,
            email=user.email,
            address=user.address,
            role=user.role,
            store_id=user.store_id,
            store_name=store_name,
            average_rating=round_average(average) if owns_store else None,
        )
