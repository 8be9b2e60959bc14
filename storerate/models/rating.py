"""Rating model."""

from sqlalchemy import CheckConstraint, Column, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import relationship

from storerate.database import Base
from storerate.models.mixins import TimestampMixin

MIN_RATING = 1
MAX_RATING = 5


class Rating(Base, TimestampMixin):
    """A single user's 1-5 star rating of a store."""

    __tablename__ = "ratings"
    __table_args__ = (
        UniqueConstraint("user_id", "store_id", name="uq_ratings_user_store"),
        CheckConstraint(
            f"value >= {MIN_RATING} AND value <= {MAX_RATING}", name="ck_ratings_value_range"
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    store_id = Column(
        Integer, ForeignKey("stores.id", ondelete="CASCADE"), nullable=False, index=True
    )
    value = Column(Integer, nullable=False)

    # Relationships
    user = relationship("User", back_populates="ratings")
    store = relationship("Store", back_populates="ratings")
