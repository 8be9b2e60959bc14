"""Store model."""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from storerate.database import Base
from storerate.models.mixins import TimestampMixin


class Store(Base, TimestampMixin):
    """Store that users can rate."""

    __tablename__ = "stores"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(60), nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)  # stored lower-cased
    address = Column(String(400), nullable=False, default="")

    # Relationships
    ratings = relationship(
        "Rating", back_populates="store", cascade="all, delete-orphan", passive_deletes=True
    )
    owners = relationship("User", back_populates="store", passive_deletes=True)
