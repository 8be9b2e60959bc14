"""User model."""

from sqlalchemy import Column, Enum, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from storerate.database import Base
from storerate.models.enums import Role
from storerate.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """User model for authentication, roles and store ownership."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(60), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)  # stored lower-cased
    password_hash = Column(String(255), nullable=False)
    address = Column(String(400), nullable=True)
    role = Column(
        Enum(
            Role,
            name="user_role",
            native_enum=False,
            length=20,
            values_callable=lambda roles: [r.value for r in roles],
        ),
        nullable=False,
        default=Role.USER,
        index=True,
    )
    # Only meaningful for store owners
    store_id = Column(
        Integer, ForeignKey("stores.id", ondelete="SET NULL"), nullable=True, index=True
    )

    # Relationships
    store = relationship("Store", back_populates="owners")
    ratings = relationship(
        "Rating", back_populates="user", cascade="all, delete-orphan", passive_deletes=True
    )
