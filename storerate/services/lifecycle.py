"""Directory service: admin-driven lifecycle of users and stores."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storerate.errors import ConflictError, NotFoundError, ValidationError
from storerate.models.enums import Role
from storerate.models.store import Store
from storerate.models.user import User
from storerate.services.auth import get_password_hash, get_user_by_email, normalize_email

logger = logging.getLogger(__name__)


class DirectoryService:
    """Creates, updates and deletes users and stores.

    Each public method is a single transaction: it either commits every row
    it touches or rolls back and raises.
    """

    def __init__(self, db: Session):
        self.db = db

    def create_user(
        self,
        name: str,
        email: str,
        password: str,
        role: Role,
        address: str | None = None,
        store_id: int | None = None,
    ) -> User:
        """Create an account with an explicit role."""
        if get_user_by_email(self.db, email):
            raise ConflictError("User with this email already exists")

        if store_id is not None:
            if role != Role.STORE_OWNER:
                raise ValidationError("Only store owners can be associated with a store")
            self._get_store(store_id)
            self._ensure_store_has_no_owner(store_id)

        user = User(
            name=name,
            email=normalize_email(email),
            password_hash=get_password_hash(password),
            address=address,
            role=role,
            store_id=store_id,
        )
        self.db.add(user)
        self._commit("User with this email already exists")
        self.db.refresh(user)

        logger.info(f"Created user {user.id} with role {role.value}")
        return user

    def delete_user(self, user_id: int, acting_user_id: int | None = None) -> None:
        """Delete a user and, through the cascade, their ratings."""
        user = self.db.query(User).filter(User.id == user_id).first()
        if user is None:
            raise NotFoundError("User not found")
        if user_id == acting_user_id:
            raise ConflictError("You cannot delete your own account")

        self.db.delete(user)
        self.db.commit()
        logger.info(f"Deleted user {user_id}")

    def create_store(
        self,
        name: str,
        email: str,
        address: str,
        owner_name: str | None = None,
        owner_password: str | None = None,
    ) -> tuple[Store, User | None]:
        """Create a store, plus its owner account when owner details are given.

        The owner logs in with the store's email address.
        """
        email = normalize_email(email)
        if self.db.query(Store.id).filter(Store.email == email).first():
            raise ConflictError("Store with this email already exists")

        create_owner = bool(owner_name and owner_password)
        if create_owner and get_user_by_email(self.db, email):
            raise ConflictError("User with this email already exists")

        store = Store(name=name, email=email, address=address)
        self.db.add(store)
        self.db.flush()  # Get store.id

        owner = None
        if create_owner:
            owner = User(
                name=owner_name,
                email=email,
                password_hash=get_password_hash(owner_password),
                address=address,
                role=Role.STORE_OWNER,
                store_id=store.id,
            )
            self.db.add(owner)

        self._commit("Store with this email already exists")
        self.db.refresh(store)
        if owner is not None:
            self.db.refresh(owner)
            logger.info(f"Created store {store.id} with owner {owner.id}")
        else:
            logger.info(f"Created store {store.id}")
        return store, owner

    def update_store(self, store_id: int, name: str, email: str, address: str) -> Store:
        """Replace a store's name, email and address."""
        store = self._get_store(store_id)

        email = normalize_email(email)
        taken = (
            self.db.query(Store.id).filter(Store.email == email, Store.id != store_id).first()
        )
        if taken:
            raise ConflictError("Store with this email already exists")

        store.name = name
        store.email = email
        store.address = address
        self._commit("Store with this email already exists")
        self.db.refresh(store)

        logger.info(f"Updated store {store_id}")
        return store

    def delete_store(self, store_id: int) -> None:
        """Delete a store; its ratings go with it and owners lose the association."""
        store = self._get_store(store_id)
        self.db.delete(store)
        self.db.commit()
        logger.info(f"Deleted store {store_id}")

    def _get_store(self, store_id: int) -> Store:
        store = self.db.query(Store).filter(Store.id == store_id).first()
        if store is None:
            raise NotFoundError("Store not found")
        return store

    def _ensure_store_has_no_owner(self, store_id: int) -> None:
        owner = (
            self.db.query(User.id)
            .filter(User.store_id == store_id, User.role == Role.STORE_OWNER)
            .first()
        )
        if owner:
            raise ConflictError("Store already has an owner")

    def _commit(self, conflict_message: str) -> None:
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"Integrity error on commit: {e.orig}")
            raise ConflictError(conflict_message) from e
