"""Repository for User database operations."""

import logging
from typing import List, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from cadastro_usuarios.models.user import User, UserIn, UserFilter
from cadastro_usuarios.database.models import UserDB

logger = logging.getLogger(__name__)


class UserNotFoundError(LookupError):
    """Raised when an update or delete targets an id with no row."""

    def __init__(self, user_id: int):
        super().__init__(f"User {user_id} not found")
        self.user_id = user_id


class StoreError(RuntimeError):
    """Raised when the underlying store fails (connectivity, constraints)."""


class UserRepository:
    """Repository for User database operations."""

    def __init__(self, db: Session):
        self.db = db

    def _get_row(self, user_id: int) -> Optional[UserDB]:
        try:
            return self.db.query(UserDB).filter(UserDB.id == user_id).first()
        except SQLAlchemyError as e:
            logger.error(f"Failed to look up user {user_id}: {type(e).__name__}: {str(e)}")
            raise StoreError(str(e)) from e

    def create(self, user_in: UserIn) -> User:
        """Insert a new user and return the persisted row."""
        try:
            user_db = UserDB.from_pydantic(user_in)
            self.db.add(user_db)
            self.db.commit()
            self.db.refresh(user_db)
            logger.debug(f"Created user {user_db.id}: {user_db.email}")
            return user_db.to_pydantic()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to create user {user_in.email}: {type(e).__name__}: {str(e)}")
            raise StoreError(str(e)) from e

    def get(self, user_id: int) -> Optional[User]:
        """Get user by ID."""
        user_db = self._get_row(user_id)
        return user_db.to_pydantic() if user_db else None

    def find_many(self, filters: Optional[UserFilter] = None) -> List[User]:
        """List users, optionally narrowed by exact-match filters.

        Supplied filters are combined with AND; omitted ones do not filter.
        """
        criteria = filters.as_criteria() if filters else {}
        try:
            users_db = self.db.query(UserDB).filter_by(**criteria).order_by(UserDB.id).all()
        except SQLAlchemyError as e:
            logger.error(f"Failed to list users {criteria}: {type(e).__name__}: {str(e)}")
            raise StoreError(str(e)) from e
        return [user_db.to_pydantic() for user_db in users_db]

    def update(self, user_id: int, user_in: UserIn) -> User:
        """Replace name, email and age of an existing user."""
        user_db = self._get_row(user_id)
        if not user_db:
            raise UserNotFoundError(user_id)

        user_db.email = user_in.email
        user_db.name = user_in.name
        user_db.age = user_in.age
        try:
            self.db.commit()
            self.db.refresh(user_db)
            logger.debug(f"Updated user {user_id}: {user_in.email}")
            return user_db.to_pydantic()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to update user {user_id}: {type(e).__name__}: {str(e)}")
            raise StoreError(str(e)) from e

    def delete(self, user_id: int) -> None:
        """Remove a user by ID."""
        user_db = self._get_row(user_id)
        if not user_db:
            raise UserNotFoundError(user_id)

        try:
            self.db.delete(user_db)
            self.db.commit()
            logger.debug(f"Deleted user {user_id}")
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to delete user {user_id}: {type(e).__name__}: {str(e)}")
            raise StoreError(str(e)) from e
