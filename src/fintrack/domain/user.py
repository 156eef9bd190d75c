"""User domain service."""

import logging
from typing import Optional
from uuid import UUID

from fintrack.database.base import Database
from fintrack.domain.entities import User
from fintrack.domain.errors import (
    ConflictError,
    NotFoundError,
    duplicate_user_email,
    user_not_found,
)

logger = logging.getLogger(__name__)


class UserService:
    """Service for managing users."""

    def __init__(self, db: Database):
        """Initialize user service.

        Args:
            db: Database instance
        """
        self.db = db

    def register_user(
        self, email: str, password_hash: str, first_name: str, last_name: str
    ) -> User:
        """Create and store a new user.

        Args:
            email: Email address (stored trimmed and lowercased)
            password_hash: Pre-computed password hash
            first_name: First name
            last_name: Last name

        Returns:
            The new user, active and with an unconfirmed email

        Raises:
            ValidationError: If any field is invalid
            ConflictError: If the email is already registered
        """
        user = User.create(email, password_hash, first_name, last_name)
        if self.db.get_user_by_email(user.email) is not None:
            raise ConflictError(duplicate_user_email(user.email))
        self.db.save_user(user)
        logger.info("Registered user %s (%s)", user.id, user.email)
        return user

    def get_user(self, user_id: UUID) -> Optional[User]:
        return self.db.get_user(user_id)

    def get_user_by_email(self, email: str) -> Optional[User]:
        return self.db.get_user_by_email(email)

    def list_users(self) -> list[User]:
        return self.db.list_users()

    def require_user(self, user_id: UUID) -> User:
        """Get a user or raise NotFoundError."""
        user = self.db.get_user(user_id)
        if user is None:
            raise NotFoundError(user_not_found(user_id))
        return user

    def confirm_email(self, user_id: UUID) -> User:
        user = self.require_user(user_id)
        user.confirm_email()
        self.db.save_user(user)
        logger.info("Confirmed email for user %s", user_id)
        return user

    def record_login(self, user_id: UUID) -> User:
        user = self.require_user(user_id)
        user.record_login()
        self.db.save_user(user)
        logger.info("Recorded login for user %s", user_id)
        return user

    def update_name(self, user_id: UUID, first_name: str, last_name: str) -> User:
        user = self.require_user(user_id)
        user.update_name(first_name, last_name)
        self.db.save_user(user)
        return user

    def update_password(self, user_id: UUID, password_hash: str) -> User:
        user = self.require_user(user_id)
        user.update_password(password_hash)
        self.db.save_user(user)
        logger.info("Updated password for user %s", user_id)
        return user

    def delete_user(self, user_id: UUID) -> None:
        """Delete a user and everything the user owns."""
        self.db.delete_user(user_id)
        logger.info("Deleted user %s", user_id)
