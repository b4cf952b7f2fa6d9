"""
repositories/user_repo.py
--------------------------
Data access layer for user records.
"""

from typing import Callable, Optional

from db.connection import execute as db_execute
from db.errors import QueryError
from models.user import User
from utils.logger import get_logger

logger = get_logger(__name__)


class UserRepository:
    """Repository for lookups and inserts on the users table."""

    def __init__(self, execute: Callable[..., list[dict]] = db_execute):
        self.execute = execute

    def get_by_email(self, email: str) -> Optional[User]:
        """
        Fetch a user by their email.

        Returns:
            A User, or None if no user matches or the query failed.
        """
        return self._fetch_one(
            "SELECT name, email, password, id FROM users WHERE email = $1;",
            email,
        )

    def get_by_id(self, user_id: int) -> Optional[User]:
        """
        Fetch a user by primary key.

        Returns:
            A User, or None if no user matches or the query failed.
        """
        return self._fetch_one(
            "SELECT name, email, password, id FROM users WHERE id = $1;",
            user_id,
        )

    def add(self, user: User) -> Optional[User]:
        """
        Insert a new user.

        Args:
            user: The User to persist (its `id` is ignored).

        Returns:
            The stored User with its `id` populated, or None on failure.
        """
        sql = """
            INSERT INTO users (name, email, password)
            VALUES ($1, $2, $3)
            RETURNING *;
        """
        try:
            rows = self.execute(sql, [user.name, user.email, user.password])
        except QueryError as e:
            logger.error(f"Failed to add user {user.email}: {e.message}")
            return None
        saved = User.from_row(rows[0])
        logger.info(f"Added user #{saved.id}")
        return saved

    # ── HELPERS ───────────────────────────────────────────

    def _fetch_one(self, sql: str, key) -> Optional[User]:
        try:
            rows = self.execute(sql, [key])
        except QueryError as e:
            logger.error(f"User lookup failed: {e.message}")
            return None
        return User.from_row(rows[0]) if rows else None
