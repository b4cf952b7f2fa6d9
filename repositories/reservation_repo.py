"""
repositories/reservation_repo.py
---------------------------------
Data access layer for reservations.
"""

from typing import Any, Callable, Optional

from db.connection import execute as db_execute
from db.errors import QueryError
from utils.logger import get_logger

logger = get_logger(__name__)


class ReservationRepository:
    """Repository for reading reservations."""

    def __init__(self, execute: Callable[..., list[dict]] = db_execute):
        self.execute = execute

    def get_all_for_guest(self, guest_id: int, limit: Any = 10) -> Optional[list[dict]]:
        """
        Fetch a guest's reservations with the reserved property and its rating.

        Args:
            guest_id: ID of the user who made the reservations.
            limit: Maximum number of reservations to return.

        Returns:
            Rows ordered by start date (property columns, reservation_id,
            start_date, end_date, average_rating), or None if the query failed.
        """
        sql = """
            SELECT properties.*, reservations.id AS reservation_id, start_date, end_date,
                   avg(property_reviews.rating) AS average_rating
            FROM reservations
            JOIN properties ON properties.id = reservations.property_id
            JOIN property_reviews ON property_reviews.property_id = properties.id
            WHERE reservations.guest_id = $1
            GROUP BY reservations.id, properties.id, properties.cost_per_night
            ORDER BY start_date
            LIMIT $2;
        """
        try:
            return self.execute(sql, [guest_id, limit])
        except QueryError as e:
            logger.error(f"Failed to load reservations for guest {guest_id}: {e.message}")
            return None
