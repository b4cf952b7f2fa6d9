"""
repositories/property_repo.py
------------------------------
Data access layer for property listings.
All SQL queries related to the `properties` table live here.
"""

from typing import Any, Callable, Mapping, Optional, Union

from db.connection import execute as db_execute
from db.errors import QueryError
from db.query_builder import SearchQueryBuilder, to_minor_units
from models.filters import PropertyFilters
from models.outcome import QueryOutcome
from models.property import Property
from utils.logger import get_logger

logger = get_logger(__name__)

_SEARCH_BASE_SQL = """
    SELECT properties.*, avg(property_reviews.rating) AS average_rating
    FROM properties
    JOIN property_reviews ON properties.id = property_id
"""

# Average rating per property, filtered after grouping.
_MINIMUM_RATING_SUBQUERY = """
        SELECT property_id
        FROM property_reviews
        GROUP BY property_id
        HAVING avg(rating) >= {}
    """


def build_search_query(filters: PropertyFilters, limit: Any) -> tuple[str, list]:
    """
    Build the property search query.

    Filters are applied in a fixed order: city, owner, minimum price,
    maximum price, then minimum rating. Prices arrive in major units and
    are compared against `cost_per_night` in cents with exclusive bounds.

    The rating filter cannot be a plain predicate: the outer average is only
    known after grouping. It is applied as a containment sub-query over
    property_reviews instead.

    Args:
        filters: Which constraints to apply.
        limit: Maximum number of rows; bound as the final parameter.

    Returns:
        Tuple of (query text, parameter list).
    """
    builder = SearchQueryBuilder(_SEARCH_BASE_SQL)
    is_set = PropertyFilters.is_set

    if is_set(filters.city):
        builder.where("city LIKE {}", f"%{filters.city}%")

    if is_set(filters.owner_id):
        builder.where("owner_id = {}", filters.owner_id)

    if is_set(filters.minimum_price_per_night):
        builder.where("cost_per_night > {}", to_minor_units(filters.minimum_price_per_night))

    if is_set(filters.maximum_price_per_night):
        builder.where("cost_per_night < {}", to_minor_units(filters.maximum_price_per_night))

    if is_set(filters.minimum_rating):
        builder.where_in("properties.id", _MINIMUM_RATING_SUBQUERY, filters.minimum_rating)

    return builder.build(group_by="properties.id", order_by="cost_per_night", limit=limit)


class PropertyRepository:
    """Repository for searching and creating property listings."""

    def __init__(self, execute: Callable[..., list[dict]] = db_execute):
        self.execute = execute

    # ── READ ──────────────────────────────────────────────

    def try_search(
        self,
        filters: Union[PropertyFilters, Mapping[str, Any], None] = None,
        limit: Any = 10,
    ) -> QueryOutcome:
        """
        Search listings and report failures explicitly.

        Args:
            filters: A PropertyFilters, or a mapping of filter names to values.
            limit: Maximum number of listings to return.

        Returns:
            QueryOutcome with the matching rows, or with the error if the
            query could not run.
        """
        if not isinstance(filters, PropertyFilters):
            filters = PropertyFilters.from_mapping(filters)

        sql, params = build_search_query(filters, limit)
        logger.debug(f"Property search: {sql} {params}")

        try:
            return QueryOutcome.success(self.execute(sql, params))
        except QueryError as e:
            return QueryOutcome.failure(e)

    def search(
        self,
        filters: Union[PropertyFilters, Mapping[str, Any], None] = None,
        limit: Any = 10,
    ) -> Optional[list[dict]]:
        """
        Search listings matching the filters, cheapest first.

        Each row holds every `properties` column plus `average_rating`.

        Returns:
            List of rows, or None if the query failed (the error is logged).
        """
        outcome = self.try_search(filters, limit)
        if not outcome.ok:
            logger.error(f"Property search failed: {outcome.error.message}")
            return None
        return outcome.rows

    # ── CREATE ────────────────────────────────────────────

    def add(self, prop: Property) -> Optional[Property]:
        """
        Insert a new listing.

        Args:
            prop: The Property to persist; `cost_per_night` is in cents.

        Returns:
            The stored Property with its `id` populated, or None on failure.
        """
        columns = Property.insert_columns()
        params = [getattr(prop, c) for c in columns]
        column_list = ", ".join(columns)
        placeholders = ", ".join(f"${i}" for i in range(1, len(columns) + 1))
        sql = f"""
            INSERT INTO properties ({column_list})
            VALUES ({placeholders})
            RETURNING *;
        """
        try:
            rows = self.execute(sql, params)
        except QueryError as e:
            logger.error(f"Failed to add property '{prop.title}': {e.message}")
            return None
        saved = Property.from_row(rows[0])
        logger.info(f"Added property #{saved.id} for owner {saved.owner_id}")
        return saved
