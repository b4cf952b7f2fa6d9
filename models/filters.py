"""
models/filters.py
-----------------
Filter specification for property searches.
"""

from dataclasses import dataclass, fields
from typing import Any, Mapping, Optional

# camelCase aliases accepted from callers that forward JSON payloads as-is.
_ALIASES = {
    "ownerId": "owner_id",
    "minimumPricePerNight": "minimum_price_per_night",
    "maximumPricePerNight": "maximum_price_per_night",
    "minimumRating": "minimum_rating",
}


@dataclass
class PropertyFilters:
    """
    Optional constraints for a property search. Unset fields impose no
    constraint.

    Attributes:
        city: Substring matched against the city column.
        owner_id: Only listings owned by this user.
        minimum_price_per_night: Exclusive lower bound, major units (e.g. dollars).
        maximum_price_per_night: Exclusive upper bound, major units.
        minimum_rating: Inclusive lower bound on the average review rating (0-5).
    """
    city: Optional[str] = None
    owner_id: Optional[Any] = None
    minimum_price_per_night: Optional[Any] = None
    maximum_price_per_night: Optional[Any] = None
    minimum_rating: Optional[Any] = None

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "PropertyFilters":
        """
        Build filters from a dict such as a parsed query string.

        Both snake_case and camelCase keys are accepted; unknown keys are ignored.
        """
        if not data:
            return cls()
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in data.items():
            name = _ALIASES.get(key, key)
            if name in known:
                kwargs[name] = value
        return cls(**kwargs)

    @staticmethod
    def is_set(value: Any) -> bool:
        """A field counts as present unless it is None or an empty string."""
        if value is None:
            return False
        if isinstance(value, str) and not value.strip():
            return False
        return True
