"""
models/property.py
------------------
Domain model for property listings.
"""

from dataclasses import dataclass, fields
from typing import Optional


@dataclass
class Property:
    """
    Represents a rentable property listing.

    Attributes:
        owner_id: ID of the user who owns the listing.
        title: Listing headline.
        description: Free-form description.
        thumbnail_photo_url: Small preview image.
        cover_photo_url: Full-size cover image.
        cost_per_night: Nightly price in minor currency units (cents).
        parking_spaces: Number of parking spaces.
        number_of_bathrooms: Number of bathrooms.
        number_of_bedrooms: Number of bedrooms.
        country, street, city, province, post_code: Address parts.
        active: Whether the listing is visible in searches.
        id: Database primary key (None for new records).
    """
    owner_id: int
    title: str
    cost_per_night: int
    description: str = ""
    thumbnail_photo_url: str = ""
    cover_photo_url: str = ""
    parking_spaces: int = 0
    number_of_bathrooms: int = 0
    number_of_bedrooms: int = 0
    country: str = ""
    street: str = ""
    city: str = ""
    province: str = ""
    post_code: str = ""
    active: bool = True
    id: Optional[int] = None

    @classmethod
    def insert_columns(cls) -> list[str]:
        """Every column except the generated key, in INSERT order."""
        return [f.name for f in fields(cls) if f.name != "id"]

    @classmethod
    def from_row(cls, row: dict) -> "Property":
        """Build a Property from a row, ignoring extra columns such as average_rating."""
        names = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in row.items() if k in names})

    def __str__(self) -> str:
        return f"#{self.id} {self.title} ({self.city}) - {self.cost_per_night / 100:.2f}/night"
