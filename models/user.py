"""
models/user.py
--------------
Domain model for registered users.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class User:
    """
    Represents an account that can own properties and make reservations.

    Attributes:
        name: Display name.
        email: Login email (unique).
        password: Stored password hash.
        id: Database primary key (None for new records).
    """
    name: str
    email: str
    password: str
    id: Optional[int] = None

    @classmethod
    def from_row(cls, row: dict) -> "User":
        return cls(
            name=row["name"],
            email=row["email"],
            password=row["password"],
            id=row["id"],
        )

    def __str__(self) -> str:
        return f"#{self.id} {self.name} <{self.email}>"
