"""
models/outcome.py
-----------------
Result-or-error wrapper returned by repository operations that need to tell
"no rows" apart from "query failed".
"""

from dataclasses import dataclass, field
from typing import Optional

from db.errors import QueryError


@dataclass
class QueryOutcome:
    """
    Outcome of a single query.

    Attributes:
        rows: Rows returned on success (possibly empty).
        error: The failure, if the query did not run.
    """
    rows: list[dict] = field(default_factory=list)
    error: Optional[QueryError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, rows: list[dict]) -> "QueryOutcome":
        return cls(rows=rows)

    @classmethod
    def failure(cls, error: QueryError) -> "QueryOutcome":
        return cls(error=error)
