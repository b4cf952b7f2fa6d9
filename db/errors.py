"""
db/errors.py
------------
Exceptions raised by the database layer.
"""

from typing import Optional, Sequence


class QueryError(Exception):
    """
    A query could not be executed (malformed SQL, lost connection,
    constraint violation, ...).

    Attributes:
        message: Human-readable description from the driver.
        query: The query text that failed.
        params: The positional parameters bound to it.
    """

    def __init__(self, message: str, query: Optional[str] = None,
                 params: Optional[Sequence] = None):
        super().__init__(message)
        self.message = message
        self.query = query
        self.params = list(params) if params is not None else []
