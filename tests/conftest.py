import sys
from pathlib import Path

import pytest

# Ensure project root on sys.path
_THIS_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _THIS_DIR.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from db.errors import QueryError  # noqa: E402


class FakeExecutor:
    """Stands in for db.connection.execute; records every call."""

    def __init__(self, rows=None, error: str | None = None):
        self.rows = rows if rows is not None else []
        self.error = error
        self.calls = []

    def __call__(self, query, params=()):
        self.calls.append((query, list(params)))
        if self.error:
            raise QueryError(self.error, query, params)
        return self.rows

    @property
    def last_query(self) -> str:
        return self.calls[-1][0]

    @property
    def last_params(self) -> list:
        return self.calls[-1][1]


@pytest.fixture()
def fake_executor():
    return FakeExecutor()


@pytest.fixture()
def failing_executor():
    return FakeExecutor(error='relation "properties" does not exist')
