"""
db/connection.py
----------------
Manages the PostgreSQL connection pool and exposes `execute()`, the single
entry point repositories use to run SQL.

Queries are written with numbered placeholders (`$1`, `$2`, ...). psycopg2
only understands the `%s` format style, so `execute()` rewrites the query
before handing it to the cursor.
"""

import re
from typing import Any, Sequence

import psycopg2
from psycopg2 import pool, extras

from config import DATABASE_URL, DB_POOL_MIN, DB_POOL_MAX
from db.errors import QueryError
from utils.logger import get_logger

logger = get_logger(__name__)

_pool: pool.SimpleConnectionPool | None = None

_NUMBERED_PLACEHOLDER = re.compile(r"\$(\d+)")


def init_pool(min_conn: int = DB_POOL_MIN, max_conn: int = DB_POOL_MAX) -> None:
    """
    Initialize the database connection pool.

    Args:
        min_conn: Minimum number of connections to keep open.
        max_conn: Maximum number of connections allowed.

    Raises:
        psycopg2.OperationalError: If the database is unreachable.
    """
    global _pool
    if _pool is not None:
        return
    try:
        _pool = pool.SimpleConnectionPool(min_conn, max_conn, DATABASE_URL)
        logger.info("Database connection pool initialized successfully.")
    except psycopg2.OperationalError as e:
        logger.error(f"Failed to initialize database pool: {e}")
        raise


def get_connection():
    """
    Get a connection from the pool.

    Returns:
        A psycopg2 connection object.

    Raises:
        RuntimeError: If the pool has not been initialized.
    """
    if _pool is None:
        raise RuntimeError("Database pool not initialized. Call init_pool() first.")
    return _pool.getconn()


def release_connection(conn) -> None:
    """
    Return a connection back to the pool.

    Args:
        conn: The psycopg2 connection to release.
    """
    if _pool is not None:
        _pool.putconn(conn)


def close_pool() -> None:
    """Close all connections in the pool."""
    global _pool
    if _pool is not None:
        _pool.closeall()
        _pool = None
        logger.info("Database connection pool closed.")


def to_pyformat(query: str, params: Sequence[Any]) -> tuple[str, list]:
    """
    Rewrite a `$N` query into psycopg2's `%s` style.

    Literal `%` characters are doubled so the driver does not read them as
    placeholders. Each `$N` becomes `%s` and the argument list is rebuilt in
    occurrence order, so a placeholder may appear more than once.

    Args:
        query: SQL text using 1-indexed `$N` placeholders.
        params: Values bound by position.

    Returns:
        Tuple of (rewritten query, arguments in occurrence order).

    Raises:
        QueryError: If a placeholder refers past the end of `params`.
    """
    args: list = []

    def _substitute(match: re.Match) -> str:
        index = int(match.group(1))
        if index < 1 or index > len(params):
            raise QueryError(
                f"Placeholder ${index} has no bound parameter "
                f"({len(params)} supplied)", query, params,
            )
        args.append(params[index - 1])
        return "%s"

    rewritten = _NUMBERED_PLACEHOLDER.sub(_substitute, query.replace("%", "%%"))
    return rewritten, args


def execute(query: str, params: Sequence[Any] = ()) -> list[dict]:
    """
    Run a parameterized statement and return its rows.

    Args:
        query: SQL text with `$N` placeholders.
        params: Ordered values; the Nth value binds to `$N`.

    Returns:
        List of rows as dicts (empty when the statement returns no rows).

    Raises:
        QueryError: If the statement fails for any database reason, including
            an exhausted pool or a dropped connection.
    """
    sql, args = to_pyformat(query, params)
    try:
        conn = get_connection()
    except pool.PoolError as e:
        logger.debug(f"Could not get a connection: {e}")
        raise QueryError(str(e).strip(), query, params) from e

    try:
        with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
            cur.execute(sql, args)
            rows = [dict(r) for r in cur.fetchall()] if cur.description else []
        conn.commit()
        return rows
    except psycopg2.Error as e:
        _rollback(conn)
        message = str(e).strip()
        logger.debug(f"Query failed: {message}")
        raise QueryError(message, query, params) from e
    finally:
        release_connection(conn)


def _rollback(conn) -> None:
    """Roll back unless the server already dropped the connection."""
    if conn.closed:
        return
    try:
        conn.rollback()
    except psycopg2.Error as e:
        logger.warning(f"Rollback failed: {e}")
