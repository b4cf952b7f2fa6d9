"""
db/query_builder.py
-------------------
Composes parameterized SELECT statements from optional filters.

`SearchQueryBuilder` keeps the predicates and their bound values side by
side. A placeholder number is taken from the parameter list length right
after the value is appended, so `$N` always points at the Nth value.
"""

from decimal import Decimal, InvalidOperation
from typing import Any


def to_minor_units(amount: Any) -> Any:
    """
    Convert a major-unit amount (dollars) to minor units (cents).

    Decimal arithmetic on the string form keeps two-decimal inputs exact:
    ``100.00`` becomes ``10000``, ``19.99`` becomes ``1999``. Values that are
    not numbers are returned untouched and left for the database to reject.
    """
    try:
        cents = Decimal(str(amount).strip()) * 100
    except (InvalidOperation, ValueError):
        return amount
    if not cents.is_finite():
        return amount
    if cents == cents.to_integral_value():
        return int(cents)
    return cents


class SearchQueryBuilder:
    """Accumulates WHERE predicates and positional parameters for one query."""

    def __init__(self, base_sql: str):
        self.base_sql = base_sql
        self.predicates: list[str] = []
        self.params: list = []

    def add_param(self, value: Any) -> str:
        """Append a value and return the placeholder that refers to it."""
        self.params.append(value)
        return f"${len(self.params)}"

    def where(self, template: str, value: Any) -> "SearchQueryBuilder":
        """
        Add a predicate bound to one new parameter.

        Args:
            template: SQL fragment with ``{}`` where the placeholder goes,
                e.g. ``"city LIKE {}"``.
            value: Value bound to that placeholder.
        """
        placeholder = self.add_param(value)
        self.predicates.append(template.replace("{}", placeholder))
        return self

    def where_in(self, column: str, subquery: str, value: Any) -> "SearchQueryBuilder":
        """Add ``column IN (subquery)`` where the sub-query takes one parameter."""
        placeholder = self.add_param(value)
        self.predicates.append(f"{column} IN ({subquery.replace('{}', placeholder)})")
        return self

    def where_clause(self) -> str:
        if not self.predicates:
            return ""
        return "WHERE " + "\n      AND ".join(self.predicates) + "\n"

    def build(self, group_by: str, order_by: str, limit: Any) -> tuple[str, list]:
        """
        Finish the statement. The limit is always the last parameter.

        Returns:
            Tuple of (query text, parameter list).
        """
        sql = self.base_sql + self.where_clause()
        limit_placeholder = self.add_param(limit)
        sql += (
            f"    GROUP BY {group_by}\n"
            f"    ORDER BY {order_by}\n"
            f"    LIMIT {limit_placeholder};"
        )
        return sql, list(self.params)
