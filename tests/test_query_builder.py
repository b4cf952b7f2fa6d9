import re
from decimal import Decimal

import pytest

from db.query_builder import SearchQueryBuilder, to_minor_units
from models.filters import PropertyFilters
from repositories.property_repo import build_search_query


def _placeholders(sql: str) -> list[int]:
    return [int(n) for n in re.findall(r"\$(\d+)", sql)]


def test_empty_filters_only_bind_limit():
    sql, params = build_search_query(PropertyFilters(), 10)

    assert params == [10]
    assert "WHERE" not in sql
    assert " AND " not in sql
    assert sql.rstrip().endswith("LIMIT $1;")
    assert "GROUP BY properties.id" in sql
    assert "ORDER BY cost_per_night" in sql
    assert "avg(property_reviews.rating) AS average_rating" in sql


def test_city_is_wrapped_in_wildcards():
    sql, params = build_search_query(PropertyFilters(city="Vancouver"), 10)

    assert params == ["%Vancouver%", 10]
    assert "WHERE city LIKE $1" in sql
    assert "LIMIT $2;" in sql


def test_owner_without_city_starts_with_where():
    sql, params = build_search_query(PropertyFilters(owner_id=7), 5)

    assert params == [7, 5]
    assert "WHERE owner_id = $1" in sql
    assert "AND" not in sql


def test_price_bounds_are_exclusive_and_in_cents():
    sql, params = build_search_query(
        PropertyFilters(minimum_price_per_night=100.00, maximum_price_per_night="250.50"), 10
    )

    assert params == [10000, 25050, 10]
    assert "WHERE cost_per_night > $1" in sql
    assert "AND cost_per_night < $2" in sql


def test_rating_only_uses_containment_subquery():
    sql, params = build_search_query(PropertyFilters(minimum_rating=4), 10)

    assert params == [4, 10]
    assert "WHERE properties.id IN (" in sql
    assert "HAVING avg(rating) >= $1" in sql
    assert "GROUP BY property_id" in sql


def test_all_filters_compose_in_fixed_order():
    filters = PropertyFilters(
        city="Van",
        owner_id=3,
        minimum_price_per_night=100,
        maximum_price_per_night=200,
        minimum_rating=4,
    )
    sql, params = build_search_query(filters, 20)

    assert params == ["%Van%", 3, 10000, 20000, 4, 20]
    assert _placeholders(sql) == [1, 2, 3, 4, 5, 6]
    assert sql.count("\n      AND ") == 4
    positions = [
        sql.index("city LIKE $1"),
        sql.index("owner_id = $2"),
        sql.index("cost_per_night > $3"),
        sql.index("cost_per_night < $4"),
        sql.index("properties.id IN ("),
        sql.index("LIMIT $6"),
    ]
    assert positions == sorted(positions)


@pytest.mark.parametrize("fields", [
    {},
    {"city": "Paris"},
    {"owner_id": 1, "maximum_price_per_night": 90},
    {"city": "Paris", "owner_id": 1, "minimum_price_per_night": 10},
    {"city": "Paris", "owner_id": 1, "minimum_price_per_night": 10, "maximum_price_per_night": 90},
])
@pytest.mark.parametrize("with_rating", [False, True])
def test_one_parameter_per_present_filter(fields, with_rating):
    data = dict(fields)
    if with_rating:
        data["minimum_rating"] = 3.5
    sql, params = build_search_query(PropertyFilters(**data), 10)

    expected = len(fields) + 1 + (1 if with_rating else 0)
    assert len(params) == expected
    assert _placeholders(sql) == list(range(1, expected + 1))
    assert params[-1] == 10
    if fields or with_rating:
        assert sql.count("WHERE ") == 1


def test_blank_values_are_treated_as_absent():
    sql, params = build_search_query(
        PropertyFilters(city="", owner_id=None, minimum_price_per_night="  "), 10
    )
    assert params == [10]
    assert "WHERE" not in sql


def test_builders_do_not_share_state():
    first = SearchQueryBuilder("SELECT 1\n")
    second = SearchQueryBuilder("SELECT 1\n")
    first.where("a = {}", 1)

    assert second.params == []
    assert second.predicates == []
    assert first.add_param("x") == "$2"


def test_build_returns_copy_of_params():
    builder = SearchQueryBuilder("SELECT * FROM t\n")
    builder.where("a = {}", 1)
    sql, params = builder.build("t.id", "t.id", 3)
    params.append("mutated")

    assert builder.params == [1, 3]
    assert sql.rstrip().endswith("LIMIT $2;")


@pytest.mark.parametrize("amount, expected", [
    (100.00, 10000),
    ("100.00", 10000),
    (19.99, 1999),
    ("0.1", 10),
    (Decimal("45.5"), 4550),
    (75, 7500),
])
def test_to_minor_units_is_exact(amount, expected):
    result = to_minor_units(amount)
    assert result == expected
    assert isinstance(result, int)


def test_to_minor_units_keeps_fractional_cents():
    assert to_minor_units("12.345") == Decimal("1234.5")


@pytest.mark.parametrize("value", ["cheap", "nan", "inf"])
def test_to_minor_units_passes_non_numbers_through(value):
    assert to_minor_units(value) == value
