"""Turn filter criteria into MongoDB query and sort documents."""

from __future__ import annotations

from typing import Any

import pymongo

from blogkit.filters import (
    DateFilter,
    Float64Filter,
    IntFilter,
    SortFilter,
    SortOrder,
    StringFilter,
    UuidFilter,
)

_COMPARISONS = ("eq", "gt", "gte", "lt", "lte")


def _comparison_filter(criteria: IntFilter | Float64Filter | DateFilter | None) -> dict[str, Any]:
    query: dict[str, Any] = {}
    if criteria is None:
        return query
    for operator in _COMPARISONS:
        value = getattr(criteria, operator)
        if value is not None:
            query[f"${operator}"] = value
    return query


def get_uuid_filter(uuid_filter: UuidFilter | None) -> dict[str, Any]:
    """Build a query on a UUID field from equality, membership and inequality."""
    query: dict[str, Any] = {}
    if uuid_filter is None:
        return query
    if uuid_filter.eq is not None:
        query["$eq"] = uuid_filter.eq
    if uuid_filter.in_:
        query["$in"] = list(uuid_filter.in_)
    if uuid_filter.ne is not None:
        query["$ne"] = uuid_filter.ne
    return query


def get_int_filter(int_filter: IntFilter | None) -> dict[str, Any]:
    """Build a comparison query on an integer field."""
    return _comparison_filter(int_filter)


def get_float64_filter(float_filter: Float64Filter | None) -> dict[str, Any]:
    """Build a comparison query on a floating point field."""
    return _comparison_filter(float_filter)


def get_regex_filter(value: str) -> dict[str, Any]:
    """Build a case-insensitive regular expression query."""
    return {"$regex": value, "$options": "i"}


def get_string_filter(string_filter: StringFilter | None) -> dict[str, Any]:
    """Build a query on a string field from equality and a regular expression."""
    query: dict[str, Any] = {}
    if string_filter is None:
        return query
    if string_filter.eq is not None:
        query["$eq"] = string_filter.eq
    if string_filter.regex is not None:
        query["$regex"] = string_filter.regex
        query["$options"] = "i"
    return query


def get_date_filter(date_filter: DateFilter) -> dict[str, Any]:
    """Build a query on a timestamp field.

    When both a lower and an upper bound are given, only that range is used;
    otherwise every comparison that is set goes into the query.
    """
    lower_upper = (
        ("gt", "lt"),
        ("gt", "lte"),
        ("gte", "lt"),
        ("gte", "lte"),
    )
    for lower, upper in lower_upper:
        low = getattr(date_filter, lower)
        high = getattr(date_filter, upper)
        if low is not None and high is not None:
            return {f"${lower}": low, f"${upper}": high}
    return _comparison_filter(date_filter)


def get_sort_filter(sort: SortFilter | None) -> list[tuple[str, int]]:
    """Build a sort specification; ascending unless descending is asked for."""
    if sort is None or not sort.sort_by:
        return []
    order = pymongo.DESCENDING if sort.sort_order == SortOrder.DESC else pymongo.ASCENDING
    return [(sort.sort_by, order)]