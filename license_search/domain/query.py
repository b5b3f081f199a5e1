"""
Where-clause construction for the license dataset.

Every active filter becomes a case-insensitive substring match of the form
``upper(<column>) like '%<VALUE>%'``; conditions are AND-joined in the fixed
column order from ``FIELD_COLUMNS``.
"""
from __future__ import annotations

from typing import List

from license_search.domain.models import FilterCriteria


def escape_literal(value: str) -> str:
    """Double single quotes so the value can sit inside a quoted literal."""
    return value.replace("'", "''")


def build_condition(column: str, value: str) -> str:
    return f"upper({column}) like '%{escape_literal(value).upper()}%'"


def build_where_clause(criteria: FilterCriteria) -> str:
    """
    Build the where clause for the given criteria.

    Returns an empty string when no filter is set; callers must then omit the
    ``$where`` parameter entirely.
    """
    conditions: List[str] = [
        build_condition(column, value) for column, value in criteria.active_filters().items()
    ]
    return " AND ".join(conditions)


__all__ = ["build_condition", "build_where_clause", "escape_literal"]
