from __future__ import annotations

import pytest
from pydantic import ValidationError

from license_search.domain.models import FIELD_COLUMNS, FilterCriteria
from license_search.domain.query import build_condition, build_where_clause, escape_literal


def test_empty_criteria_builds_empty_clause():
    criteria = FilterCriteria()

    assert criteria.is_empty()
    assert build_where_clause(criteria) == ""


def test_single_filter_is_uppercased_and_wildcard_wrapped():
    clause = build_where_clause(FilterCriteria(license_type="plumb"))

    assert clause == "upper(license_type) like '%PLUMB%'"


def test_single_quote_is_doubled():
    clause = build_where_clause(FilterCriteria(business_name="bob's plumbing"))

    assert clause == "upper(business_name) like '%BOB''S PLUMBING%'"
    # Only the two literal delimiters remain once escaped pairs are removed.
    assert clause.replace("''", "").count("'") == 2


def test_escape_literal_handles_repeated_quotes():
    assert escape_literal("o''neil'") == "o''''neil''"
    assert build_condition("owner_name", "o'neil") == "upper(owner_name) like '%O''NEIL%'"


def test_conditions_follow_fixed_column_order_regardless_of_input_order():
    criteria = FilterCriteria(
        owner_name="smith",
        business_county="harris",
        exp_date="2025",
        license_subtype="reg",
    )

    conditions = build_where_clause(criteria).split(" AND ")

    assert conditions == [
        "upper(license_expiration_date_mmddccyy) like '%2025%'",
        "upper(business_county) like '%HARRIS%'",
        "upper(license_subtype) like '%REG%'",
        "upper(owner_name) like '%SMITH%'",
    ]


def test_all_fields_produce_one_condition_each():
    values = {field_name: f"v{index}" for index, (field_name, _) in enumerate(FIELD_COLUMNS)}

    conditions = build_where_clause(FilterCriteria(**values)).split(" AND ")

    assert len(conditions) == len(FIELD_COLUMNS)
    for condition, (_, column) in zip(conditions, FIELD_COLUMNS):
        assert condition.startswith(f"upper({column}) like ")


def test_empty_string_fields_are_skipped():
    clause = build_where_clause(FilterCriteria(license_number="", business_county="dallas"))

    assert clause == "upper(business_county) like '%DALLAS%'"


def test_criteria_rejects_unknown_fields():
    with pytest.raises(ValidationError):
        FilterCriteria(city="austin")
