"""Tests for src.core.utils and src.core.time_utils."""

import json
from datetime import datetime, timezone, timedelta

import pytest

from src.core.time_utils import parse_repository_date, to_protocol_timestamp
from src.core.utils import build_query_string, capitalize_first, serialize_value


class TestSerializeValue:

    def test_round_trip_nested(self):
        value = {"name": "Trust", "address": {"city": "Pune"}, "shares": [1, 2.5, None, True]}
        assert json.loads(serialize_value(value)) == value

    def test_compact_and_unescaped(self):
        assert serialize_value({"a": "₹1,000"}) == '{"a":"₹1,000"}'


class TestCapitalizeFirst:

    @pytest.mark.parametrize(
        "text, expected",
        [("personal", "Personal"), ("Income", "Income"), ("", ""), ("a", "A"), ("eWS", "EWS")],
    )
    def test_capitalize(self, text, expected):
        assert capitalize_first(text) == expected


class TestBuildQueryString:

    def test_flat(self):
        assert build_query_string({"page": "1", "sort": "createdAt:desc"}) == "page=1&sort=createdAt:desc"

    def test_nested_filters(self):
        query = build_query_string({"filters": {"$and": [{"title": {"$containsi": "merit"}}]}})
        assert query == "filters[$and][][title][$containsi]=merit"

    def test_empty_filters_dropped(self):
        assert build_query_string({"page": "1", "filters": {}}) == "page=1"

    def test_booleans(self):
        assert build_query_string({"filters": {"isActive": True}}) == "filters[isActive]=true"


class TestTimestamps:

    def test_date_only_is_midnight_utc(self):
        parsed = parse_repository_date("2024-06-01")
        assert to_protocol_timestamp(parsed) == "2024-06-01T00:00:00.000Z"

    def test_offset_converted_to_utc(self):
        parsed = parse_repository_date("2024-06-01T05:30:00+05:30")
        assert to_protocol_timestamp(parsed) == "2024-06-01T00:00:00.000Z"

    def test_milliseconds_kept(self):
        value = datetime(2024, 6, 1, 10, 0, 0, 123456, tzinfo=timezone(timedelta(hours=1)))
        assert to_protocol_timestamp(value) == "2024-06-01T09:00:00.123Z"

    @pytest.mark.parametrize("value", [None, "", "  "])
    def test_missing(self, value):
        assert parse_repository_date(value) is None

    def test_invalid(self):
        with pytest.raises(ValueError):
            parse_repository_date("31/12/2024")

    @pytest.mark.parametrize("value", [1717200000000, 3.5, ["2024-06-01"]])
    def test_non_string_is_invalid(self, value):
        with pytest.raises(ValueError):
            parse_repository_date(value)
