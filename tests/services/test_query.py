from __future__ import annotations

from datetime import datetime, timezone

import pytest

from minam.services.query import ProductQuery, filter_rows, parse_timestamp

ROWS = [
    {"symbol": "BTC", "ts": "2024-01-01T00:00:00Z", "price": 42000},
    {"symbol": "ETH", "ts": "2024-01-01T01:00:00Z", "price": 2300},
    {"symbol": "BTC", "ts": "2024-01-01T02:00:00Z", "price": 41900},
    {"price": 1},
    {"symbol": "BTC", "ts": "not a date", "price": 42200},
]


def test_no_filters_returns_all_rows() -> None:
    assert filter_rows(ROWS, ProductQuery()) == ROWS


def test_symbol_filter_keeps_rows_without_the_field() -> None:
    out = filter_rows(ROWS, ProductQuery(symbol="BTC"))
    assert [row["price"] for row in out] == [42000, 41900, 1, 42200]


def test_symbol_filter_is_exact() -> None:
    out = filter_rows([{"symbol": 5}, {"symbol": "5"}], ProductQuery(symbol="5"))
    assert out == [{"symbol": "5"}]


def test_time_range_is_inclusive_and_skips_unparseable() -> None:
    query = ProductQuery.from_mapping(
        {"start": "2024-01-01T01:00:00Z", "end": "2024-01-01T02:00:00Z"}
    )
    out = filter_rows(ROWS, query)
    assert [row["price"] for row in out] == [2300, 41900, 1, 42200]


def test_limit_caps_results() -> None:
    assert len(filter_rows(ROWS, ProductQuery(limit=2))) == 2
    assert filter_rows(ROWS, ProductQuery(limit=0)) == []


def test_non_object_rows_are_kept() -> None:
    assert filter_rows([1, "x"], ProductQuery(symbol="BTC")) == [1, "x"]


def test_parse_timestamp_normalises_to_utc() -> None:
    assert parse_timestamp("2024-01-01T00:00:00Z") == datetime(2024, 1, 1, tzinfo=timezone.utc)
    assert parse_timestamp("2024-01-01T02:00:00+02:00") == datetime(2024, 1, 1, tzinfo=timezone.utc)
    assert parse_timestamp("2024-01-01T00:00:00") == datetime(2024, 1, 1, tzinfo=timezone.utc)
    assert parse_timestamp("garbage") is None
    assert parse_timestamp(12) is None


@pytest.mark.parametrize(
    "payload, message",
    [
        ([], "JSON object"),
        ({"symbol": 1}, "symbol"),
        ({"start": "yesterday"}, "start"),
        ({"start": "2024-01-01"}, "UTC offset"),
        ({"end": "2024-01-01T02:00:00"}, "UTC offset"),
        ({"limit": -1}, "limit"),
        ({"limit": "3"}, "limit"),
    ],
)
def test_from_mapping_rejects_bad_payloads(payload, message) -> None:
    with pytest.raises(ValueError, match=message):
        ProductQuery.from_mapping(payload)


def test_from_mapping_accepts_none() -> None:
    assert ProductQuery.from_mapping(None) == ProductQuery()
