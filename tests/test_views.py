"""Tests for the record -> API row mapping.

Run with:
    pytest tests/test_views.py -v
"""
import pytest
from pydantic import ValidationError as PydanticValidationError

from conftest import make_record
from packages.screener.models import StockRecord
from packages.screener.seed import SEED_STOCKS, seed_records
from packages.screener.vocabulary import Sector
from packages.screener.views import (
    VIEW_FIELD_MAP,
    StockRecordView,
    record_from_view,
    to_view_dict,
)


def test_map_covers_every_record_field_once():
    assert set(VIEW_FIELD_MAP) == set(StockRecord.model_fields)
    assert len(set(VIEW_FIELD_MAP.values())) == len(VIEW_FIELD_MAP)
    assert set(VIEW_FIELD_MAP.values()) == set(StockRecordView.model_fields)


def test_moving_average_keys_are_renamed():
    row = to_view_dict(make_record("ABC", above_fifty_day_ma=False))
    assert row["above_50ma"] is False
    assert row["above_200ma"] is True
    assert "above_fifty_day_ma" not in row


def test_every_field_copied_unchanged():
    record = make_record(
        "XYZ",
        name="Xyz Industries",
        price=12.5,
        change=-0.25,
        change_percent=-1.96,
        market_cap=3.3e9,
        pe_ratio=None,
        dividend_yield=2.2,
        rsi=None,
        volume=123_456,
        sector="Materials",
        fifty_two_week_high=20.0,
        fifty_two_week_low=9.5,
        macd_signal="bearish",
    )
    row = to_view_dict(record)
    for attr, key in VIEW_FIELD_MAP.items():
        expected = getattr(record, attr)
        if attr == "macd_signal":
            expected = expected.value
        assert row[key] == expected


def test_record_round_trip():
    record = make_record("RT", pe_ratio=None, above_two_hundred_day_ma=False)
    assert record_from_view(to_view_dict(record)) == record


def test_record_from_view_ignores_unknown_keys():
    row = to_view_dict(make_record("IGN"))
    row["updated_at"] = "2024-01-01T00:00:00Z"
    assert record_from_view(row).ticker == "IGN"


def test_seed_uses_feed_names():
    records = seed_records()
    assert len(records) == len(SEED_STOCKS)
    aapl = next(r for r in records if r.ticker == "AAPL")
    assert aapl.market_cap == 2_800_000_000_000
    assert aapl.above_fifty_day_ma is True
    assert len({r.ticker for r in records}) == len(records)


def test_seed_sectors_are_known_sectors():
    known = {s.value for s in Sector}
    assert {r.sector for r in seed_records()} <= known


@pytest.mark.parametrize("value", [float("nan"), float("inf")])
def test_record_rejects_non_finite_numbers(value):
    with pytest.raises(PydanticValidationError):
        make_record("BAD", price=value)
    with pytest.raises(PydanticValidationError):
        record_from_view({**to_view_dict(make_record("BAD")), "pe_ratio": value})
