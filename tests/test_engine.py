"""Unit tests for the screener engine: Filter -> Sort -> Paginate.

Run with:
    pytest tests/test_engine.py -v
"""
import random

import pytest

from conftest import make_record, tickers
from packages.screener.engine import (
    ScreenerEngine,
    apply_filters,
    clause_failures,
    paginate,
    query,
    sort_records,
)
from packages.screener.errors import ValidationError
from packages.screener.models import FilterSpec, RangeClause, ScreenerQuery, SortSpec


def _random_universe(seed, size=60):
    """Deterministic pseudo-random universe with a healthy share of nulls."""
    rng = random.Random(seed)
    sectors = ["Technology", "Healthcare", "Energy", "Finance"]
    records = []
    for i in range(size):
        records.append(
            make_record(
                f"T{i:03d}",
                price=rng.choice([10.0, 25.0, 50.0, 50.0, 120.0]),
                market_cap=rng.choice([1e9, 5e9, 5e9, 2e11]),
                pe_ratio=rng.choice([None, 8.0, 15.0, 15.0, 40.0]),
                dividend_yield=rng.choice([None, 0.5, 2.0, 4.0]),
                rsi=rng.choice([None, 25.0, 50.0, 75.0]),
                volume=rng.choice([1_000, 50_000, 2_000_000]),
                sector=rng.choice(sectors),
                above_fifty_day_ma=rng.random() < 0.5,
                above_two_hundred_day_ma=rng.random() < 0.5,
                macd_signal=rng.choice(["bullish", "bearish", "neutral"]),
            )
        )
    return records


RANDOM_FILTERS = [
    FilterSpec(),
    FilterSpec(pe_ratio=RangeClause(max=20)),
    FilterSpec(pe_ratio=RangeClause(min=10), dividend_yield=RangeClause(min=1)),
    FilterSpec(sector=["Technology", "Energy"], above_50ma=True),
    FilterSpec(rsi=RangeClause(min=30, max=70), macd_signal="bullish"),
    FilterSpec(market_cap=RangeClause(min=5e9), volume=RangeClause(max=100_000)),
    FilterSpec(price=RangeClause(min=20, max=60), above_200ma=True),
]


# ─────────────────────────────────────────────────────────────────────────────
# 1. Filter stage
# ─────────────────────────────────────────────────────────────────────────────

class TestFilter:
    def test_empty_filter_keeps_everything_in_order(self, five_stocks):
        assert tickers(apply_filters(five_stocks, FilterSpec())) == tickers(five_stocks)

    def test_range_bounds_are_inclusive(self, five_stocks):
        result = apply_filters(five_stocks, FilterSpec(pe_ratio=RangeClause(min=25.8, max=28.5)))
        assert tickers(result) == ["AAPL", "GOOGL"]

    def test_null_never_matches_a_range(self, five_stocks):
        """AMZN has no P/E: excluded by min-only, max-only and open clauses alike."""
        for clause in (RangeClause(min=-1e9), RangeClause(max=1e9), RangeClause()):
            result = apply_filters(five_stocks, FilterSpec(pe_ratio=clause))
            assert "AMZN" not in tickers(result)

    def test_sector_membership(self, five_stocks):
        result = apply_filters(five_stocks, FilterSpec(sector=["Software", "Semiconductors"]))
        assert tickers(result) == ["MSFT", "NVDA"]

    def test_empty_sector_list_is_unconstrained(self, five_stocks):
        assert len(apply_filters(five_stocks, FilterSpec(sector=[]))) == 5

    def test_moving_average_true_constrains(self, five_stocks):
        result = apply_filters(five_stocks, FilterSpec(above_50ma=True, above_200ma=True))
        assert tickers(result) == ["AAPL", "MSFT", "AMZN"]

    def test_moving_average_false_never_excludes(self, five_stocks):
        result = apply_filters(five_stocks, FilterSpec(above_50ma=False, above_200ma=False))
        assert len(result) == 5

    def test_macd_signal_exact_match(self, five_stocks):
        result = apply_filters(five_stocks, FilterSpec(macd_signal="bullish"))
        assert tickers(result) == ["AAPL", "GOOGL", "NVDA"]

    def test_min_above_max_matches_nothing(self, five_stocks):
        result = apply_filters(five_stocks, FilterSpec(price=RangeClause(min=500, max=100)))
        assert result == []

    def test_clause_failures_names_every_failing_clause(self):
        record = make_record("X", pe_ratio=None, sector="Energy", macd_signal="bearish")
        filters = FilterSpec(
            pe_ratio=RangeClause(max=30),
            sector=["Technology"],
            macd_signal="bullish",
            price=RangeClause(max=1000),
        )
        assert list(clause_failures(record, filters)) == ["pe_ratio", "sector", "macd_signal"]

    @pytest.mark.parametrize("seed", [1, 7, 42])
    def test_filter_soundness(self, seed):
        """Every kept record passes every clause; every dropped record fails one."""
        universe = _random_universe(seed)
        for filters in RANDOM_FILTERS:
            kept = apply_filters(universe, filters)
            kept_ids = {r.ticker for r in kept}
            for record in universe:
                failures = list(clause_failures(record, filters))
                if record.ticker in kept_ids:
                    assert failures == []
                else:
                    assert failures

    def test_filter_does_not_mutate_input(self, five_stocks):
        universe = list(five_stocks)
        apply_filters(universe, FilterSpec(pe_ratio=RangeClause(max=30)))
        assert tickers(universe) == ["AAPL", "MSFT", "GOOGL", "AMZN", "NVDA"]


# ─────────────────────────────────────────────────────────────────────────────
# 2. Sort stage
# ─────────────────────────────────────────────────────────────────────────────

class TestSort:
    def test_no_sort_preserves_order(self, five_stocks):
        assert tickers(sort_records(five_stocks, None)) == tickers(five_stocks)

    def test_numeric_desc(self, five_stocks):
        result = sort_records(five_stocks, SortSpec(field="market_cap", order="desc"))
        assert tickers(result) == ["AAPL", "MSFT", "GOOGL", "AMZN", "NVDA"]

    def test_nulls_last_ascending(self, five_stocks):
        result = sort_records(five_stocks, SortSpec(field="pe_ratio", order="asc"))
        assert tickers(result) == ["GOOGL", "AAPL", "MSFT", "NVDA", "AMZN"]

    def test_nulls_last_descending(self, five_stocks):
        result = sort_records(five_stocks, SortSpec(field="pe_ratio", order="desc"))
        assert tickers(result) == ["NVDA", "MSFT", "AAPL", "GOOGL", "AMZN"]

    def test_nulls_keep_relative_order(self):
        records = [
            make_record("A", rsi=None),
            make_record("B", rsi=40.0),
            make_record("C", rsi=None),
            make_record("D", rsi=60.0),
        ]
        for order in ("asc", "desc"):
            result = sort_records(records, SortSpec(field="rsi", order=order))
            assert tickers(result)[-2:] == ["A", "C"]

    @pytest.mark.parametrize("order", ["asc", "desc"])
    def test_stable_for_equal_keys(self, order):
        records = [
            make_record("A", price=10.0),
            make_record("B", price=5.0),
            make_record("C", price=10.0),
            make_record("D", price=5.0),
            make_record("E", price=10.0),
        ]
        result = tickers(sort_records(records, SortSpec(field="price", order=order)))
        tens = [t for t in result if t in ("A", "C", "E")]
        fives = [t for t in result if t in ("B", "D")]
        assert tens == ["A", "C", "E"]
        assert fives == ["B", "D"]

    def test_string_sort_is_case_insensitive(self):
        records = [
            make_record("A", name="beta"),
            make_record("B", name="Alpha"),
            make_record("C", name="alpha"),
            make_record("D", name="Gamma"),
        ]
        result = sort_records(records, SortSpec(field="name", order="asc"))
        assert [r.name for r in result] == ["Alpha", "alpha", "beta", "Gamma"]

    def test_string_sort_desc(self, five_stocks):
        result = sort_records(five_stocks, SortSpec(field="ticker", order="desc"))
        assert tickers(result) == ["NVDA", "MSFT", "GOOGL", "AMZN", "AAPL"]

    def test_unknown_field_is_rejected(self, five_stocks):
        with pytest.raises(ValidationError) as exc:
            sort_records(five_stocks, SortSpec(field="fifty_day_ma", order="asc"))
        assert "fifty_day_ma" in str(exc.value)
        assert exc.value.field == "sort.field"


# ─────────────────────────────────────────────────────────────────────────────
# 3. Pagination
# ─────────────────────────────────────────────────────────────────────────────

class TestPaginate:
    def test_slice(self, five_stocks):
        assert tickers(paginate(five_stocks, limit=2, offset=1)) == ["MSFT", "GOOGL"]

    def test_short_final_page(self, five_stocks):
        assert tickers(paginate(five_stocks, limit=3, offset=3)) == ["AMZN", "NVDA"]

    def test_offset_past_end_is_empty(self, five_stocks):
        assert paginate(five_stocks, limit=10, offset=50) == []

    def test_zero_limit(self, five_stocks):
        assert paginate(five_stocks, limit=0, offset=0) == []


# ─────────────────────────────────────────────────────────────────────────────
# 4. query() end to end
# ─────────────────────────────────────────────────────────────────────────────

class TestQuery:
    def test_scenario_a_pe_max_30(self, five_stocks):
        result = query(five_stocks, FilterSpec(pe_ratio=RangeClause(max=30)))
        assert result.total == 2
        assert tickers(result.results) == ["AAPL", "GOOGL"]

    def test_scenario_b_top_three_by_market_cap(self, five_stocks):
        result = query(
            five_stocks,
            FilterSpec(),
            SortSpec(field="market_cap", order="desc"),
            limit=3,
            offset=0,
        )
        assert result.total == 5
        assert tickers(result.results) == ["AAPL", "MSFT", "GOOGL"]

    def test_scenario_c_null_pe_sorts_last(self, five_stocks):
        result = query(five_stocks, FilterSpec(), SortSpec(field="pe_ratio", order="asc"))
        assert tickers(result.results) == ["GOOGL", "AAPL", "MSFT", "NVDA", "AMZN"]

    def test_scenario_d_no_exact_sector_match(self, five_stocks):
        result = query(five_stocks, FilterSpec(sector=["Technology"]))
        assert result.total == 0
        assert result.results == []

    def test_scenario_e_limit_above_ceiling(self, five_stocks):
        with pytest.raises(ValidationError) as exc:
            query(five_stocks, FilterSpec(), limit=501)
        assert exc.value.field == "limit"

    def test_limit_at_ceiling_is_accepted(self, five_stocks):
        assert query(five_stocks, FilterSpec(), limit=500).total == 5

    @pytest.mark.parametrize("limit,offset,field", [(-1, 0, "limit"), (10, -5, "offset")])
    def test_negative_pagination_rejected(self, five_stocks, limit, offset, field):
        with pytest.raises(ValidationError) as exc:
            query(five_stocks, FilterSpec(), limit=limit, offset=offset)
        assert exc.value.field == field

    def test_invalid_sort_rejected_before_filtering(self):
        with pytest.raises(ValidationError):
            query([], FilterSpec(), SortSpec(field="bogus"))

    def test_empty_universe(self):
        result = query([], FilterSpec(pe_ratio=RangeClause(max=30)))
        assert result.total == 0
        assert result.results == []

    def test_offset_past_total_keeps_total(self, five_stocks):
        result = query(five_stocks, FilterSpec(), limit=10, offset=5)
        assert result.total == 5
        assert result.results == []

    @pytest.mark.parametrize("seed", [3, 11])
    def test_total_is_independent_of_pagination(self, seed):
        universe = _random_universe(seed)
        for filters in RANDOM_FILTERS:
            totals = {
                query(universe, filters, limit=limit, offset=offset).total
                for limit, offset in [(0, 0), (1, 0), (5, 3), (100, 0), (10, 500)]
            }
            assert totals == {len(apply_filters(universe, filters))}

    @pytest.mark.parametrize("seed", [5, 19])
    def test_results_are_the_sorted_page(self, seed):
        universe = _random_universe(seed)
        sort = SortSpec(field="pe_ratio", order="asc")
        for filters in RANDOM_FILTERS:
            full = sort_records(apply_filters(universe, filters), sort)
            for limit, offset in [(7, 0), (7, 7), (3, 20), (50, 10)]:
                page = query(universe, filters, sort, limit=limit, offset=offset).results
                assert page == full[offset : offset + limit]

    def test_idempotent(self, five_stocks):
        args = (five_stocks, FilterSpec(market_cap=RangeClause(min=1e12)), SortSpec(field="price"))
        first = query(*args, limit=3, offset=1)
        second = query(*args, limit=3, offset=1)
        assert first.model_dump_json() == second.model_dump_json()

    def test_universe_not_mutated(self, five_stocks):
        universe = list(five_stocks)
        query(universe, FilterSpec(), SortSpec(field="price", order="asc"))
        assert tickers(universe) == ["AAPL", "MSFT", "GOOGL", "AMZN", "NVDA"]


class TestScreenerEngine:
    def test_custom_ceiling(self, five_stocks):
        engine = ScreenerEngine(max_limit=2)
        with pytest.raises(ValidationError):
            engine.query(five_stocks, FilterSpec(), limit=3)

    def test_run_applies_template(self):
        universe = [
            make_record("BIG", market_cap=3e11, dividend_yield=1.0),
            make_record("NODIV", market_cap=3e11, dividend_yield=None),
            make_record("SMALL", market_cap=5e9, dividend_yield=1.0),
        ]
        request = ScreenerQuery(template="mega-cap-stable")
        result = ScreenerEngine().run(universe, request)
        assert tickers(result.results) == ["BIG"]

    def test_run_request_filters_override_template(self):
        universe = [
            make_record("BIG", market_cap=3e11, dividend_yield=1.0),
            make_record("SMALL", market_cap=5e9, dividend_yield=1.0),
        ]
        request = ScreenerQuery(
            template="mega-cap-stable",
            filters=FilterSpec(market_cap=RangeClause(min=1e9)),
        )
        result = ScreenerEngine().run(universe, request)
        assert tickers(result.results) == ["BIG", "SMALL"]
