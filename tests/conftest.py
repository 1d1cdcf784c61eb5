"""Shared fixtures for the screener test-suite.

Run with:
    pytest -v

No Postgres or Redis is needed: the API tests run against in-memory SQLite
(aiosqlite) and the cache tests against fakeredis.
"""
import os

# Must be set before the settings singleton is imported anywhere
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("CACHE_ENABLED", "false")
os.environ.setdefault("LOG_TO_FILE", "false")

import pytest

from packages.screener.models import StockRecord


# ─────────────────────────────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────────────────────────────

def make_record(ticker, **overrides) -> StockRecord:
    """Build a StockRecord with neutral defaults; override only what the test cares about."""
    data = dict(
        ticker=ticker,
        name=f"{ticker} Corp",
        price=100.0,
        change=1.0,
        change_percent=1.0,
        market_cap=1_000_000_000,
        pe_ratio=20.0,
        dividend_yield=1.0,
        rsi=50.0,
        volume=1_000_000,
        sector="Industrials",
        fifty_two_week_high=120.0,
        fifty_two_week_low=80.0,
        above_fifty_day_ma=True,
        above_two_hundred_day_ma=True,
        macd_signal="neutral",
    )
    data.update(overrides)
    return StockRecord(**data)


def tickers(records):
    return [r.ticker for r in records]


# ─────────────────────────────────────────────────────────────────────────────
# Fixtures
# ─────────────────────────────────────────────────────────────────────────────

@pytest.fixture
def five_stocks():
    """The five-record universe used by the documented scenarios.

    No sector is exactly "Technology".
    """
    return (
        make_record("AAPL", market_cap=2.8e12, pe_ratio=28.5, price=178.72,
                    sector="Information Technology", macd_signal="bullish"),
        make_record("MSFT", market_cap=2.4e12, pe_ratio=35.2, price=378.91,
                    sector="Software", macd_signal="neutral"),
        make_record("GOOGL", market_cap=1.7e12, pe_ratio=25.8, price=139.69,
                    sector="Communication Services", dividend_yield=None,
                    above_fifty_day_ma=False, macd_signal="bullish"),
        make_record("AMZN", market_cap=1.5e12, pe_ratio=None, price=151.94,
                    sector="Consumer Discretionary", dividend_yield=None,
                    rsi=None, macd_signal="bearish"),
        make_record("NVDA", market_cap=1.2e12, pe_ratio=62.1, price=495.22,
                    sector="Semiconductors", above_two_hundred_day_ma=False,
                    macd_signal="bullish"),
    )
