# packages/screener/views.py

from typing import Any, Dict, Mapping, Optional
from pydantic import BaseModel

from .models import StockRecord
from .vocabulary import MacdSignal

# StockRecord attribute -> JSON key. Every record attribute appears exactly once.
VIEW_FIELD_MAP: Dict[str, str] = {
    "ticker": "ticker",
    "name": "name",
    "price": "price",
    "change": "change",
    "change_percent": "change_percent",
    "market_cap": "market_cap",
    "pe_ratio": "pe_ratio",
    "dividend_yield": "dividend_yield",
    "rsi": "rsi",
    "volume": "volume",
    "sector": "sector",
    "fifty_two_week_high": "fifty_two_week_high",
    "fifty_two_week_low": "fifty_two_week_low",
    "above_fifty_day_ma": "above_50ma",
    "above_two_hundred_day_ma": "above_200ma",
    "macd_signal": "macd_signal",
}

_RECORD_FIELD_MAP: Dict[str, str] = {wire: attr for attr, wire in VIEW_FIELD_MAP.items()}


class StockRecordView(BaseModel):
    """The snake_case row returned by the screener API and stored in the cache table."""

    ticker: str
    name: str
    price: float
    change: float
    change_percent: float
    market_cap: float
    pe_ratio: Optional[float]
    dividend_yield: Optional[float]
    rsi: Optional[float]
    volume: int
    sector: str
    fifty_two_week_high: float
    fifty_two_week_low: float
    above_50ma: bool
    above_200ma: bool
    macd_signal: MacdSignal


def to_view(record: StockRecord) -> StockRecordView:
    return StockRecordView(
        **{wire: getattr(record, attr) for attr, wire in VIEW_FIELD_MAP.items()}
    )


def to_view_dict(record: StockRecord) -> Dict[str, Any]:
    return to_view(record).model_dump(mode="json")


def record_from_view(row: Mapping[str, Any]) -> StockRecord:
    """Inverse of to_view, for rows read back from the cache table."""
    return StockRecord.model_validate(
        {_RECORD_FIELD_MAP[key]: value for key, value in row.items() if key in _RECORD_FIELD_MAP}
    )
