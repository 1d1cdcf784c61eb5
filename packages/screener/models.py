# packages/screener/models.py

from typing import List, Optional
import orjson
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .vocabulary import DEFAULT_LIMIT, MacdSignal, SortOrder


class StockRecord(BaseModel):
    """
    One row of the queryable universe: a quote snapshot plus the
    fundamentals and technical flags the screener filters on.

    Attributes are snake_case. The upstream feed's camelCase names
    (marketCap, peRatio, aboveFiftyDayMA, ...) are accepted as aliases.
    """

    model_config = ConfigDict(
        frozen=True, populate_by_name=True, extra="ignore", allow_inf_nan=False
    )

    ticker: str
    name: str

    # Quote
    price: float
    change: float
    change_percent: float = Field(alias="changePercent")
    volume: int = Field(ge=0)
    fifty_two_week_high: float = Field(alias="fiftyTwoWeekHigh")
    fifty_two_week_low: float = Field(alias="fiftyTwoWeekLow")

    # Fundamentals (None when the company has no meaningful value)
    market_cap: float = Field(alias="marketCap", ge=0)
    pe_ratio: Optional[float] = Field(default=None, alias="peRatio")
    dividend_yield: Optional[float] = Field(default=None, alias="dividendYield")
    sector: str

    # Technicals
    rsi: Optional[float] = Field(default=None, ge=0, le=100)
    above_fifty_day_ma: bool = Field(alias="aboveFiftyDayMA")
    above_two_hundred_day_ma: bool = Field(alias="aboveTwoHundredDayMA")
    macd_signal: MacdSignal = Field(alias="macdSignal")

    @field_validator("ticker")
    @classmethod
    def _canonical_ticker(cls, value: str) -> str:
        value = value.strip().upper()
        if not value:
            raise ValueError("ticker must not be empty")
        return value


class RangeClause(BaseModel):
    """Inclusive numeric bounds. Either side may be omitted."""

    model_config = ConfigDict(extra="forbid", frozen=True, allow_inf_nan=False)

    min: Optional[float] = None
    max: Optional[float] = None

    def contains(self, value: Optional[float]) -> bool:
        # A missing value never satisfies a range, even an open-ended one
        if value is None:
            return False
        if self.min is not None and value < self.min:
            return False
        if self.max is not None and value > self.max:
            return False
        return True


class FilterSpec(BaseModel):
    """
    A conjunction of optional clauses. Absent clauses impose no constraint.
    Field names match the JSON wire format.
    """

    model_config = ConfigDict(extra="forbid")

    # Range clauses
    market_cap: Optional[RangeClause] = None
    pe_ratio: Optional[RangeClause] = None
    price: Optional[RangeClause] = None
    dividend_yield: Optional[RangeClause] = None
    volume: Optional[RangeClause] = None
    rsi: Optional[RangeClause] = None

    # Set membership
    sector: Optional[List[str]] = None

    # Moving average flags only constrain when True
    above_50ma: Optional[bool] = None
    above_200ma: Optional[bool] = None

    macd_signal: Optional[MacdSignal] = None

    def present_clauses(self) -> List[str]:
        return list(self.model_dump(exclude_none=True).keys())

    def merged_over(self, base: "FilterSpec") -> "FilterSpec":
        """Shallow merge: clauses present here replace the base's clause wholesale."""
        data = base.model_dump(exclude_none=True)
        data.update(self.model_dump(exclude_none=True))
        return FilterSpec.model_validate(data)


class SortSpec(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    # Checked against SORTABLE_FIELDS by the engine so the error can name it
    field: str
    order: SortOrder = SortOrder.DESC


class Pagination(BaseModel):
    """Page window. The upper bound on limit is configurable and is checked
    by validate_pagination."""

    model_config = ConfigDict(frozen=True)

    limit: int = Field(default=DEFAULT_LIMIT, ge=0)
    offset: int = Field(default=0, ge=0)


class ScreenerQuery(BaseModel):
    """A fully parsed request, ready for the engine."""

    filters: FilterSpec = Field(default_factory=FilterSpec)
    sort: Optional[SortSpec] = None
    pagination: Pagination = Field(default_factory=Pagination)
    template: Optional[str] = None

    def cache_key(self) -> str:
        """Canonical JSON form; equal queries produce equal keys."""
        payload = self.model_dump(mode="json", exclude_none=True)
        sectors = payload.get("filters", {}).get("sector")
        if sectors is not None:
            payload["filters"]["sector"] = sorted(sectors)
        return orjson.dumps(payload, option=orjson.OPT_SORT_KEYS).decode()

    def resolved_filters(self) -> FilterSpec:
        """Filters with the named template (if any) laid underneath them."""
        if not self.template:
            return self.filters

        # templates imports this module
        from .templates import apply_template

        return apply_template(self.template, self.filters)


class QueryResult(BaseModel):
    total: int
    results: List[StockRecord]
