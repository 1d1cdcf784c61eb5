# packages/screener/vocabulary.py

from enum import Enum


class StrEnum(str, Enum):
    """Base class to make enums behave like strings for easy use in Pydantic/JSON."""

    def __str__(self):
        return self.value


class Sector(StrEnum):
    """Sectors offered by the screener UI. Records may carry others."""

    TECHNOLOGY = "Technology"
    HEALTHCARE = "Healthcare"
    FINANCE = "Finance"
    ENERGY = "Energy"
    CONSUMER_DISCRETIONARY = "Consumer Discretionary"
    CONSUMER_STAPLES = "Consumer Staples"
    INDUSTRIALS = "Industrials"
    MATERIALS = "Materials"
    REAL_ESTATE = "Real Estate"
    UTILITIES = "Utilities"
    COMMUNICATION_SERVICES = "Communication Services"


class MacdSignal(StrEnum):
    BULLISH = "bullish"
    BEARISH = "bearish"
    NEUTRAL = "neutral"


class SortOrder(StrEnum):
    ASC = "asc"
    DESC = "desc"


class TemplateCategory(StrEnum):
    VALUE = "value"
    GROWTH = "growth"
    DIVIDEND = "dividend"
    TECHNICAL = "technical"
    MOMENTUM = "momentum"


class SortField(StrEnum):
    """Columns a result set can be ordered by (wire names)."""

    # Text
    TICKER = "ticker"
    NAME = "name"
    SECTOR = "sector"

    # Quote
    PRICE = "price"
    CHANGE = "change"
    CHANGE_PERCENT = "change_percent"
    FIFTY_TWO_WEEK_HIGH = "fifty_two_week_high"
    FIFTY_TWO_WEEK_LOW = "fifty_two_week_low"

    # Fundamentals
    MARKET_CAP = "market_cap"
    PE_RATIO = "pe_ratio"
    DIVIDEND_YIELD = "dividend_yield"

    # Technicals
    RSI = "rsi"
    VOLUME = "volume"


SORTABLE_FIELDS = frozenset(f.value for f in SortField)
STRING_FIELDS = frozenset({SortField.TICKER.value, SortField.NAME.value, SortField.SECTOR.value})

# Range clauses and the record attribute each one reads
RANGE_FIELDS = ("market_cap", "pe_ratio", "price", "dividend_yield", "volume", "rsi")

# Pagination contract
MAX_LIMIT = 500
DEFAULT_LIMIT = 100
