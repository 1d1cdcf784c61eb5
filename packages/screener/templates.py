# packages/screener/templates.py

from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict

from .errors import TemplateNotFoundError
from .models import FilterSpec
from .vocabulary import TemplateCategory


class ScreenerTemplate(BaseModel):
    """A named, read-only preset used to pre-populate a FilterSpec."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str
    icon: str
    category: TemplateCategory
    popular: bool
    filters: FilterSpec


def _template(**kwargs) -> ScreenerTemplate:
    return ScreenerTemplate.model_validate(kwargs)


# Ordered as shown in the dashboard
SCREENER_TEMPLATES: List[ScreenerTemplate] = [
    _template(
        id="value-stocks",
        name="Value Stocks",
        description="Undervalued companies with low P/E ratios and high dividend yields",
        icon="💎",
        category="value",
        popular=True,
        filters={
            "pe_ratio": {"max": 15},
            "dividend_yield": {"min": 3},
            "market_cap": {"min": 2_000_000_000},  # Mid cap and above
        },
    ),
    _template(
        id="growth-stocks",
        name="Growth Stocks",
        description="High-growth companies with strong momentum",
        icon="🚀",
        category="growth",
        popular=True,
        filters={
            "market_cap": {"min": 10_000_000_000},  # Large cap
            "pe_ratio": {"min": 20},
            "above_50ma": True,
            "above_200ma": True,
        },
    ),
    _template(
        id="dividend-kings",
        name="Dividend Kings",
        description="Reliable dividend payers with consistent payouts",
        icon="👑",
        category="dividend",
        popular=True,
        filters={
            "dividend_yield": {"min": 2},
            "market_cap": {"min": 10_000_000_000},
        },
    ),
    _template(
        id="momentum-plays",
        name="Momentum Plays",
        description="Stocks with strong upward price action and technical signals",
        icon="⚡",
        category="momentum",
        popular=True,
        filters={
            "above_50ma": True,
            "above_200ma": True,
            "macd_signal": "bullish",
            "rsi": {"min": 50, "max": 70},
        },
    ),
    _template(
        id="oversold-bargains",
        name="Oversold Bargains",
        description="Potentially undervalued stocks with low RSI",
        icon="📉",
        category="technical",
        popular=False,
        filters={
            "rsi": {"max": 30},
            "market_cap": {"min": 1_000_000_000},
        },
    ),
    _template(
        id="breakout-candidates",
        name="Breakout Candidates",
        description="Stocks approaching 52-week highs with high volume",
        icon="📈",
        category="technical",
        popular=False,
        filters={
            "above_200ma": True,
            "volume": {"min": 30},
        },
    ),
    _template(
        id="tech-leaders",
        name="Tech Leaders",
        description="Leading technology companies with strong fundamentals",
        icon="💻",
        category="growth",
        popular=True,
        filters={
            "sector": ["Technology"],
            "market_cap": {"min": 10_000_000_000},
            "above_200ma": True,
        },
    ),
    _template(
        id="healthcare-value",
        name="Healthcare Value",
        description="Undervalued healthcare stocks with dividends",
        icon="🏥",
        category="value",
        popular=False,
        filters={
            "sector": ["Healthcare"],
            "pe_ratio": {"max": 20},
            "dividend_yield": {"min": 1},
        },
    ),
    _template(
        id="mega-cap-stable",
        name="Mega Cap Stable",
        description="Largest, most stable companies in the market",
        icon="🏛️",
        category="value",
        popular=False,
        filters={
            "market_cap": {"min": 200_000_000_000},  # Mega cap
            "dividend_yield": {"min": 0.5},
        },
    ),
    _template(
        id="mid-cap-growth",
        name="Mid-Cap Growth",
        description="Medium-sized companies with high growth potential",
        icon="🌱",
        category="growth",
        popular=False,
        filters={
            "market_cap": {"min": 2_000_000_000, "max": 10_000_000_000},
            "above_50ma": True,
            "macd_signal": "bullish",
        },
    ),
    _template(
        id="energy-sector",
        name="Energy Sector",
        description="Energy companies with attractive valuations",
        icon="⚡",
        category="value",
        popular=False,
        filters={
            "sector": ["Energy"],
            "pe_ratio": {"max": 15},
        },
    ),
    _template(
        id="financial-strength",
        name="Financial Strength",
        description="Strong financial institutions with good dividends",
        icon="🏦",
        category="dividend",
        popular=False,
        filters={
            "sector": ["Finance"],
            "dividend_yield": {"min": 2},
            "pe_ratio": {"max": 15},
        },
    ),
]

_BY_ID: Dict[str, ScreenerTemplate] = {t.id: t for t in SCREENER_TEMPLATES}


def list_templates(
    category: Optional[TemplateCategory] = None, popular_only: bool = False
) -> List[ScreenerTemplate]:
    templates = SCREENER_TEMPLATES
    if category is not None:
        templates = [t for t in templates if t.category == category]
    if popular_only:
        templates = [t for t in templates if t.popular]
    return list(templates)


def get_template(template_id: str) -> ScreenerTemplate:
    try:
        return _BY_ID[template_id]
    except KeyError:
        raise TemplateNotFoundError(template_id) from None


def apply_template(template_id: str, filters: Optional[FilterSpec] = None) -> FilterSpec:
    """
    Template clauses form the base; any clause present in `filters`
    replaces the template's clause for that field.
    """
    template = get_template(template_id)
    if filters is None:
        return template.filters.model_copy(deep=True)
    return filters.merged_over(template.filters)
