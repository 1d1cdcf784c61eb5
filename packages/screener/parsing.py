# packages/screener/parsing.py

import math
from typing import Any, Dict, Mapping, Optional, Tuple
from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from .engine import validate_pagination, validate_sort
from .errors import ValidationError
from .models import FilterSpec, Pagination, ScreenerQuery, SortSpec
from .templates import get_template
from .vocabulary import DEFAULT_LIMIT, MAX_LIMIT, MacdSignal, SortOrder

# Query-string key -> (FilterSpec clause, bound)
RANGE_PARAMS: Dict[str, Tuple[str, str]] = {
    "market_cap_min": ("market_cap", "min"),
    "market_cap_max": ("market_cap", "max"),
    "pe_min": ("pe_ratio", "min"),
    "pe_max": ("pe_ratio", "max"),
    "price_min": ("price", "min"),
    "price_max": ("price", "max"),
    "dividend_yield_min": ("dividend_yield", "min"),
    "dividend_yield_max": ("dividend_yield", "max"),
    "volume_min": ("volume", "min"),
    "volume_max": ("volume", "max"),
    "rsi_min": ("rsi", "min"),
    "rsi_max": ("rsi", "max"),
}

BOOLEAN_PARAMS = ("above_50ma", "above_200ma")

OTHER_PARAMS = (
    "sector",
    "macd_signal",
    "sort_field",
    "sort_order",
    "limit",
    "offset",
    "template",
)

FLAT_PARAMS = frozenset(RANGE_PARAMS) | frozenset(BOOLEAN_PARAMS) | frozenset(OTHER_PARAMS)

_TRUE = {"true", "1", "yes"}
_FALSE = {"false", "0", "no"}


class _StructuredBody(BaseModel):
    model_config = ConfigDict(extra="forbid")

    filters: FilterSpec
    sort: Optional[SortSpec] = None
    limit: Optional[int] = None
    offset: int = 0
    template: Optional[str] = None


def describe_pydantic_error(exc: PydanticValidationError) -> Tuple[str, Optional[str]]:
    """Flattens the first pydantic error into ('loc: message', 'loc')."""
    first = exc.errors()[0]
    loc = ".".join(str(part) for part in first.get("loc", ()))
    message = first.get("msg", "Invalid value")
    if first.get("type") == "extra_forbidden":
        message = "Unrecognized field"
    return (f"{loc}: {message}" if loc else message), (loc or None)


def _finalize(
    filters: FilterSpec,
    sort: Optional[SortSpec],
    limit: int,
    offset: int,
    template: Optional[str],
    max_limit: int,
) -> ScreenerQuery:
    validate_pagination(limit, offset, max_limit)
    if sort is not None:
        validate_sort(sort)
    if template:
        # Fail at parse time, not halfway through execution
        get_template(template)

    return ScreenerQuery(
        filters=filters,
        sort=sort,
        pagination=Pagination(limit=limit, offset=offset),
        template=template or None,
    )


def parse_filter_spec(payload: Any) -> FilterSpec:
    """Validates a bare FilterSpec (e.g. a saved screen's filters)."""
    if not isinstance(payload, Mapping):
        raise ValidationError("filters must be a JSON object", field="filters")
    try:
        return FilterSpec.model_validate(dict(payload))
    except PydanticValidationError as exc:
        message, field = describe_pydantic_error(exc)
        raise ValidationError(f"filters.{message}", field=field) from None


# --- Structured (JSON body) form ---


def parse_structured_query(
    payload: Any,
    default_limit: int = DEFAULT_LIMIT,
    max_limit: int = MAX_LIMIT,
) -> ScreenerQuery:
    """
    Parses {"filters": {...}, "sort"?: {...}, "limit"?: int, "offset"?: int,
    "template"?: str}. `filters` is mandatory, even if empty.
    """
    if not isinstance(payload, Mapping):
        raise ValidationError("Request body must be a JSON object")
    if payload.get("filters") is None:
        raise ValidationError("Filters are required", field="filters")

    try:
        body = _StructuredBody.model_validate(dict(payload))
    except PydanticValidationError as exc:
        message, field = describe_pydantic_error(exc)
        raise ValidationError(message, field=field) from None

    limit = default_limit if body.limit is None else body.limit
    return _finalize(body.filters, body.sort, limit, body.offset, body.template, max_limit)


# --- Flat (query-string) form ---


def _parse_number(key: str, raw: str) -> float:
    try:
        value = float(raw)
    except ValueError:
        raise ValidationError(f"{key} must be a number, got '{raw}'", field=key) from None
    if not math.isfinite(value):
        raise ValidationError(f"{key} must be a finite number", field=key)
    return value


def _parse_int(key: str, raw: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise ValidationError(f"{key} must be an integer, got '{raw}'", field=key) from None


def _parse_bool(key: str, raw: str) -> bool:
    lowered = raw.lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ValidationError(f"{key} must be 'true' or 'false', got '{raw}'", field=key)


def parse_flat_query(
    params: Mapping[str, str],
    default_limit: int = DEFAULT_LIMIT,
    max_limit: int = MAX_LIMIT,
) -> ScreenerQuery:
    """
    Parses the GET form (market_cap_min=...&sector=Technology,Energy&sort_field=...)
    into the same ScreenerQuery as the JSON form. Unknown keys are rejected.
    Blank values are treated as absent.
    """
    unknown = sorted(key for key in params.keys() if key not in FLAT_PARAMS)
    if unknown:
        raise ValidationError(
            f"Unrecognized query parameter(s): {', '.join(unknown)}", field=unknown[0]
        )

    values = {key: str(value).strip() for key, value in params.items()}
    values = {key: value for key, value in values.items() if value != ""}

    filters: Dict[str, Any] = {}

    for key, (clause, bound) in RANGE_PARAMS.items():
        if key in values:
            filters.setdefault(clause, {})[bound] = _parse_number(key, values[key])

    if "sector" in values:
        sectors = [s.strip() for s in values["sector"].split(",") if s.strip()]
        if sectors:
            filters["sector"] = sectors

    for key in BOOLEAN_PARAMS:
        if key in values:
            filters[key] = _parse_bool(key, values[key])

    if "macd_signal" in values:
        try:
            filters["macd_signal"] = MacdSignal(values["macd_signal"].lower())
        except ValueError:
            raise ValidationError(
                f"macd_signal must be one of: {', '.join(m.value for m in MacdSignal)}",
                field="macd_signal",
            ) from None

    sort = None
    if "sort_field" in values:
        order = values.get("sort_order", SortOrder.DESC.value).lower()
        if order not in (SortOrder.ASC.value, SortOrder.DESC.value):
            raise ValidationError("sort_order must be 'asc' or 'desc'", field="sort_order")
        sort = SortSpec(field=values["sort_field"], order=SortOrder(order))

    limit = _parse_int("limit", values["limit"]) if "limit" in values else default_limit
    offset = _parse_int("offset", values["offset"]) if "offset" in values else 0

    return _finalize(
        FilterSpec.model_validate(filters),
        sort,
        limit,
        offset,
        values.get("template"),
        max_limit,
    )
