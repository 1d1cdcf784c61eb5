# packages/screener/engine.py

from operator import attrgetter
from typing import Iterable, Iterator, List, Optional, Sequence

from .errors import ValidationError
from .models import FilterSpec, QueryResult, ScreenerQuery, SortSpec, StockRecord
from .vocabulary import (
    DEFAULT_LIMIT,
    MAX_LIMIT,
    RANGE_FIELDS,
    SORTABLE_FIELDS,
    STRING_FIELDS,
    SortOrder,
)


# --- Validation ---


def validate_pagination(limit: int, offset: int, max_limit: int = MAX_LIMIT) -> None:
    for name, value in (("limit", limit), ("offset", offset)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValidationError(f"{name} must be an integer", field=name)
        if value < 0:
            raise ValidationError(f"{name} cannot be negative", field=name)

    if limit > max_limit:
        raise ValidationError(f"Limit cannot exceed {max_limit}", field="limit")


def validate_sort(sort: SortSpec) -> None:
    if sort.field not in SORTABLE_FIELDS:
        raise ValidationError(
            f"Invalid sort field '{sort.field}'. "
            f"Allowed: {', '.join(sorted(SORTABLE_FIELDS))}",
            field="sort.field",
        )


# --- Stage 1: Filter ---


def clause_failures(record: StockRecord, filters: FilterSpec) -> Iterator[str]:
    """Yields the name of every present clause the record fails."""
    for name in RANGE_FIELDS:
        clause = getattr(filters, name)
        if clause is not None and not clause.contains(getattr(record, name)):
            yield name

    # Empty sector list means "any sector"
    if filters.sector and record.sector not in filters.sector:
        yield "sector"

    if filters.above_50ma is True and not record.above_fifty_day_ma:
        yield "above_50ma"
    if filters.above_200ma is True and not record.above_two_hundred_day_ma:
        yield "above_200ma"

    if filters.macd_signal is not None and record.macd_signal != filters.macd_signal:
        yield "macd_signal"


def matches(record: StockRecord, filters: FilterSpec) -> bool:
    return next(clause_failures(record, filters), None) is None


def apply_filters(
    records: Iterable[StockRecord], filters: FilterSpec
) -> List[StockRecord]:
    """Order-preserving subsequence of records passing every present clause."""
    return [record for record in records if matches(record, filters)]


# --- Stage 2: Sort ---


def _string_key(value: str):
    # Case-insensitive first, raw value breaks ties so the order is total
    return (value.casefold(), value)


def sort_records(
    records: Sequence[StockRecord], sort: Optional[SortSpec]
) -> List[StockRecord]:
    """
    Stable sort on one field. Records missing the field go last in both
    directions and keep their incoming relative order.
    """
    if sort is None:
        return list(records)

    validate_sort(sort)
    field = sort.field

    present: List[StockRecord] = []
    missing: List[StockRecord] = []
    for record in records:
        if getattr(record, field) is None:
            missing.append(record)
        else:
            present.append(record)

    read = attrgetter(field)
    if field in STRING_FIELDS:

        def key(record):
            return _string_key(read(record))

    else:
        key = read

    # sorted() keeps equal elements in input order, reverse=True included
    ordered = sorted(present, key=key, reverse=sort.order == SortOrder.DESC)
    return ordered + missing


# --- Stage 3: Paginate ---


def paginate(records: Sequence[StockRecord], limit: int, offset: int) -> List[StockRecord]:
    return list(records[offset : offset + limit])


# --- Entry point ---


def query(
    universe: Sequence[StockRecord],
    filters: Optional[FilterSpec] = None,
    sort: Optional[SortSpec] = None,
    limit: int = DEFAULT_LIMIT,
    offset: int = 0,
    max_limit: int = MAX_LIMIT,
) -> QueryResult:
    """
    Filter -> Sort -> Paginate over an in-memory universe.

    Pure: the universe is never mutated and nothing is cached here.
    `total` is the number of matches before pagination.
    Raises ValidationError for bad pagination or an unknown sort field,
    before any work is done.
    """
    validate_pagination(limit, offset, max_limit)
    if sort is not None:
        validate_sort(sort)

    matched = apply_filters(universe, filters or FilterSpec())
    ordered = sort_records(matched, sort)

    return QueryResult(total=len(matched), results=paginate(ordered, limit, offset))


class ScreenerEngine:
    """Runs parsed queries against a universe with a fixed limit ceiling."""

    def __init__(self, max_limit: int = MAX_LIMIT):
        self.max_limit = max_limit

    def query(
        self,
        universe: Sequence[StockRecord],
        filters: Optional[FilterSpec] = None,
        sort: Optional[SortSpec] = None,
        limit: int = DEFAULT_LIMIT,
        offset: int = 0,
    ) -> QueryResult:
        return query(universe, filters, sort, limit, offset, max_limit=self.max_limit)

    def run(self, universe: Sequence[StockRecord], request: ScreenerQuery) -> QueryResult:
        """Resolves the request's template (if any) and executes it."""
        return self.query(
            universe,
            filters=request.resolved_filters(),
            sort=request.sort,
            limit=request.pagination.limit,
            offset=request.pagination.offset,
        )
