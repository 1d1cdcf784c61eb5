# packages/screener/universe.py

import asyncio
import hashlib
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from operator import attrgetter
from typing import Awaitable, Callable, Iterable, Optional, Sequence, Tuple

import orjson

from packages.quant_lib.logging import get_logger
from .errors import UniverseError
from .models import StockRecord
from .seed import seed_records

logger = get_logger("universe")

UniverseLoader = Callable[[], Awaitable[Sequence[StockRecord]]]


def fingerprint(records: Sequence[StockRecord]) -> str:
    """Content hash of a universe; identical data gives an identical version."""
    payload = orjson.dumps([r.model_dump(mode="json") for r in records])
    return hashlib.sha1(payload).hexdigest()[:16]


@dataclass(frozen=True)
class UniverseSnapshot:
    """An immutable view of the universe at one point in time."""

    records: Tuple[StockRecord, ...]
    version: str
    source: str
    loaded_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def build(cls, records: Iterable[StockRecord], source: str) -> "UniverseSnapshot":
        """
        Records are held in ticker order, whatever order the feed or the
        store produced them in: equal content gives an equal version and an
        equal unsorted result order.
        """
        records = tuple(sorted(records, key=attrgetter("ticker")))

        for previous, record in zip(records, records[1:]):
            if previous.ticker == record.ticker:
                raise UniverseError(f"Duplicate ticker in universe: {record.ticker}")

        return cls(records=records, version=fingerprint(records), source=source)

    def __len__(self):
        return len(self.records)


class UniverseProvider:
    """
    Holds the current snapshot and reloads it when it ages past the TTL.

    Readers grab `self._snapshot` once and keep using that object, so a
    concurrent reload swaps the reference without tearing an in-flight query.
    Loader errors propagate to the caller; the old snapshot is not served
    in their place.
    """

    def __init__(
        self,
        ttl_seconds: int = 300,
        seed_when_empty: bool = True,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl_seconds = ttl_seconds
        self.seed_when_empty = seed_when_empty
        self._clock = clock
        self._snapshot: Optional[UniverseSnapshot] = None
        self._refreshed_at: Optional[float] = None
        self._lock = asyncio.Lock()

    @property
    def current(self) -> Optional[UniverseSnapshot]:
        return self._snapshot

    def _is_fresh(self) -> bool:
        if self._snapshot is None or self._refreshed_at is None:
            return False
        return (self._clock() - self._refreshed_at) < self.ttl_seconds

    def replace(self, records: Iterable[StockRecord], source: str) -> UniverseSnapshot:
        snapshot = UniverseSnapshot.build(records, source=source)
        # Single reference assignment: readers see the old or the new snapshot
        self._snapshot = snapshot
        self._refreshed_at = self._clock()
        logger.info(
            f"Universe swapped: {len(snapshot)} records from '{source}' (version {snapshot.version})"
        )
        return snapshot

    def invalidate(self) -> None:
        self._refreshed_at = None

    async def get_snapshot(self, loader: UniverseLoader) -> UniverseSnapshot:
        snapshot = self._snapshot
        if snapshot is not None and self._is_fresh():
            return snapshot

        async with self._lock:
            # Another request may have reloaded while we waited
            if self._is_fresh():
                return self._snapshot

            records = list(await loader())
            source = "store"

            if not records and self.seed_when_empty:
                logger.warning("Universe store is empty. Falling back to seed data.")
                records = seed_records()
                source = "seed"

            return self.replace(records, source=source)
