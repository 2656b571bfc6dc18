# cache.py
import logging
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable, Optional

from .models.schema import AuditResult

log = logging.getLogger("webcheck")

DEFAULT_MAX_ENTRIES = 200
DEFAULT_TTL = 15 * 60  # seconds


@dataclass(frozen=True)
class CacheEntry:
    data: AuditResult
    inserted_at: float


class ResultCache:
    """In-process LRU cache of audit results with a per-entry time-to-live.

    Keys are normalized target URLs. Entries are never updated in place: a
    ``set`` replaces the entry and restarts both its recency and its TTL.
    """

    def __init__(
        self,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        ttl: float = DEFAULT_TTL,
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self.max_entries = max_entries
        self.ttl = ttl
        self._clock = clock
        self._entries: "OrderedDict[str, CacheEntry]" = OrderedDict()

    def __len__(self):
        return len(self._entries)

    def __contains__(self, key):
        return self.get(key) is not None

    def _expired(self, entry: CacheEntry) -> bool:
        return self._clock() - entry.inserted_at >= self.ttl

    def get(self, key: str) -> Optional[CacheEntry]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._expired(entry):
            del self._entries[key]
            return None
        self._entries.move_to_end(key)
        return entry

    def set(self, key: str, value: AuditResult) -> CacheEntry:
        entry = CacheEntry(data=value, inserted_at=self._clock())
        self._entries[key] = entry
        self._entries.move_to_end(key)
        while len(self._entries) > self.max_entries:
            evicted, _ = self._entries.popitem(last=False)
            log.debug("Evicted %s from result cache", evicted)
        return entry

    def clear(self):
        self._entries.clear()
        log.info("Cache cleared")
