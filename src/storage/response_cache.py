"""
In-memory response cache for the Addy backend.

Single process, no lock: concurrent misses may both compute and both write,
the last write wins. Time is passed in by the caller so expiry is testable
without touching the wall clock. Callers use a monotonic clock.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

RECOMMENDATIONS_KEY = "recommendations"
DEFAULT_TTL_S = 300.0


@dataclass
class CacheEntry:
    key: str
    value: Any
    expires_at: float


class ResponseCache:
    def __init__(self, ttl_s: float = DEFAULT_TTL_S):
        if ttl_s <= 0:
            raise ValueError("ttl_s must be positive")
        self.ttl_s = ttl_s
        self._entries: Dict[str, CacheEntry] = {}

    def get(self, key: str, now: float) -> Optional[Any]:
        """Return the cached value, or None once `now` reaches the expiry."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if now >= entry.expires_at:
            self._entries.pop(key, None)
            return None
        return entry.value

    def set(self, key: str, value: Any, now: float) -> CacheEntry:
        entry = CacheEntry(key=key, value=value, expires_at=now + self.ttl_s)
        self._entries[key] = entry
        return entry

    def purge_expired(self, now: float) -> int:
        expired = [k for k, e in list(self._entries.items()) if now >= e.expires_at]
        for k in expired:
            self._entries.pop(k, None)
        if expired:
            logger.debug(f"Purged {len(expired)} expired cache entries")
        return len(expired)

    def __len__(self) -> int:
        return len(self._entries)
