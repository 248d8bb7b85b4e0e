"""In-memory TTL cache for analysis responses."""
import hashlib
import json
import logging
import threading
import time
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)

ANALYSIS_PREFIX = "analysis:"
CLEANUP_INTERVAL_SECONDS = 60


def analysis_fingerprint(
    enemy_ids: list[str],
    lane: str,
    own_id: Optional[str] = None,
    options: Optional[dict] = None,
) -> str:
    """md5 of the canonical JSON of a normalized analysis request."""
    payload = json.dumps(
        {
            "enemies": list(enemy_ids),
            "lane": lane,
            "your_champion": own_id,
            "options": options or {},
        },
        sort_keys=True,
        separators=(",", ":"),
    )
    return hashlib.md5(payload.encode()).hexdigest()


def analysis_key(fingerprint: str) -> str:
    return f"{ANALYSIS_PREFIX}{fingerprint}"


class AnalysisCache:
    """Thread-safe key/value store with per-entry expiry.

    Expired entries are dropped on read, and swept opportunistically on write
    at most once per cleanup interval.
    """

    def __init__(
        self,
        default_ttl: int = 1800,
        clock: Callable[[], float] = time.monotonic,
        cleanup_interval: float = CLEANUP_INTERVAL_SECONDS,
    ):
        self.default_ttl = default_ttl
        self.cleanup_interval = cleanup_interval
        self._clock = clock
        self._entries: dict[str, tuple[float, Any]] = {}
        self._lock = threading.Lock()
        self._last_cleanup = 0.0

    def get(self, key: str) -> Optional[Any]:
        now = self._clock()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            expires_at, value = entry
            if now >= expires_at:
                del self._entries[key]
                return None
            return value

    def set(self, key: str, value: Any, ttl: Optional[int] = None) -> None:
        ttl = self.default_ttl if ttl is None else ttl
        now = self._clock()
        with self._lock:
            self._prune_expired(now)
            self._entries[key] = (now + ttl, value)

    def _prune_expired(self, now: float) -> None:
        """Drop every expired entry. Caller holds the lock."""
        if now - self._last_cleanup < self.cleanup_interval:
            return
        expired = [key for key, (expires_at, _) in self._entries.items() if now >= expires_at]
        for key in expired:
            del self._entries[key]
        self._last_cleanup = now
        if expired:
            logger.debug(f"Pruned {len(expired)} expired cache entries")

    def invalidate(self, key: str) -> bool:
        with self._lock:
            return self._entries.pop(key, None) is not None

    def invalidate_prefix(self, prefix: str) -> int:
        with self._lock:
            keys = [k for k in self._entries if k.startswith(prefix)]
            for key in keys:
                del self._entries[key]
        logger.info(f"Invalidated {len(keys)} cache entries with prefix {prefix!r}")
        return len(keys)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
        logger.info("Analysis cache cleared")

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
