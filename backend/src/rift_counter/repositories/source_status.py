"""Data source status and freshness tracking.

The external refresh/patch-detection trigger calls ``update_source_status``,
``update_patch_info`` and ``mark_all_stale``; analysis code only ever sees
the immutable ``DataContext`` produced by ``build_context``.
"""

import logging
import threading
from dataclasses import dataclass, replace
from datetime import datetime, timedelta, timezone
from typing import Literal, Optional

from rift_counter.models.analysis import DataContext, DataFreshness, Uncertainty
from rift_counter.models.champion import DataSource

logger = logging.getLogger(__name__)

SourceHealth = Literal["healthy", "stale", "error"]

FRESH_HOURS = 24
STALE_HOURS = 72


@dataclass(frozen=True)
class SourceStatus:
    name: str
    url: str
    status: SourceHealth
    last_fetched: datetime
    next_refresh: datetime
    reliability: float  # 0-100
    item_count: int = 0

    def as_provenance(self) -> DataSource:
        return DataSource(
            name=self.name,
            url=self.url,
            fetched=self.last_fetched,
            reliability=self.reliability,
        )


DEFAULT_SOURCES = (
    ("WildRiftFire", "https://wildriftfire.com", 85, 150),
    ("WR-META", "https://wr-meta.com", 80, 120),
    ("WildRiftGuides", "https://wildriftguides.gg", 75, 100),
)


class SourceStatusRepository:
    """Tracks per-source fetch status, the current patch and trust weights."""

    def __init__(
        self,
        source_weights: Optional[dict[str, float]] = None,
        patch_version: str = "5.4",
        patch_date: str = "2025-12-01",
        refresh_interval_hours: int = 24,
        now: Optional[datetime] = None,
    ):
        now = now or datetime.now(timezone.utc)
        self.refresh_interval = timedelta(hours=refresh_interval_hours)
        self._weights = dict(source_weights or {})
        self._patch_version = patch_version
        self._patch_date = patch_date
        self._lock = threading.Lock()
        self._sources: dict[str, SourceStatus] = {
            name: SourceStatus(
                name=name,
                url=url,
                status="healthy",
                last_fetched=now,
                next_refresh=now + self.refresh_interval,
                reliability=reliability,
                item_count=count,
            )
            for name, url, reliability, count in DEFAULT_SOURCES
        }

    def get_sources_status(self) -> list[SourceStatus]:
        with self._lock:
            return list(self._sources.values())

    def get_source_reliability_weights(self) -> dict[str, float]:
        """Configured trust weight (0-1) per source name."""
        return dict(self._weights)

    def get_data_freshness(self, now: Optional[datetime] = None) -> DataFreshness:
        """Classify data age by the oldest source fetch.

        < 24h is low uncertainty, < 72h medium, anything older high. Sources
        marked stale lift low to medium. A source in error status forces
        medium with a reason naming the failed sources.
        """
        now = now or datetime.now(timezone.utc)
        sources = self.get_sources_status()
        oldest = min((s.last_fetched for s in sources), default=now)
        hours_since_oldest = (now - oldest).total_seconds() / 3600

        reason = None
        if hours_since_oldest < FRESH_HOURS:
            data_freshness, uncertainty = "fresh", Uncertainty.LOW
        elif hours_since_oldest < STALE_HOURS:
            data_freshness, uncertainty = "stale", Uncertainty.MEDIUM
            reason = "Data is more than 24 hours old"
        else:
            data_freshness, uncertainty = "outdated", Uncertainty.HIGH
            reason = "Data is more than 72 hours old - recommendations may be inaccurate"

        stale = [s.name for s in sources if s.status == "stale"]
        if stale and uncertainty == Uncertainty.LOW:
            uncertainty = Uncertainty.MEDIUM
            reason = "Data sources awaiting refresh after patch update"

        failed = [s.name for s in sources if s.status == "error"]
        if failed:
            uncertainty = Uncertainty.MEDIUM
            reason = f"Some data sources unavailable: {', '.join(failed)}"

        with self._lock:
            patch_version, patch_date = self._patch_version, self._patch_date
        return DataFreshness(
            uncertainty=uncertainty,
            patch_version=patch_version,
            reason=reason,
            data_freshness=data_freshness,
            patch_date=patch_date,
        )

    def build_context(self, now: Optional[datetime] = None) -> DataContext:
        """Snapshot freshness, weights and provenance for one analysis call."""
        now = now or datetime.now(timezone.utc)
        freshness = self.get_data_freshness(now)
        return DataContext(
            freshness=freshness,
            reliability_weights=self.get_source_reliability_weights(),
            patch_version=freshness.patch_version,
            now=now,
            sources=tuple(s.as_provenance() for s in self.get_sources_status()),
        )

    def update_source_status(
        self,
        source_name: str,
        status: SourceHealth,
        item_count: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> None:
        now = now or datetime.now(timezone.utc)
        with self._lock:
            source = self._sources.get(source_name)
            if source is None:
                logger.warning(f"Ignoring status update for unknown source: {source_name}")
                return
            self._sources[source_name] = replace(
                source,
                status=status,
                last_fetched=now,
                next_refresh=now + self.refresh_interval,
                item_count=source.item_count if item_count is None else item_count,
            )

    def update_patch_info(self, version: str, date: str) -> None:
        with self._lock:
            self._patch_version = version
            self._patch_date = date
        logger.info(f"Patch info updated to {version} ({date})")

    def mark_all_stale(self) -> None:
        """Flag every source stale, e.g. after a new patch is detected."""
        with self._lock:
            for name, source in self._sources.items():
                self._sources[name] = replace(source, status="stale")
        logger.info("All data sources marked stale")
