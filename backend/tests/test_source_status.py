"""Tests for data source status and freshness."""
from datetime import datetime, timedelta, timezone

import pytest

from rift_counter.models.analysis import Uncertainty
from rift_counter.repositories.source_status import SourceStatusRepository

START = datetime(2025, 12, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def repo():
    return SourceStatusRepository(
        source_weights={"WildRiftFire": 1.0, "WR-META": 0.9},
        patch_version="5.4",
        patch_date="2025-12-01",
        now=START,
    )


class TestDataFreshness:
    def test_fresh_data_is_low_uncertainty(self, repo):
        freshness = repo.get_data_freshness(START + timedelta(hours=2))
        assert freshness.uncertainty == Uncertainty.LOW
        assert freshness.data_freshness == "fresh"
        assert freshness.reason is None
        assert freshness.patch_version == "5.4"

    def test_day_old_data_is_medium(self, repo):
        freshness = repo.get_data_freshness(START + timedelta(hours=30))
        assert freshness.uncertainty == Uncertainty.MEDIUM
        assert freshness.reason == "Data is more than 24 hours old"

    def test_outdated_data_is_high(self, repo):
        freshness = repo.get_data_freshness(START + timedelta(hours=80))
        assert freshness.uncertainty == Uncertainty.HIGH
        assert freshness.data_freshness == "outdated"

    def test_error_source_forces_medium_with_names(self, repo):
        repo.update_source_status("WR-META", "error", now=START)
        freshness = repo.get_data_freshness(START + timedelta(hours=80))
        assert freshness.uncertainty == Uncertainty.MEDIUM
        assert "WR-META" in freshness.reason

    def test_stale_sources_lift_low_to_medium(self, repo):
        repo.mark_all_stale()
        freshness = repo.get_data_freshness(START + timedelta(hours=1))
        assert freshness.uncertainty == Uncertainty.MEDIUM
        assert all(s.status == "stale" for s in repo.get_sources_status())


class TestUpdates:
    def test_update_patch_info(self, repo):
        repo.update_patch_info("5.5", "2026-01-10")
        freshness = repo.get_data_freshness(START)
        assert freshness.patch_version == "5.5"
        assert freshness.patch_date == "2026-01-10"

    def test_update_source_status_refreshes_fetch_time(self, repo):
        later = START + timedelta(hours=5)
        repo.update_source_status("WildRiftFire", "healthy", item_count=200, now=later)
        source = next(s for s in repo.get_sources_status() if s.name == "WildRiftFire")
        assert source.last_fetched == later
        assert source.item_count == 200

    def test_unknown_source_is_ignored(self, repo):
        repo.update_source_status("Nope", "error")
        assert "Nope" not in {s.name for s in repo.get_sources_status()}


def test_build_context_snapshot(repo):
    now = START + timedelta(hours=1)
    context = repo.build_context(now)
    assert context.now == now
    assert context.patch_version == "5.4"
    assert context.reliability_weights == {"WildRiftFire": 1.0, "WR-META": 0.9}
    assert {s.name for s in context.sources} == {"WildRiftFire", "WR-META", "WildRiftGuides"}
    context.reliability_weights["WildRiftFire"] = 0.0
    assert repo.get_source_reliability_weights()["WildRiftFire"] == 1.0
