"""Shared fixtures."""

import pytest

from series_tracker.catalog import SeriesCatalog
from series_tracker.series import Series, UniformStructure, PerSeasonStructure
from series_tracker.utils.storage import MemoryStore
from series_tracker.workflow import SeriesTracker


def make_series(
    total_seasons=2,
    episodes=10,
    counts=None,
    season=1,
    episode=1,
    completed=False,
    series_id=1,
    name="Dark",
):
    """Build a series directly, bypassing catalog validation."""
    structure = PerSeasonStructure(counts) if counts is not None else UniformStructure(episodes)
    return Series(
        id=series_id,
        name=name,
        total_seasons=total_seasons,
        structure=structure,
        current_season=season,
        current_episode=episode,
        is_completed=completed,
    )


@pytest.fixture
def catalog():
    return SeriesCatalog()


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def tracker(store):
    return SeriesTracker(store=store)
