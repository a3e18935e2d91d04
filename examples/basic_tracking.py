#!/usr/bin/env python3
"""
Basic Tracking Example
======================

Track two series with different season layouts and step through them.
"""

import asyncio
from pathlib import Path

from series_tracker import SeriesTracker, JsonFileStore


async def main():
    """Basic progress tracking example."""

    output_dir = Path("output")
    store = JsonFileStore(output_dir / "example_tracker.json")

    async with SeriesTracker(store=store) as tracker:
        print("=== Series Tracker ===")

        dark = tracker.create_series("Dark", 3, episodes_per_season=10).series
        fleabag = tracker.create_series("Fleabag", 2, season_episode_map={1: 6, 2: 6}).series

        for _ in range(12):
            tracker.advance(dark.id)
        tracker.rewind(dark.id)

        for _ in range(20):
            result = tracker.advance(fleabag.id)
        print(f"Fleabag completed: {result.series.is_completed}")

        result = tracker.advance(999)
        print(f"Unknown id: {result.error_code}")

        for series in tracker.list_series():
            print(f"\n{series.name}: {series.position_label}")
            print(f"  Total: {series.total_seasons} seasons, {series.total_episodes} episodes")

    print(f"\nSaved to {store.path}")


if __name__ == "__main__":
    asyncio.run(main())
