"""
Series Tracker
==============

Command boundary between a presentation layer (CLI, HTTP) and the core.

Every command returns a ``CommandResult``; errors raised inside the
catalog or the progress engine are caught here and returned as values.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional, Tuple, Dict, Any, Mapping

from ..catalog.catalog import SeriesCatalog
from ..core.config import TrackerConfig
from ..core.exceptions import (
    SeriesTrackerError,
    InvalidInputError,
    MissingSeasonCountError,
)
from ..series import progress
from ..series.series import Series
from ..series.structure import SeasonStructure, UniformStructure, PerSeasonStructure
from ..utils.storage import KeyValueStore, create_store
from .persistence import PersistenceWorker, ErrorCallback

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    """Outcome of a tracker command."""

    command: str
    success: bool = True
    series: Optional[Series] = None
    error: Optional[SeriesTrackerError] = None

    @property
    def error_code(self) -> Optional[str]:
        return self.error.code if self.error else None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "command": self.command,
            "success": self.success,
            "series": self.series.to_dict() if self.series else None,
            "error": self.error.to_dict() if self.error else None,
        }


class SeriesTracker:
    """
    Tracks watch progress across a user's series.

    Usage:
        async with SeriesTracker(store=JsonFileStore("tracker.json")) as tracker:
            result = tracker.create_series("Dark", 3, episodes_per_season=10)
            tracker.advance(result.series.id)

    Commands are synchronous and apply to the in-memory catalog at once.
    After ``start()``, every change is handed to a background persistence
    worker; saving is never part of a command's result.
    """

    def __init__(
        self,
        catalog: Optional[SeriesCatalog] = None,
        store: Optional[KeyValueStore] = None,
        config: Optional[TrackerConfig] = None,
        on_save_error: Optional[ErrorCallback] = None,
    ):
        self.config = config or TrackerConfig()
        self.catalog = catalog if catalog is not None else SeriesCatalog()
        self.store = store if store is not None else create_store(self.config.storage)
        self.worker = PersistenceWorker(
            self.store,
            config=self.config.persistence,
            on_error=on_save_error,
        )

        self._is_dark_theme = False
        self._unsubscribe = None

    # =========================================================================
    # Lifecycle
    # =========================================================================

    async def start(self) -> None:
        """
        Load the stored snapshot and theme, then start saving changes.

        Raises:
            StorageError: If the store exists but cannot be read
        """
        series = await asyncio.to_thread(self.store.load_series)
        next_id = await asyncio.to_thread(self.store.load_next_id)
        self._is_dark_theme = await asyncio.to_thread(self.store.load_theme)
        self.catalog.seed(series, next_id=next_id)

        await self.worker.start()
        self._unsubscribe = self.catalog.subscribe(self._save_snapshot)
        logger.info(f"Tracker started with {len(series)} series")

    async def stop(self) -> None:
        """Stop saving changes, after writing any that are pending."""
        if self._unsubscribe:
            self._unsubscribe()
            self._unsubscribe = None
        await self.worker.stop()

    async def __aenter__(self):
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.stop()

    # =========================================================================
    # Commands
    # =========================================================================

    def create_series(
        self,
        name: str,
        total_seasons: int,
        episodes_per_season: Optional[int] = None,
        season_episode_map: Optional[Mapping[int, int]] = None,
    ) -> CommandResult:
        """
        Start tracking a new series at Season 1, Episode 1.

        Exactly one of ``episodes_per_season`` or ``season_episode_map``
        must be given.
        """
        try:
            structure = self._build_structure(episodes_per_season, season_episode_map)
            series = self.catalog.create(name, total_seasons, structure)
        except SeriesTrackerError as e:
            return self._failed("create", e)
        return CommandResult(command="create", series=series)

    def find_series(self, series_id: int) -> CommandResult:
        try:
            series = self.catalog.find(series_id)
        except SeriesTrackerError as e:
            return self._failed("find", e)
        return CommandResult(command="find", series=series)

    def delete_series(self, series_id: int) -> CommandResult:
        """Stop tracking a series. Unknown ids succeed without effect."""
        removed = self.catalog.delete(series_id)
        return CommandResult(command="delete", series=removed)

    def advance(self, series_id: int) -> CommandResult:
        """Move a series to its next episode."""
        return self._apply("advance", series_id, progress.advance)

    def rewind(self, series_id: int) -> CommandResult:
        """Move a series back one episode."""
        return self._apply("rewind", series_id, progress.rewind)

    def list_series(self) -> Tuple[Series, ...]:
        return self.catalog.list()

    # =========================================================================
    # Theme preference
    # =========================================================================

    @property
    def is_dark_theme(self) -> bool:
        return self._is_dark_theme

    def toggle_theme(self) -> bool:
        """Flip the dark-theme flag and return the new value."""
        self._is_dark_theme = not self._is_dark_theme
        if self.worker.running:
            self.worker.submit_theme(self._is_dark_theme)
        return self._is_dark_theme

    # =========================================================================
    # Internals
    # =========================================================================

    def _save_snapshot(self, snapshot) -> None:
        # runs under the catalog lock, so next_id belongs to this snapshot
        self.worker.submit_series(snapshot, self.catalog.next_id)

    def _apply(self, command: str, series_id: int, transition) -> CommandResult:
        try:
            series = self.catalog.update(series_id, transition)
        except MissingSeasonCountError as e:
            logger.error(f"{command} on series {series_id} failed: {e.message}")
            return self._failed(command, e)
        except SeriesTrackerError as e:
            return self._failed(command, e)
        return CommandResult(command=command, series=series)

    @staticmethod
    def _build_structure(
        episodes_per_season: Optional[int],
        season_episode_map: Optional[Mapping[int, int]],
    ) -> SeasonStructure:
        if episodes_per_season is not None and season_episode_map is not None:
            raise InvalidInputError(
                "Give either episodes per season or a per-season map, not both",
                field="episodes_per_season",
            )
        if season_episode_map is not None:
            return PerSeasonStructure(season_episode_map)
        if episodes_per_season is not None:
            return UniformStructure(episodes_per_season)
        raise InvalidInputError(
            "Episodes per season or a per-season map is required",
            field="episodes_per_season",
        )

    @staticmethod
    def _failed(command: str, error: SeriesTrackerError) -> CommandResult:
        logger.debug(f"{command} failed: {error.code}: {error.message}")
        return CommandResult(command=command, success=False, error=error)
