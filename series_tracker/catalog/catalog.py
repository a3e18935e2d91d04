"""
Series Catalog
==============

Ordered, identity-stable collection of tracked series.
"""

import logging
import threading
from typing import Optional, List, Tuple, Callable, Iterable

from ..core.exceptions import InvalidInputError, NotFoundError
from ..series.series import Series
from ..series.structure import SeasonStructure

logger = logging.getLogger(__name__)

SnapshotListener = Callable[[Tuple[Series, ...]], None]


class SeriesCatalog:
    """
    Owns the list of series and hands out ids.

    Provides:
    - Creation with validation and monotonically increasing ids
    - Lookup, in-place replacement, and deletion by id
    - Atomic read-modify-write through ``update``
    - Snapshot listeners notified after every mutation

    Insertion order is preserved and is the display order. Ids are never
    reused, even after the series holding them is deleted.

    All operations take one re-entrant lock, so the catalog can be shared
    between threads.
    """

    def __init__(self, series: Optional[Iterable[Series]] = None):
        self._series: List[Series] = []
        self._next_id = 1
        self._version = 0
        self._listeners: List[SnapshotListener] = []
        self._lock = threading.RLock()

        if series:
            self.seed(series)

    # =========================================================================
    # Queries
    # =========================================================================

    @property
    def version(self) -> int:
        """Incremented by every mutation; lets pollers detect changes."""
        return self._version

    @property
    def next_id(self) -> int:
        return self._next_id

    def list(self) -> Tuple[Series, ...]:
        """Snapshot of all series in insertion order."""
        with self._lock:
            return tuple(self._series)

    def get(self, series_id: int) -> Optional[Series]:
        """Get a series by id, or None."""
        with self._lock:
            index = self._index_of(series_id)
            return None if index is None else self._series[index]

    def find(self, series_id: int) -> Series:
        """
        Get a series by id.

        Raises:
            NotFoundError: If no series has this id
        """
        series = self.get(series_id)
        if series is None:
            raise NotFoundError(
                f"Series not found: {series_id}",
                resource_type="series",
                resource_id=series_id,
            )
        return series

    def __len__(self) -> int:
        return len(self._series)

    def __iter__(self):
        return iter(self.list())

    # =========================================================================
    # Mutations
    # =========================================================================

    def seed(self, series: Iterable[Series], next_id: Optional[int] = None) -> None:
        """
        Replace the contents with a loaded snapshot.

        Listeners are not notified: the data just came from the store.

        Args:
            series: The stored series, in display order
            next_id: The stored id counter; never set below the highest loaded id + 1
        """
        with self._lock:
            self._series = list(series)
            self._next_id = max(
                max((s.id for s in self._series), default=0) + 1,
                next_id or 1,
            )
            self._version += 1
        logger.info(f"Catalog seeded with {len(self._series)} series")

    def create(self, name: str, total_seasons: int, structure: SeasonStructure) -> Series:
        """
        Create a series at Season 1, Episode 1 and append it.

        Args:
            name: Display name, must not be blank
            total_seasons: Number of seasons, must be positive
            structure: Episode layout; per-season layouts must cover every season

        Returns:
            The new series

        Raises:
            InvalidInputError: If any argument is malformed (nothing is created)
        """
        if not isinstance(name, str) or not name.strip():
            raise InvalidInputError("Series name must not be empty", field="name", value=name)
        name = name.strip()
        if not isinstance(total_seasons, int) or isinstance(total_seasons, bool) or total_seasons <= 0:
            raise InvalidInputError(
                "Total seasons must be a positive integer",
                field="total_seasons",
                value=total_seasons,
                constraint="> 0",
            )
        if not isinstance(structure, SeasonStructure):
            raise InvalidInputError("A season structure is required", field="structure")

        missing = structure.missing_seasons(total_seasons)
        if missing:
            raise InvalidInputError(
                f"Missing episode counts for seasons: {', '.join(map(str, missing))}",
                field="season_episode_map",
                value=missing,
                constraint=f"every season 1..{total_seasons}",
            )

        with self._lock:
            series = Series(
                id=self._next_id,
                name=name,
                total_seasons=total_seasons,
                structure=structure,
            )
            self._next_id += 1
            self._series.append(series)
            self._notify(self._commit())

        logger.info(f"Created series {series.id}: {series.name}")
        return series

    def replace(self, updated: Series) -> Series:
        """
        Overwrite the series with ``updated.id``, keeping its position.

        Raises:
            NotFoundError: If no series has this id
        """
        with self._lock:
            index = self._require_index(updated.id)
            self._series[index] = updated
            self._notify(self._commit())

        logger.debug(f"Replaced series {updated.id}: {updated.position_label}")
        return updated

    def update(self, series_id: int, fn: Callable[[Series], Series]) -> Series:
        """
        Apply ``fn`` to the series and store its result, atomically.

        Errors raised by ``fn`` propagate and leave the catalog unchanged.

        Raises:
            NotFoundError: If no series has this id
        """
        with self._lock:
            index = self._require_index(series_id)
            updated = fn(self._series[index])
            if updated.id != series_id:
                raise ValueError(f"Update changed series id {series_id} -> {updated.id}")
            self._series[index] = updated
            self._notify(self._commit())

        logger.debug(f"Updated series {series_id}: {updated.position_label}")
        return updated

    def delete(self, series_id: int) -> Optional[Series]:
        """
        Remove the series with this id.

        Deleting an unknown id is a no-op.

        Returns:
            The removed series, or None if the id was unknown
        """
        with self._lock:
            index = self._index_of(series_id)
            if index is None:
                return None
            removed = self._series.pop(index)
            self._notify(self._commit())

        logger.info(f"Deleted series {removed.id}: {removed.name}")
        return removed

    # =========================================================================
    # Listeners
    # =========================================================================

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """
        Call ``listener`` with the new snapshot after every mutation.

        Listeners run while the catalog lock is held, in commit order. They
        must be quick and must not block on other threads that use the catalog.

        Returns:
            A callable that removes the listener
        """
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    # =========================================================================
    # Internals
    # =========================================================================

    def _index_of(self, series_id: int) -> Optional[int]:
        for index, series in enumerate(self._series):
            if series.id == series_id:
                return index
        return None

    def _require_index(self, series_id: int) -> int:
        index = self._index_of(series_id)
        if index is None:
            raise NotFoundError(
                f"Series not found: {series_id}",
                resource_type="series",
                resource_id=series_id,
            )
        return index

    def _commit(self) -> Tuple[Series, ...]:
        self._version += 1
        return tuple(self._series)

    def _notify(self, snapshot: Tuple[Series, ...]) -> None:
        # called with the lock held so listeners see snapshots in commit order
        for listener in list(self._listeners):
            listener(snapshot)
