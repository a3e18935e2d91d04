"""
Storage Utilities
=================

Key-value stores that hold the series snapshot and the theme preference.
"""

import os
import json
import logging
import tempfile
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, List, Dict, Any, Sequence, Union
import yaml

from ..core.config import StorageConfig
from ..core.exceptions import SeriesTrackerError, StorageError
from ..series.series import Series

logger = logging.getLogger(__name__)

SERIES_KEY = "series_data"
THEME_KEY = "is_dark_theme"
NEXT_ID_KEY = "next_series_id"


class KeyValueStore(ABC):
    """
    Persistence collaborator for the tracker.

    Holds the ordered list of series with its id counter, and the
    dark-theme flag.
    """

    @abstractmethod
    def load_series(self) -> List[Series]:
        """Load the stored snapshot (empty if nothing was saved yet)."""

    @abstractmethod
    def save_series(self, snapshot: Sequence[Series], next_id: Optional[int] = None) -> None:
        """Replace the stored snapshot, and the id counter when one is given."""

    @abstractmethod
    def load_next_id(self) -> Optional[int]:
        """Load the stored id counter (None if never saved)."""

    @abstractmethod
    def load_theme(self) -> bool:
        """Load the dark-theme flag (False if never saved)."""

    @abstractmethod
    def save_theme(self, is_dark: bool) -> None:
        """Store the dark-theme flag."""


def decode_series_list(items: Any, source: str = "store") -> List[Series]:
    """
    Decode stored series dictionaries.

    Raises:
        StorageError: If the stored value is not a list of valid series
    """
    if items is None:
        return []
    if not isinstance(items, list):
        raise StorageError(f"Stored series data is not a list in {source}", path=source, operation="load")
    try:
        return [Series.from_dict(item) for item in items]
    except (SeriesTrackerError, TypeError, ValueError, AttributeError) as e:
        raise StorageError(f"Invalid series data in {source}: {e}", path=source, operation="load") from e


def decode_next_id(value: Any, source: str = "store") -> Optional[int]:
    """Decode the stored id counter; None when it was never saved."""
    if value is None:
        return None
    if not isinstance(value, int) or isinstance(value, bool) or value < 1:
        raise StorageError(f"Invalid next series id in {source}: {value!r}", path=source, operation="load")
    return value


class MemoryStore(KeyValueStore):
    """In-process store; nothing survives the process."""

    def __init__(self, series: Optional[Sequence[Series]] = None, is_dark: bool = False):
        self._data: Dict[str, Any] = {
            SERIES_KEY: [s.to_dict() for s in series or []],
            THEME_KEY: is_dark,
        }
        self.save_count = 0

    def load_series(self) -> List[Series]:
        return decode_series_list(self._data.get(SERIES_KEY), source="memory")

    def save_series(self, snapshot: Sequence[Series], next_id: Optional[int] = None) -> None:
        self._data[SERIES_KEY] = [s.to_dict() for s in snapshot]
        if next_id is not None:
            self._data[NEXT_ID_KEY] = next_id
        self.save_count += 1

    def load_next_id(self) -> Optional[int]:
        return decode_next_id(self._data.get(NEXT_ID_KEY), source="memory")

    def load_theme(self) -> bool:
        return bool(self._data.get(THEME_KEY, False))

    def save_theme(self, is_dark: bool) -> None:
        self._data[THEME_KEY] = bool(is_dark)


class JsonFileStore(KeyValueStore):
    """
    Single-document store on disk.

    The document is a mapping
    ``{series_key: [...], next_id_key: int, theme_key: bool}``.
    Keys written by other tools are preserved. Files ending in ``.yaml`` or
    ``.yml`` are written as YAML, everything else as JSON.

    Writes go to a temporary file in the same directory which then replaces
    the target, so a crash never leaves a half-written document.
    """

    def __init__(
        self,
        path: Union[str, Path],
        series_key: str = SERIES_KEY,
        theme_key: str = THEME_KEY,
        next_id_key: str = NEXT_ID_KEY,
    ):
        self.path = Path(path).expanduser()
        self.series_key = series_key
        self.theme_key = theme_key
        self.next_id_key = next_id_key
        self._lock = threading.Lock()

    @property
    def is_yaml(self) -> bool:
        return self.path.suffix.lower() in (".yml", ".yaml")

    def load_series(self) -> List[Series]:
        series = decode_series_list(self._read().get(self.series_key), source=str(self.path))
        logger.debug(f"Loaded {len(series)} series from {self.path}")
        return series

    def save_series(self, snapshot: Sequence[Series], next_id: Optional[int] = None) -> None:
        values: Dict[str, Any] = {self.series_key: [s.to_dict() for s in snapshot]}
        if next_id is not None:
            values[self.next_id_key] = next_id
        self._update(values)
        logger.debug(f"Saved {len(snapshot)} series to {self.path}")

    def load_next_id(self) -> Optional[int]:
        return decode_next_id(self._read().get(self.next_id_key), source=str(self.path))

    def load_theme(self) -> bool:
        return bool(self._read().get(self.theme_key, False))

    def save_theme(self, is_dark: bool) -> None:
        self._update({self.theme_key: bool(is_dark)})

    def _read(self) -> Dict[str, Any]:
        """Read the whole document; a missing or empty file is an empty document."""
        if not self.path.exists():
            return {}

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                if self.is_yaml:
                    data = yaml.safe_load(f)
                else:
                    text = f.read()
                    data = json.loads(text) if text.strip() else None
        except (OSError, ValueError, yaml.YAMLError) as e:
            logger.error(f"Failed to read store {self.path}: {e}")
            raise StorageError(f"Failed to read store: {e}", path=str(self.path), operation="load") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise StorageError("Store document is not a mapping", path=str(self.path), operation="load")
        return data

    def _update(self, values: Dict[str, Any]) -> None:
        # every key in ``values`` goes out in a single write
        with self._lock:
            document = self._read()
            document.update(values)
            self._write(document)

    def _write(self, document: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{self.path.name}.", dir=str(self.path.parent))
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                if self.is_yaml:
                    yaml.safe_dump(document, f, default_flow_style=False, sort_keys=False)
                else:
                    json.dump(document, f, indent=2)
            os.replace(tmp_name, self.path)
        except OSError as e:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageError(f"Failed to write store: {e}", path=str(self.path), operation="save") from e


def create_store(config: StorageConfig) -> KeyValueStore:
    """Build the store described by ``config``."""
    if config.is_memory:
        logger.info("Using in-memory store")
        return MemoryStore()
    store = JsonFileStore(config.resolved_path(), series_key=config.series_key, theme_key=config.theme_key)
    logger.info(f"Using store file {store.path}")
    return store
