"""
Series Tracker
==============

Keeps track of which episode you are on across multiple TV series.

Features:
- Uniform or per-season episode layouts
- Advance/rewind through seasons with a completed state at the finale
- Identity-stable catalog with snapshot listeners
- Background persistence to a JSON or YAML key-value file
- CLI and HTTP (FastAPI) front ends

Quick Start:
    from series_tracker import SeriesTracker, JsonFileStore

    async with SeriesTracker(store=JsonFileStore("tracker.json")) as tracker:
        dark = tracker.create_series("Dark", 3, episodes_per_season=10).series
        tracker.advance(dark.id)

Engine only:
    from series_tracker import Series, UniformStructure, advance

    series = Series(id=1, name="Dark", total_seasons=3, structure=UniformStructure(10))
    series = advance(series)  # Season 1, Episode 2
"""

__version__ = "0.1.0"

# Series models and progress engine
from .series import (
    Series,
    SeasonStructure,
    UniformStructure,
    PerSeasonStructure,
    episode_count_of,
    advance,
    rewind,
    is_terminal,
    episodes_remaining,
)

# Catalog and commands
from .catalog import SeriesCatalog
from .workflow import SeriesTracker, CommandResult, PersistenceWorker

# Storage
from .utils.storage import KeyValueStore, MemoryStore, JsonFileStore, create_store

# Core
from .core.config import TrackerConfig, get_config
from .core.exceptions import (
    SeriesTrackerError,
    ConfigurationError,
    InvalidInputError,
    NotFoundError,
    MissingSeasonCountError,
    StorageError,
)

__all__ = [
    # Version
    "__version__",

    # Models
    "Series",
    "SeasonStructure",
    "UniformStructure",
    "PerSeasonStructure",

    # Progress engine
    "episode_count_of",
    "advance",
    "rewind",
    "is_terminal",
    "episodes_remaining",

    # Catalog and commands
    "SeriesCatalog",
    "SeriesTracker",
    "CommandResult",
    "PersistenceWorker",

    # Storage
    "KeyValueStore",
    "MemoryStore",
    "JsonFileStore",
    "create_store",

    # Core
    "TrackerConfig",
    "get_config",

    # Exceptions
    "SeriesTrackerError",
    "ConfigurationError",
    "InvalidInputError",
    "NotFoundError",
    "MissingSeasonCountError",
    "StorageError",
]
