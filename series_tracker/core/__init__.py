"""
Core Module
===========

Core utilities, configuration, and exceptions for the Series Tracker.
"""

from .config import (
    TrackerConfig,
    StorageConfig,
    PersistenceConfig,
    LoggingConfig,
    get_config,
    set_config,
    reset_config,
)
from .exceptions import (
    SeriesTrackerError,
    ConfigurationError,
    InvalidInputError,
    NotFoundError,
    MissingSeasonCountError,
    StorageError,
)

__all__ = [
    # Configuration
    "TrackerConfig",
    "StorageConfig",
    "PersistenceConfig",
    "LoggingConfig",
    "get_config",
    "set_config",
    "reset_config",
    # Exceptions
    "SeriesTrackerError",
    "ConfigurationError",
    "InvalidInputError",
    "NotFoundError",
    "MissingSeasonCountError",
    "StorageError",
]
