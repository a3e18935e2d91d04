"""
Configuration System
====================

Centralized, validated configuration management with typed dataclasses.
"""

import os
import re
import logging
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Optional, Dict, Any, Union
import yaml

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

MEMORY_STORE = ":memory:"


# =============================================================================
# Configuration Dataclasses
# =============================================================================


@dataclass
class StorageConfig:
    """Where the key-value store lives."""

    path: str = "~/.series-tracker/tracker.json"
    series_key: str = "series_data"
    theme_key: str = "is_dark_theme"

    VALID_SUFFIXES = {".json", ".yaml", ".yml"}

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """Validate configuration values."""
        if self.path == MEMORY_STORE:
            return
        if Path(self.path).suffix.lower() not in self.VALID_SUFFIXES:
            raise ConfigurationError(
                f"Unsupported store file type: {self.path}",
                config_key="storage.path",
                expected_type="json or yaml file",
            )
        if not self.series_key or not self.theme_key:
            raise ConfigurationError(
                "Store keys must not be empty",
                config_key="storage.series_key",
            )

    @property
    def is_memory(self) -> bool:
        return self.path == MEMORY_STORE

    def resolved_path(self) -> Path:
        return Path(self.path).expanduser()


@dataclass
class PersistenceConfig:
    """Save retry policy for the persistence worker."""

    max_retries: int = 3
    retry_delay: float = 0.5

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """Validate configuration values."""
        if not 0 <= self.max_retries <= 10:
            raise ConfigurationError(
                f"max_retries must be 0-10, got {self.max_retries}",
                config_key="persistence.max_retries",
            )
        if self.retry_delay < 0:
            raise ConfigurationError(
                f"retry_delay must be >= 0, got {self.retry_delay}",
                config_key="persistence.retry_delay",
            )


@dataclass
class LoggingConfig:
    """Logging settings."""

    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"

    VALID_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}

    def __post_init__(self):
        self.level = str(self.level).upper()
        self.validate()

    def validate(self) -> None:
        if self.level not in self.VALID_LEVELS:
            raise ConfigurationError(
                f"Invalid log level: {self.level}",
                config_key="logging.level",
            )

    def apply(self) -> None:
        """Configure the root logger."""
        logging.basicConfig(level=getattr(logging, self.level), format=self.format)


# =============================================================================
# Main Configuration Class
# =============================================================================


@dataclass
class TrackerConfig:
    """
    Main configuration container with validation and loading.

    Provides a unified interface to all configuration settings with:
    - Type-safe access to configuration values
    - Validation on load
    - Environment variable interpolation
    - Sensible defaults for all values
    """

    storage: StorageConfig = field(default_factory=StorageConfig)
    persistence: PersistenceConfig = field(default_factory=PersistenceConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    # Raw config for extensions
    _raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    SECTIONS = ("storage", "persistence", "logging")

    @classmethod
    def load(cls, path: Optional[Union[str, Path]] = None) -> "TrackerConfig":
        """
        Load configuration from file with environment variable interpolation.

        Args:
            path: Path to YAML config file

        Returns:
            Validated TrackerConfig instance
        """
        search_paths = [
            Path("./config/tracker.yaml"),
            Path("./tracker.yaml"),
            Path.home() / ".series-tracker" / "config.yaml",
        ]

        if path:
            search_paths.insert(0, Path(path))

        config_data = {}

        for search_path in search_paths:
            if search_path.exists():
                logger.info(f"Loading config from: {search_path}")
                try:
                    with open(search_path, "r") as f:
                        config_data = yaml.safe_load(f) or {}
                    break
                except yaml.YAMLError as e:
                    raise ConfigurationError(
                        f"Invalid YAML in config file: {e}",
                        config_key=str(search_path),
                    )
        else:
            logger.info("No config file found, using defaults")

        config_data = cls._interpolate_env_vars(config_data)

        return cls.from_dict(config_data)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TrackerConfig":
        """Create TrackerConfig from dictionary with validation."""
        if not isinstance(data, dict):
            raise ConfigurationError("Configuration root must be a mapping", expected_type="mapping")
        try:
            return cls(
                storage=StorageConfig(**(data.get("storage") or {})),
                persistence=PersistenceConfig(**(data.get("persistence") or {})),
                logging=LoggingConfig(**(data.get("logging") or {})),
                _raw=data,
            )
        except TypeError as e:
            raise ConfigurationError(f"Invalid configuration: {e}")

    @staticmethod
    def _interpolate_env_vars(data: Any) -> Any:
        """Recursively interpolate ${VAR} patterns with environment variables."""
        if isinstance(data, str):
            pattern = r"\$\{([^}:]+)(?::-([^}]*))?\}"

            def replace(match):
                var_name = match.group(1)
                default = match.group(2) or ""
                return os.environ.get(var_name, default)

            return re.sub(pattern, replace, data)
        elif isinstance(data, dict):
            return {k: TrackerConfig._interpolate_env_vars(v) for k, v in data.items()}
        elif isinstance(data, list):
            return [TrackerConfig._interpolate_env_vars(item) for item in data]
        return data

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return {section: asdict(getattr(self, section)) for section in self.SECTIONS}


# =============================================================================
# Convenience Functions
# =============================================================================


_global_config: Optional[TrackerConfig] = None


def get_config() -> TrackerConfig:
    """Get the global configuration instance (lazily loaded)."""
    global _global_config
    if _global_config is None:
        _global_config = TrackerConfig.load()
    return _global_config


def set_config(config: TrackerConfig) -> None:
    """Set the global configuration instance."""
    global _global_config
    _global_config = config


def reset_config() -> None:
    """Reset global configuration to None (forces reload on next access)."""
    global _global_config
    _global_config = None
