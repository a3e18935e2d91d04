"""
Season Structures
=================

How many episodes each season of a series has. Two variants exist:

- ``UniformStructure``: every season has the same episode count
- ``PerSeasonStructure``: an explicit count per season number

When persisted, the variant is encoded as two nullable fields of which
exactly one is set: ``episodesPerSeason`` or ``seasonEpisodeMap``.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, List, Dict, Any, Mapping

from ..core.exceptions import InvalidInputError, MissingSeasonCountError

logger = logging.getLogger(__name__)


def _is_positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


class SeasonStructure(ABC):
    """Base class for the season/episode layout of a series."""

    kind: str = ""

    @abstractmethod
    def episode_count(self, season: int) -> int:
        """Number of episodes in ``season``."""

    @abstractmethod
    def missing_seasons(self, total_seasons: int) -> List[int]:
        """Season numbers in 1..total_seasons with no episode count."""

    @abstractmethod
    def to_fields(self) -> Dict[str, Any]:
        """Encode as the ``episodesPerSeason`` / ``seasonEpisodeMap`` pair."""

    def total_episodes(self, total_seasons: int) -> int:
        """Sum of episode counts over seasons 1..total_seasons."""
        missing = set(self.missing_seasons(total_seasons))
        return sum(
            self.episode_count(season)
            for season in range(1, total_seasons + 1)
            if season not in missing
        )


@dataclass(frozen=True)
class UniformStructure(SeasonStructure):
    """Every season has ``episodes_per_season`` episodes."""

    episodes_per_season: int
    kind = "uniform"

    def __post_init__(self):
        if not _is_positive_int(self.episodes_per_season):
            raise InvalidInputError(
                "Episodes per season must be a positive integer",
                field="episodes_per_season",
                value=self.episodes_per_season,
                constraint="> 0",
            )

    def episode_count(self, season: int) -> int:
        return self.episodes_per_season

    def missing_seasons(self, total_seasons: int) -> List[int]:
        return []

    def total_episodes(self, total_seasons: int) -> int:
        return self.episodes_per_season * total_seasons

    def to_fields(self) -> Dict[str, Any]:
        return {"episodesPerSeason": self.episodes_per_season, "seasonEpisodeMap": None}


@dataclass(frozen=True)
class PerSeasonStructure(SeasonStructure):
    """Explicit episode counts keyed by 1-based season number."""

    counts: Mapping[int, int]
    kind = "per_season"

    def __post_init__(self):
        if not isinstance(self.counts, Mapping) or not self.counts:
            raise InvalidInputError(
                "Per-season episode counts must be a non-empty mapping",
                field="season_episode_map",
                value=self.counts,
            )
        normalized = {}
        for season, count in self.counts.items():
            season_number = _coerce_season_key(season)
            if not _is_positive_int(count):
                raise InvalidInputError(
                    f"Season {season_number} must have a positive episode count",
                    field="season_episode_map",
                    value=count,
                    constraint="> 0",
                )
            normalized[season_number] = count
        # frozen dataclass: bypass __setattr__ to store the sorted copy
        object.__setattr__(self, "counts", dict(sorted(normalized.items())))

    def episode_count(self, season: int) -> int:
        try:
            return self.counts[season]
        except KeyError:
            raise MissingSeasonCountError(
                f"No episode count for season {season}",
                season=season,
            ) from None

    def missing_seasons(self, total_seasons: int) -> List[int]:
        return [s for s in range(1, total_seasons + 1) if s not in self.counts]

    def to_fields(self) -> Dict[str, Any]:
        return {
            "episodesPerSeason": None,
            "seasonEpisodeMap": {str(k): v for k, v in self.counts.items()},
        }


def _coerce_season_key(season: Any) -> int:
    """Season numbers arrive as ints in code and as strings from JSON."""
    if isinstance(season, bool):
        number = None
    elif isinstance(season, int):
        number = season
    else:
        try:
            number = int(str(season).strip())
        except ValueError:
            number = None
    if number is None or number < 1:
        raise InvalidInputError(
            f"Invalid season number: {season!r}",
            field="season_episode_map",
            value=season,
            constraint=">= 1",
        )
    return number


def structure_from_fields(data: Mapping[str, Any]) -> SeasonStructure:
    """
    Decode the persisted ``episodesPerSeason`` / ``seasonEpisodeMap`` pair.

    The map takes precedence when both are present.

    Raises:
        InvalidInputError: If neither field is set or a value is malformed
    """
    season_map: Optional[Mapping[Any, Any]] = data.get("seasonEpisodeMap")
    per_season: Optional[int] = data.get("episodesPerSeason")

    if season_map is not None:
        if per_season is not None:
            logger.debug("Both episodesPerSeason and seasonEpisodeMap set, using the map")
        return PerSeasonStructure(season_map)
    if per_season is not None:
        return UniformStructure(per_season)

    raise InvalidInputError(
        "Series has neither episodesPerSeason nor seasonEpisodeMap",
        field="episodesPerSeason",
    )
