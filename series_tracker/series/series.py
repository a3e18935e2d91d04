"""
Series Models
=============

Core data model for a tracked series and its current watch position.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Any, Tuple

from ..core.exceptions import InvalidInputError
from .structure import SeasonStructure, structure_from_fields

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Series:
    """
    A tracked series and the episode the user is on.

    Instances are immutable: position changes produce a new ``Series``
    (see ``series_tracker.series.progress``), which the catalog swaps in.

    ``is_completed`` is set only by advancing past the last episode of the
    last season and cleared by any rewind.
    """

    # Identity
    id: int
    name: str

    # Layout
    total_seasons: int
    structure: SeasonStructure

    # Position
    current_season: int = 1
    current_episode: int = 1
    is_completed: bool = False

    @property
    def position(self) -> Tuple[int, int]:
        return (self.current_season, self.current_episode)

    @property
    def position_label(self) -> str:
        return f"Season {self.current_season}, Episode {self.current_episode}"

    @property
    def total_episodes(self) -> int:
        return self.structure.total_episodes(self.total_seasons)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        data = {
            "id": self.id,
            "name": self.name,
            "totalSeasons": self.total_seasons,
        }
        data.update(self.structure.to_fields())
        data.update(
            {
                "currentSeason": self.current_season,
                "currentEpisode": self.current_episode,
                "isCompleted": self.is_completed,
            }
        )
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Series":
        """
        Create Series from dictionary.

        Unknown keys are ignored so that older readers can load newer data.

        Raises:
            InvalidInputError: If a required field is missing or has the wrong shape
        """
        try:
            series_id = data["id"]
            name = data["name"]
            total_seasons = data["totalSeasons"]
        except KeyError as e:
            raise InvalidInputError(f"Stored series is missing field {e.args[0]!r}", field=e.args[0])

        for key, value in (("id", series_id), ("totalSeasons", total_seasons)):
            if not isinstance(value, int) or isinstance(value, bool):
                raise InvalidInputError(f"{key} must be an integer", field=key, value=value)

        return cls(
            id=series_id,
            name=str(name),
            total_seasons=total_seasons,
            structure=structure_from_fields(data),
            current_season=int(data.get("currentSeason", 1)),
            current_episode=int(data.get("currentEpisode", 1)),
            is_completed=bool(data.get("isCompleted", False)),
        )
