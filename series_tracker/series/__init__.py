"""
Series Module
=============

Series entities, season structures, and the progress engine that moves a
series' watch position forward and back.
"""

from .structure import (
    SeasonStructure,
    UniformStructure,
    PerSeasonStructure,
    structure_from_fields,
)
from .series import Series
from .progress import (
    episode_count_of,
    advance,
    rewind,
    is_terminal,
    episodes_remaining,
)

__all__ = [
    # Models
    "Series",
    "SeasonStructure",
    "UniformStructure",
    "PerSeasonStructure",
    "structure_from_fields",
    # Progress engine
    "episode_count_of",
    "advance",
    "rewind",
    "is_terminal",
    "episodes_remaining",
]
