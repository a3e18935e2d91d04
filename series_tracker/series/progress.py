"""
Progress Engine
===============

Position transitions for a single series. Every function here is pure:
it takes a ``Series`` and returns a new one, never mutating its input.

States are ``(season, episode, completed)``. Starting from ``(1, 1, False)``,
``advance`` moves forward through each season in turn and pins at the last
episode of the last season with ``completed=True``; further advances are
no-ops. ``rewind`` moves back one episode (crossing into the last episode of
the previous season when needed), clamps at ``(1, 1)`` and always clears
``completed``.
"""

import logging
from dataclasses import replace

from ..core.exceptions import MissingSeasonCountError
from .series import Series
from .structure import SeasonStructure

logger = logging.getLogger(__name__)


def episode_count_of(structure: SeasonStructure, season: int) -> int:
    """
    Number of episodes in ``season``.

    Raises:
        MissingSeasonCountError: If a per-season structure has no entry for ``season``.
            Never treated as zero, since a zero count would mark the series
            completed from any episode of that season.
    """
    return structure.episode_count(season)


def _count_for(series: Series, season: int) -> int:
    try:
        return episode_count_of(series.structure, season)
    except MissingSeasonCountError as e:
        raise MissingSeasonCountError(
            f"Series {series.id} ({series.name!r}) has no episode count for season {season}",
            season=season,
            series_id=series.id,
        ) from e


def advance(series: Series) -> Series:
    """Move to the next episode, rolling over seasons and pinning at the finale."""
    if series.is_completed:
        return series

    cap = _count_for(series, series.current_season)
    episode = series.current_episode + 1

    if episode <= cap:
        return replace(series, current_episode=episode, is_completed=False)

    season = series.current_season + 1
    if season <= series.total_seasons:
        return replace(series, current_season=season, current_episode=1, is_completed=False)

    logger.info(f"Series {series.id} ({series.name}) completed")
    return replace(
        series,
        current_season=series.total_seasons,
        current_episode=_count_for(series, series.total_seasons),
        is_completed=True,
    )


def rewind(series: Series) -> Series:
    """Move back one episode, landing on the previous season's last episode if needed."""
    episode = series.current_episode - 1

    if episode >= 1:
        return replace(series, current_episode=episode, is_completed=False)

    season = series.current_season - 1
    if season < 1:
        return replace(series, current_season=1, current_episode=1, is_completed=False)

    return replace(
        series,
        current_season=season,
        current_episode=_count_for(series, season),
        is_completed=False,
    )


def is_terminal(series: Series) -> bool:
    """True when ``advance`` can no longer move the series."""
    return series.is_completed


def episodes_remaining(series: Series) -> int:
    """Episodes after the current one until the finale."""
    if series.is_completed:
        return 0
    remaining = _count_for(series, series.current_season) - series.current_episode
    for season in range(series.current_season + 1, series.total_seasons + 1):
        remaining += _count_for(series, season)
    return max(remaining, 0)
