"""Progress engine tests."""

import pytest

from series_tracker.core.exceptions import MissingSeasonCountError
from series_tracker.series import (
    UniformStructure,
    PerSeasonStructure,
    episode_count_of,
    advance,
    rewind,
    is_terminal,
    episodes_remaining,
)

from conftest import make_series


def state(series):
    return (series.current_season, series.current_episode, series.is_completed)


def advance_times(series, count):
    for _ in range(count):
        series = advance(series)
    return series


def test_episode_count_of():
    assert episode_count_of(UniformStructure(7), 3) == 7
    assert episode_count_of(PerSeasonStructure({1: 2, 2: 3}), 2) == 3
    with pytest.raises(MissingSeasonCountError):
        episode_count_of(PerSeasonStructure({1: 2}), 2)


def test_uniform_walkthrough():
    series = make_series(total_seasons=2, episodes=10)
    assert state(series) == (1, 1, False)

    series = advance_times(series, 9)
    assert state(series) == (1, 10, False)

    series = advance(series)
    assert state(series) == (2, 1, False)

    series = advance_times(series, 9)
    assert state(series) == (2, 10, False)

    series = advance(series)
    assert state(series) == (2, 10, True)

    assert advance(series) is series

    series = rewind(series)
    assert state(series) == (2, 9, False)


def test_per_season_walkthrough():
    series = make_series(total_seasons=2, counts={1: 2, 2: 3})

    series = advance(series)
    assert state(series) == (1, 2, False)

    series = advance(series)
    assert state(series) == (2, 1, False)

    series = advance_times(series, 3)
    assert state(series) == (2, 3, True)


@pytest.mark.parametrize("seasons,episodes", [(1, 1), (1, 5), (2, 10), (4, 3), (3, 1)])
def test_uniform_finishes_after_all_episodes(seasons, episodes):
    series = advance_times(make_series(total_seasons=seasons, episodes=episodes), seasons * episodes)
    assert state(series) == (seasons, episodes, True)
    assert is_terminal(series)
    assert advance(series) == series


def test_uniform_not_finished_one_short():
    series = advance_times(make_series(total_seasons=3, episodes=4), 11)
    assert state(series) == (3, 4, False)
    assert not is_terminal(series)


def test_advance_does_not_mutate_input():
    series = make_series()
    advanced = advance(series)
    assert state(series) == (1, 1, False)
    assert state(advanced) == (1, 2, False)
    assert advanced.id == series.id
    assert advanced.name == series.name


def test_completion_pins_to_last_season_count():
    series = make_series(total_seasons=3, counts={1: 2, 2: 8, 3: 4}, season=3, episode=4)
    assert state(advance(series)) == (3, 4, True)


def test_rewind_within_season():
    series = make_series(season=2, episode=5)
    assert state(rewind(series)) == (2, 4, False)


def test_rewind_crosses_to_last_episode_of_previous_season():
    series = make_series(total_seasons=3, counts={1: 2, 2: 7, 3: 4}, season=3, episode=1)
    assert state(rewind(series)) == (2, 7, False)


def test_rewind_clamps_at_start():
    series = make_series()
    assert state(rewind(series)) == (1, 1, False)


def test_rewind_clears_completed():
    series = make_series(total_seasons=2, episodes=1, season=2, episode=1, completed=True)
    assert state(rewind(series)) == (1, 1, False)


@pytest.mark.parametrize(
    "counts,expected",
    [
        ({1: 3, 2: 4}, (2, 3, False)),
        ({1: 3, 2: 1}, (1, 3, False)),
    ],
)
def test_rewind_from_terminal(counts, expected):
    series = advance_times(make_series(total_seasons=2, counts=counts), 20)
    assert is_terminal(series)
    assert state(rewind(series)) == expected


def test_rewind_then_advance_returns_to_same_position():
    base = make_series(total_seasons=3, counts={1: 2, 2: 3, 3: 2})
    series = advance(base)
    visited = []
    while not series.is_completed:
        visited.append(series)
        series = advance(series)

    for original in visited:
        restored = advance(rewind(original))
        assert state(restored) == (original.current_season, original.current_episode, False)


def test_repeated_rewind_reaches_start():
    series = make_series(total_seasons=3, counts={1: 2, 2: 3, 3: 2}, season=3, episode=2, completed=True)
    for _ in range(20):
        series = rewind(series)
    assert state(series) == (1, 1, False)


def test_missing_count_fails_advance_instead_of_completing():
    series = make_series(total_seasons=3, counts={1: 2, 3: 2}, season=2, episode=1)
    with pytest.raises(MissingSeasonCountError) as exc_info:
        advance(series)
    assert exc_info.value.details["series_id"] == 1
    assert exc_info.value.details["season"] == 2


def test_missing_count_fails_rewind_into_that_season():
    series = make_series(total_seasons=3, counts={1: 2, 3: 2}, season=3, episode=1)
    with pytest.raises(MissingSeasonCountError):
        rewind(series)


def test_episodes_remaining():
    series = make_series(total_seasons=2, counts={1: 2, 2: 3})
    assert episodes_remaining(series) == 4
    assert episodes_remaining(advance_times(series, 4)) == 0
    assert episodes_remaining(advance_times(series, 5)) == 0
