"""Key-value store tests."""

import json

import pytest
import yaml

from series_tracker.core.config import StorageConfig
from series_tracker.core.exceptions import StorageError
from series_tracker.series import Series, PerSeasonStructure, UniformStructure
from series_tracker.utils.storage import JsonFileStore, MemoryStore, create_store

from conftest import make_series


def test_series_to_dict_wire_shape():
    data = make_series(total_seasons=2, counts={1: 2, 2: 3}, season=2, episode=3, completed=True).to_dict()
    assert data == {
        "id": 1,
        "name": "Dark",
        "totalSeasons": 2,
        "episodesPerSeason": None,
        "seasonEpisodeMap": {"1": 2, "2": 3},
        "currentSeason": 2,
        "currentEpisode": 3,
        "isCompleted": True,
    }


def test_from_dict_ignores_unknown_fields_and_fills_defaults():
    series = Series.from_dict(
        {"id": 3, "name": "Dark", "totalSeasons": 3, "episodesPerSeason": 10, "rating": 5}
    )
    assert series.structure == UniformStructure(10)
    assert (series.current_season, series.current_episode, series.is_completed) == (1, 1, False)


def test_json_round_trip(tmp_path):
    store = JsonFileStore(tmp_path / "tracker.json")
    snapshot = [
        make_series(series_id=1, episodes=10, season=2, episode=4),
        make_series(series_id=2, name="Fleabag", counts={1: 6, 2: 6}, season=2, episode=6, completed=True),
    ]
    store.save_series(snapshot)

    assert store.load_series() == snapshot


def test_yaml_round_trip(tmp_path):
    store = JsonFileStore(tmp_path / "tracker.yaml")
    snapshot = [make_series(counts={1: 2, 2: 3})]
    store.save_series(snapshot)
    store.save_theme(True)

    assert store.load_series() == snapshot
    assert store.load_theme() is True
    assert yaml.safe_load((tmp_path / "tracker.yaml").read_text())["is_dark_theme"] is True


def test_missing_file_loads_empty(tmp_path):
    store = JsonFileStore(tmp_path / "missing" / "tracker.json")
    assert store.load_series() == []
    assert store.load_theme() is False


def test_theme_and_series_share_the_document(tmp_path):
    path = tmp_path / "tracker.json"
    path.write_text(json.dumps({"other_tool": {"keep": True}}))
    store = JsonFileStore(path)

    store.save_theme(True)
    store.save_series([make_series()])

    document = json.loads(path.read_text())
    assert document["other_tool"] == {"keep": True}
    assert document["is_dark_theme"] is True
    assert len(document["series_data"]) == 1


def test_unknown_fields_in_stored_series(tmp_path):
    path = tmp_path / "tracker.json"
    stored = make_series().to_dict()
    stored["watchedAt"] = "2024-01-01"
    path.write_text(json.dumps({"series_data": [stored]}))

    assert JsonFileStore(path).load_series() == [make_series()]


@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        json.dumps([1, 2]),
        json.dumps({"series_data": {"id": 1}}),
        json.dumps({"series_data": [{"id": 1, "name": "x", "totalSeasons": 1}]}),
        json.dumps({"series_data": [{"name": "x"}]}),
    ],
)
def test_corrupt_store_raises(tmp_path, content):
    path = tmp_path / "tracker.json"
    path.write_text(content)
    with pytest.raises(StorageError):
        JsonFileStore(path).load_series()


def test_custom_keys(tmp_path):
    store = JsonFileStore(tmp_path / "tracker.json", series_key="shows", theme_key="dark")
    store.save_series([make_series()])
    store.save_theme(True)
    assert set(json.loads((tmp_path / "tracker.json").read_text())) == {"shows", "dark"}


def test_memory_store():
    store = MemoryStore([make_series()], is_dark=True)
    assert store.load_series() == [make_series()]
    assert store.load_theme() is True

    store.save_series([])
    assert store.load_series() == []
    assert store.save_count == 1


def test_create_store(tmp_path):
    assert isinstance(create_store(StorageConfig(path=":memory:")), MemoryStore)

    store = create_store(StorageConfig(path=str(tmp_path / "t.yaml")))
    assert isinstance(store, JsonFileStore)
    assert store.is_yaml


def test_per_season_keys_survive_round_trip(tmp_path):
    store = JsonFileStore(tmp_path / "tracker.json")
    store.save_series([make_series(total_seasons=2, counts={1: 2, 2: 3})])
    loaded = store.load_series()[0]
    assert isinstance(loaded.structure, PerSeasonStructure)
    assert loaded.structure.episode_count(2) == 3


def test_next_id_is_saved_with_the_series(tmp_path):
    path = tmp_path / "tracker.json"
    store = JsonFileStore(path)
    assert store.load_next_id() is None

    store.save_series([make_series()], next_id=4)
    document = json.loads(path.read_text())
    assert document["next_series_id"] == 4
    assert store.load_next_id() == 4

    # saving without a counter leaves the stored one alone
    store.save_series([])
    assert store.load_next_id() == 4


@pytest.mark.parametrize("value", ["4", 0, True])
def test_invalid_next_id_raises(tmp_path, value):
    path = tmp_path / "tracker.json"
    path.write_text(json.dumps({"series_data": [], "next_series_id": value}))
    with pytest.raises(StorageError):
        JsonFileStore(path).load_next_id()


def test_memory_store_next_id():
    store = MemoryStore()
    assert store.load_next_id() is None
    store.save_series([make_series()], next_id=2)
    assert store.load_next_id() == 2
