"""CLI tests."""

import asyncio

import pytest

from series_tracker.cli import main, parse_args
from series_tracker.utils.storage import JsonFileStore


@pytest.fixture
def run(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    store_path = str(tmp_path / "tracker.json")

    def invoke(*argv):
        code = asyncio.run(main(["--store", store_path, *argv]))
        return code, capsys.readouterr().out

    invoke.store = JsonFileStore(store_path)
    return invoke


def test_parse_args_requires_layout():
    with pytest.raises(SystemExit):
        parse_args(["add", "Dark", "--seasons", "2"])
    with pytest.raises(SystemExit):
        parse_args(["add", "Dark", "-s", "2", "-e", "3", "--season-episodes", "3"])


def test_add_and_list(run):
    code, out = run("add", "Dark", "--seasons", "3", "--episodes", "10")
    assert code == 0
    assert "[1] Dark" in out
    assert "Total: 3 seasons, 30 episodes" in out

    code, out = run("list")
    assert code == 0
    assert "Season 1, Episode 1" in out


def test_add_per_season_and_finish(run):
    run("add", "Fleabag", "-s", "2", "--season-episodes", "1", "--season-episodes", "2")

    run("next", "1")
    run("next", "1")
    code, out = run("next", "1")
    assert code == 0
    assert "Season 2, Episode 2" in out
    assert "Completed!" in out

    code, out = run("prev", "1")
    assert "Season 2, Episode 1" in out
    assert "Completed!" not in out

    assert run.store.load_series()[0].position == (2, 1)


def test_errors_exit_non_zero(run):
    code, out = run("next", "4")
    assert code == 1
    assert "Series not found: 4" in out

    code, out = run("add", "Dark", "-s", "0", "-e", "3")
    assert code == 1


def test_delete(run):
    run("add", "Dark", "-s", "1", "-e", "1")
    code, out = run("delete", "1")
    assert code == 0
    assert "Deleted: Dark" in out
    code, out = run("delete", "1")
    assert code == 0
    assert "No series with id 1" in out


def test_theme(run):
    assert run("theme")[1].strip() == "Theme: light"
    assert run("theme", "--toggle")[1].strip() == "Theme: dark"
    assert run.store.load_theme() is True


def test_bad_store_path(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    code = asyncio.run(main(["--store", str(tmp_path / "tracker.txt"), "list"]))
    assert code == 1
    assert "Unsupported store file type" in capsys.readouterr().out
