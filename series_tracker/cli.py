#!/usr/bin/env python3
"""
CLI: Series Tracker
===================

Command-line tool for tracking watch progress.

Usage:
    series-tracker add "Dark" --seasons 3 --episodes 10
    series-tracker add "Fleabag" --seasons 2 --season-episodes 6 --season-episodes 6
    series-tracker next 1
    series-tracker list
"""

import argparse
import asyncio
import sys
from typing import Optional, List, Sequence

from .core.config import TrackerConfig, MEMORY_STORE
from .core.exceptions import SeriesTrackerError
from .series.series import Series
from .workflow.tracker import SeriesTracker, CommandResult


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="series-tracker",
        description="Track which episode you are on across TV series",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s add "Dark" --seasons 3 --episodes 10
  %(prog)s add "Fleabag" -s 2 --season-episodes 6 --season-episodes 6
  %(prog)s next 1
  %(prog)s prev 1
  %(prog)s theme --toggle
        """,
    )
    parser.add_argument(
        "--config",
        help="Path to config file",
    )
    parser.add_argument(
        "--store",
        help=f"Store file (.json/.yaml) or {MEMORY_STORE}; overrides the config",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("list", help="Show all tracked series")

    add = commands.add_parser("add", help="Start tracking a series")
    add.add_argument("name", help="Series name")
    add.add_argument(
        "-s", "--seasons",
        type=int,
        required=True,
        help="Number of seasons",
    )
    layout = add.add_mutually_exclusive_group(required=True)
    layout.add_argument(
        "-e", "--episodes",
        type=int,
        help="Episodes in every season",
    )
    layout.add_argument(
        "--season-episodes",
        type=int,
        action="append",
        metavar="COUNT",
        help="Episodes in the next season (repeat once per season, in order)",
    )

    for name, help_text in (
        ("next", "Mark the current episode watched"),
        ("prev", "Go back one episode"),
        ("delete", "Stop tracking a series"),
        ("show", "Show one series"),
    ):
        command = commands.add_parser(name, help=help_text)
        command.add_argument("id", type=int, help="Series id (see 'list')")

    theme = commands.add_parser("theme", help="Show or toggle the dark theme")
    theme.add_argument("--toggle", action="store_true", help="Toggle the dark theme")

    return parser.parse_args(argv)


def format_series(series: Series) -> List[str]:
    """Lines describing one series."""
    lines = [
        f"[{series.id}] {series.name}",
        f"    {series.position_label}",
        f"    Total: {series.total_seasons} seasons, {series.total_episodes} episodes",
    ]
    if series.is_completed:
        lines.append("    Completed!")
    return lines


def report(result: CommandResult) -> int:
    """Print a command result and return the exit code."""
    if not result.success:
        print(f"Error: {result.error.message}")
        return 1
    if result.series:
        print("\n".join(format_series(result.series)))
    return 0


def run_command(tracker: SeriesTracker, args: argparse.Namespace) -> int:
    if args.command == "list":
        series = tracker.list_series()
        if not series:
            print("No series tracked yet")
        for item in series:
            print("\n".join(format_series(item)))
        return 0

    if args.command == "add":
        season_map = None
        if args.season_episodes:
            season_map = {i: count for i, count in enumerate(args.season_episodes, start=1)}
        return report(
            tracker.create_series(
                args.name,
                args.seasons,
                episodes_per_season=args.episodes,
                season_episode_map=season_map,
            )
        )

    if args.command == "next":
        return report(tracker.advance(args.id))
    if args.command == "prev":
        return report(tracker.rewind(args.id))
    if args.command == "show":
        return report(tracker.find_series(args.id))

    if args.command == "delete":
        result = tracker.delete_series(args.id)
        if result.series:
            print(f"Deleted: {result.series.name}")
        else:
            print(f"No series with id {args.id}")
        return 0

    if args.command == "theme":
        is_dark = tracker.toggle_theme() if args.toggle else tracker.is_dark_theme
        print(f"Theme: {'dark' if is_dark else 'light'}")
        return 0

    raise ValueError(f"Unknown command: {args.command}")


async def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main CLI entry point."""
    args = parse_args(argv)

    try:
        config = TrackerConfig.load(args.config)
        if args.store:
            config.storage.path = args.store
            config.storage.validate()
        config.logging.apply()

        async with SeriesTracker(config=config) as tracker:
            return run_command(tracker, args)
    except SeriesTrackerError as e:
        print(f"Error: {e.message}")
        return 1


def run() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
