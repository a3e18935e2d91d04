"""
Workflow Module
===============

Command handling and background persistence for the tracker.
"""

from .tracker import SeriesTracker, CommandResult
from .persistence import PersistenceWorker

__all__ = [
    "SeriesTracker",
    "CommandResult",
    "PersistenceWorker",
]
