"""
Utilities
=========

Storage helpers for the Series Tracker.
"""

from .storage import KeyValueStore, MemoryStore, JsonFileStore, create_store

__all__ = [
    "KeyValueStore",
    "MemoryStore",
    "JsonFileStore",
    "create_store",
]
