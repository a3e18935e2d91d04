"""
Catalog Module
==============

The ordered collection of tracked series.
"""

from .catalog import SeriesCatalog, SnapshotListener

__all__ = [
    "SeriesCatalog",
    "SnapshotListener",
]
