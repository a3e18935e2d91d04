"""
API Module
==========

HTTP front end for the Series Tracker.
"""

from .app import create_app

__all__ = ["create_app"]
