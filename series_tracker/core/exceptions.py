"""
Custom Exceptions
=================

Unified exception hierarchy for consistent error handling across the tracker.
"""

from typing import Optional, Dict, Any


class SeriesTrackerError(Exception):
    """Base exception for all Series Tracker errors."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        recoverable: bool = False,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}
        self.recoverable = recoverable

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for serialization."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
            "recoverable": self.recoverable,
        }


class ConfigurationError(SeriesTrackerError):
    """Configuration-related errors."""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        expected_type: Optional[str] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if config_key:
            details["config_key"] = config_key
        if expected_type:
            details["expected_type"] = expected_type
        super().__init__(message, details=details, **kwargs)


class InvalidInputError(SeriesTrackerError):
    """Malformed creation request (empty name, bad season counts...)."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        constraint: Optional[str] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = str(value)[:100]
        if constraint:
            details["constraint"] = constraint
        super().__init__(message, code="InvalidInput", recoverable=True, details=details, **kwargs)


class NotFoundError(SeriesTrackerError):
    """Requested series id is not in the catalog."""

    def __init__(
        self,
        message: str,
        resource_type: Optional[str] = None,
        resource_id: Optional[Any] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if resource_type:
            details["resource_type"] = resource_type
        if resource_id is not None:
            details["resource_id"] = resource_id
        super().__init__(message, code="NotFound", recoverable=True, details=details, **kwargs)


class MissingSeasonCountError(SeriesTrackerError):
    """
    A per-season structure has no episode count for the requested season.

    This means the stored structure and the series' season count disagree,
    so it is never recoverable by the caller.
    """

    def __init__(
        self,
        message: str,
        season: Optional[int] = None,
        series_id: Optional[int] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if season is not None:
            details["season"] = season
        if series_id is not None:
            details["series_id"] = series_id
        super().__init__(message, code="MissingSeasonCount", recoverable=False, details=details, **kwargs)
        self.season = season


class StorageError(SeriesTrackerError):
    """Key-value store read/write errors."""

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        operation: Optional[str] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if path:
            details["path"] = path
        if operation:
            details["operation"] = operation
        recoverable = kwargs.pop("recoverable", operation == "save")
        super().__init__(message, recoverable=recoverable, details=details, **kwargs)
