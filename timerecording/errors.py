from __future__ import annotations


class TimeRecordingError(Exception):
    """Base class for every failure reported back to the person submitting."""


class ValidationError(TimeRecordingError):
    pass


class PersistenceError(TimeRecordingError):
    """The store could not be reached or refused a write."""
