# enginesync/core/exceptions.py
from __future__ import annotations


class SyncError(Exception):
    """Base error for everything raised by enginesync."""


# ---- Validation / construction errors ----
class InvalidSeries(SyncError):
    """Raised when a RawSeries / UniformSeries is constructed with invalid inputs."""


class InvalidConfig(SyncError, ValueError):
    """Raised when a SyncConfig (or a unit name) is invalid."""


# ---- Input errors ----
class ReadError(SyncError):
    """Raised when an input log could not be read."""


class StructuralParseError(SyncError):
    """Raised when CSV / XML text is malformed or lacks required columns/tags."""


# ---- Pipeline errors ----
class ResampleError(SyncError):
    """Raised when a series has no valid time samples to resample."""


class InsufficientDataError(SyncError):
    """Raised when a resampled series is too short for a reliable analysis."""


# ---- Lookup errors (also behave like KeyError for dict-like APIs) ----
class ChannelNotFound(SyncError, KeyError):
    """Raised when a requested channel name is not present."""
