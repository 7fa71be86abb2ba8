# enginesync/core/__init__.py
"""
Core alignment pipeline for enginesync.

This module defines the format-agnostic data model and the numerical stages:
- RawSeries: parsed log, index-aligned channels with a designated time/speed channel
- UniformSeries: the same channels resampled onto a fixed-step grid
- resample: irregular -> uniform grid (linear interpolation)
- find_offset: constant time shift between two uniform series (cross-correlation)
- merge: nearest-sample join of two uniform series into a MergedTable

The core layer is independent from I/O and text formats.
"""

from .series import RawSeries, UniformSeries, as_channel, numeric
from .metadata import SeriesMeta
from .resample import (
    resample,
    uniform_grid,
    DuplicatePolicy,
    LastSampleWins,
    FirstSampleWins,
    LAST_SAMPLE_WINS,
)
from .offset import find_offset, correlation_scores, max_lag
from .merge import merge, MergedTable, TIME_FIELD
from .exceptions import (
    SyncError,
    InvalidSeries,
    InvalidConfig,
    ReadError,
    StructuralParseError,
    ResampleError,
    InsufficientDataError,
    ChannelNotFound,
)


__all__ = [
    # series
    "RawSeries",
    "UniformSeries",
    "as_channel",
    "numeric",
    "SeriesMeta",

    # resampler
    "resample",
    "uniform_grid",
    "DuplicatePolicy",
    "LastSampleWins",
    "FirstSampleWins",
    "LAST_SAMPLE_WINS",

    # offset finder
    "find_offset",
    "correlation_scores",
    "max_lag",

    # merger
    "merge",
    "MergedTable",
    "TIME_FIELD",

    # exceptions
    "SyncError",
    "InvalidSeries",
    "InvalidConfig",
    "ReadError",
    "StructuralParseError",
    "ResampleError",
    "InsufficientDataError",
    "ChannelNotFound",
]
