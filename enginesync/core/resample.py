# core/resample.py
from __future__ import annotations

import logging
import math
from numbers import Real
from typing import Any, Protocol, runtime_checkable

import numpy as np

from .exceptions import InvalidConfig, ResampleError
from .series import RawSeries, UniformSeries

logger = logging.getLogger(__name__)


@runtime_checkable
class DuplicatePolicy(Protocol):
    """Decides which sample represents a timestamp that occurs more than once."""

    def build_index(self, time: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        """
        Return ``(distinct_times, sample_index)``.

        ``distinct_times`` holds every finite timestamp once, sorted ascending;
        ``sample_index[k]`` is the row of the sample chosen for
        ``distinct_times[k]``.
        """
        ...


class LastSampleWins:
    """The later-occurring sample of a duplicated timestamp is kept."""

    def build_index(self, time: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        rows = np.flatnonzero(np.isfinite(time))[::-1]
        # np.unique reports first occurrences; on reversed rows that is the last sample.
        distinct, first = np.unique(time[rows], return_index=True)
        return distinct, rows[first]

    def __repr__(self) -> str:
        return "LastSampleWins()"


class FirstSampleWins:
    """The earliest sample of a duplicated timestamp is kept."""

    def build_index(self, time: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        rows = np.flatnonzero(np.isfinite(time))
        distinct, first = np.unique(time[rows], return_index=True)
        return distinct, rows[first]

    def __repr__(self) -> str:
        return "FirstSampleWins()"


LAST_SAMPLE_WINS = LastSampleWins()


def uniform_grid(t_min: float, t_max: float, interval: float) -> np.ndarray:
    """
    Grid ``t_min, t_min + interval, ...`` built by repeated addition.

    Accumulation stops once the running value exceeds ``t_max``, so the last
    point may fall short of ``t_max`` by floating-point drift.
    """
    points: list[float] = []
    t = float(t_min)
    while t <= t_max:
        points.append(t)
        t += interval
    return np.asarray(points, dtype=np.float64)


def _is_finite_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool) and math.isfinite(value)


def _interpolate_object(
    values: np.ndarray,
    times: np.ndarray,
    rows: np.ndarray,
    grid: np.ndarray,
    pos: np.ndarray,
) -> np.ndarray:
    n = times.size
    out = np.empty(grid.size, dtype=object)
    for k, (t, p) in enumerate(zip(grid.tolist(), pos.tolist())):
        if p == 0:
            out[k] = values[rows[0]]
        elif p >= n or (p == n - 1 and times[p] == t):
            out[k] = values[rows[-1]]
        else:
            t1, t2 = times[p - 1], times[p]
            y1, y2 = values[rows[p - 1]], values[rows[p]]
            if not (_is_finite_number(y1) and _is_finite_number(y2)) or t1 == t2:
                out[k] = y1
            elif t2 == t:
                out[k] = y2
            else:
                out[k] = y1 + ((t - t1) / (t2 - t1)) * (y2 - y1)
    return out


def _interpolate_numeric(
    values: np.ndarray,
    times: np.ndarray,
    rows: np.ndarray,
    grid: np.ndarray,
    pos: np.ndarray,
) -> np.ndarray:
    n = times.size
    y = values[rows]

    hi = np.clip(pos, 1, n - 1) if n > 1 else np.zeros_like(pos)
    lo = np.maximum(hi - 1, 0)
    t1, t2 = times[lo], times[hi]
    y1, y2 = y[lo], y[hi]

    with np.errstate(invalid="ignore", divide="ignore", over="ignore"):
        alpha = (grid - t1) / (t2 - t1)
        out = y1 + alpha * (y2 - y1)

    degenerate = ~np.isfinite(y1) | ~np.isfinite(y2) | (t1 == t2)
    out = np.where(degenerate, y1, out)

    # A hit on a timestamp keeps the sample value, unless the bracket is degenerate.
    exact = (t2 == grid) & ~degenerate
    out = np.where(exact, y2, out)
    out = np.where(pos == 0, y[0], out)
    out = np.where((pos >= n) | (grid == times[n - 1]), y[n - 1], out)
    return out


def resample(
    series: RawSeries,
    interval: float,
    *,
    duplicate_policy: DuplicatePolicy = LAST_SAMPLE_WINS,
) -> UniformSeries:
    """
    Linearly interpolate every channel of `series` onto a uniform time grid.

    The grid spans the finite timestamps of the time channel. Each grid point
    is located in the sorted distinct timestamps by binary search:

    - before the first timestamp -> value of the first sample
    - on or after the last timestamp -> value of the last sample
    - between two timestamps -> linear interpolation, except when either
      bracketing value is null/non-finite, in which case the left value is
      returned unchanged. This also applies when the grid point falls exactly
      on the right timestamp.

    Duplicated timestamps are collapsed by `duplicate_policy`.
    """
    if not isinstance(series, RawSeries):
        raise TypeError("resample() expects a RawSeries instance.")
    if not isinstance(interval, Real) or not math.isfinite(interval) or interval <= 0:
        raise InvalidConfig(f"Resample interval must be a positive number, got {interval!r}")

    time = series.time
    valid = np.isfinite(time)
    if not valid.any():
        raise ResampleError(f"No valid time data in column '{series.time_channel}'.")

    dropped = int(time.size - np.count_nonzero(valid))
    if dropped:
        logger.warning(
            "%s: ignoring %d sample(s) with missing/non-finite time", series.time_channel, dropped
        )

    t_min = float(time[valid].min())
    t_max = float(time[valid].max())
    grid = uniform_grid(t_min, t_max, float(interval))

    times, rows = duplicate_policy.build_index(time)
    collapsed = int(np.count_nonzero(valid) - times.size)
    if collapsed:
        logger.warning(
            "%s: %d duplicated timestamp(s) collapsed (%r)",
            series.time_channel,
            collapsed,
            duplicate_policy,
        )

    pos = np.searchsorted(times, grid, side="left")

    channels: dict[str, np.ndarray] = {}
    for name, values in series.items():
        if values.dtype == object:
            channels[name] = _interpolate_object(values, times, rows, grid, pos)
        else:
            channels[name] = _interpolate_numeric(values, times, rows, grid, pos)

    logger.debug(
        "Resampled %s: %d samples -> %d grid points over [%g, %g] step %g",
        series.meta.label or series.time_channel,
        series.n,
        grid.size,
        t_min,
        t_max,
        interval,
    )

    return UniformSeries(
        time=grid,
        channels=channels,
        interval=float(interval),
        time_channel=series.time_channel,
        speed_channel=series.speed_channel,
        meta=series.meta.copy(),
    )
