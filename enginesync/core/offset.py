# core/offset.py
from __future__ import annotations

import logging

import numpy as np

from .series import UniformSeries, numeric

logger = logging.getLogger(__name__)


def _zero_mean(speed: np.ndarray) -> np.ndarray:
    # Null samples count as 0 both in the mean and in the centred signal.
    v = numeric(speed)
    v = np.where(np.isnan(v), 0.0, v)
    if v.size == 0:
        return v
    return v - v.sum() / v.size


def max_lag(b: UniformSeries) -> int:
    """Largest lag searched: half the length of the second series."""
    return b.n // 2


def correlation_scores(a: UniformSeries, b: UniformSeries) -> tuple[np.ndarray, np.ndarray]:
    """
    Unnormalized cross-correlation of the speed channels.

    Returns ``(lags, scores)`` for every integer lag in ``[-max_lag, max_lag]``
    where ``score(lag) = sum_i a[i] * b[i - lag]`` over the overlapping
    indices. Longer overlaps are not penalised.
    """
    a_norm = _zero_mean(a.speed)
    b_norm = _zero_mean(b.speed)
    n_a, n_b = a_norm.size, b_norm.size

    m = max_lag(b)
    lags = np.arange(-m, m + 1)
    scores = np.empty(lags.size, dtype=np.float64)
    for k, lag in enumerate(lags.tolist()):
        lo = max(0, lag)
        hi = min(n_a, n_b + lag)
        if hi <= lo:
            scores[k] = 0.0
        else:
            scores[k] = float(np.dot(a_norm[lo:hi], b_norm[lo - lag:hi - lag]))
    return lags, scores


def find_offset(a: UniformSeries, b: UniformSeries) -> float:
    """
    Estimate the time shift of `b` relative to `a` from their speed channels.

    The lag with the strictly greatest score wins; ties keep the earliest lag
    scanning upward from ``-max_lag``. The lag is converted to time with the
    grid step of `a`, so that ``a.time[i] - offset`` lands on the matching
    sample of `b`.
    """
    lags, scores = correlation_scores(a, b)

    best_lag = 0
    best_score = -np.inf
    for lag, score in zip(lags.tolist(), scores.tolist()):
        if score > best_score:
            best_score = score
            best_lag = lag

    offset = best_lag * a.step if best_lag else 0.0
    logger.debug(
        "Best lag %d of %d candidates (score %g) -> offset %g",
        best_lag,
        lags.size,
        best_score,
        offset,
    )
    return float(offset)
