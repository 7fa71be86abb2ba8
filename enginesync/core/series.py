# core/series.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator, Mapping

import numpy as np

from .exceptions import ChannelNotFound, InvalidSeries
from .metadata import SeriesMeta


def as_channel(values: Any) -> np.ndarray:
    """
    Convert a sequence of ``number | None`` (or strings) to a 1D channel array.

    Numeric data becomes float64 with NaN standing for null. Data holding
    non-numeric cells stays an object array, with None kept as-is.
    """
    arr = values if isinstance(values, np.ndarray) else np.array(values, dtype=object)
    if arr.dtype.kind in "biuf":
        return arr.astype(np.float64, copy=False)
    if arr.dtype.kind in "US":
        arr = arr.astype(object)
    if arr.dtype == object:
        try:
            return np.array(
                [np.nan if v is None else v for v in arr.tolist()],
                dtype=np.float64,
            )
        except (TypeError, ValueError):
            return arr
    return arr


def numeric(values: Any) -> np.ndarray:
    """Float view of a channel; cells that are not numbers become NaN."""
    arr = as_channel(values)
    if arr.dtype != object:
        return arr
    out = np.full(arr.size, np.nan)
    for i, v in enumerate(arr.tolist()):
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            out[i] = v
    return out


def _validate_channels(owner: str, channels: Mapping[str, Any], length: int | None) -> dict[str, np.ndarray]:
    if not isinstance(channels, Mapping):
        raise InvalidSeries(f"{owner}.channels must be a mapping (e.g., dict).")

    normalized: dict[str, np.ndarray] = {}
    for key, values in channels.items():
        if not isinstance(key, str) or not key.strip():
            raise InvalidSeries(f"{owner}.channels keys must be non-empty strings.")
        arr = as_channel(values)
        if arr.ndim != 1:
            raise InvalidSeries(f"Channel '{key}' must be 1D, got shape {arr.shape}")
        if length is not None and arr.size != length:
            raise InvalidSeries(
                f"Channel '{key}' has length {arr.size}, expected {length}"
            )
        normalized[key] = arr
    return normalized


class _ChannelMapping:
    """Dict-like read access shared by RawSeries and UniformSeries."""

    __slots__ = ()

    channels: dict[str, np.ndarray]

    def __len__(self) -> int:
        return len(self.channels)

    def __iter__(self) -> Iterator[str]:
        return iter(self.channels)

    def __contains__(self, name: object) -> bool:
        return name in self.channels

    def __getitem__(self, name: str) -> np.ndarray:
        try:
            return self.channels[name]
        except KeyError as e:
            raise ChannelNotFound(name) from e

    def keys(self) -> Iterable[str]:
        return self.channels.keys()

    def items(self) -> Iterable[tuple[str, np.ndarray]]:
        return self.channels.items()

    def values(self) -> Iterable[np.ndarray]:
        return self.channels.values()

    def get(self, name: str, default: np.ndarray | None = None) -> np.ndarray | None:
        return self.channels.get(name, default)


@dataclass(frozen=True, slots=True)
class RawSeries(_ChannelMapping):
    """
    A parsed log: index-aligned channels, one of which is the time channel.

    Sample ``i`` of every channel belongs to the same log row; the time
    channel may be unordered and may hold NaN or duplicate timestamps.
    """
    time_channel: str
    speed_channel: str
    channels: Mapping[str, Any] = field(default_factory=dict, repr=False)
    meta: SeriesMeta = field(default_factory=SeriesMeta, repr=False)

    def __post_init__(self) -> None:
        for attr in ("time_channel", "speed_channel"):
            name = getattr(self, attr)
            if not isinstance(name, str) or not name.strip():
                raise InvalidSeries(f"RawSeries.{attr} must be a non-empty string.")
        if not isinstance(self.meta, SeriesMeta):
            raise InvalidSeries("RawSeries.meta must be a SeriesMeta instance.")
        if not isinstance(self.channels, Mapping):
            raise InvalidSeries("RawSeries.channels must be a mapping (e.g., dict).")

        for name in (self.time_channel, self.speed_channel):
            if name not in self.channels:
                raise InvalidSeries(f"Designated channel '{name}' is missing.")

        time = as_channel(self.channels[self.time_channel])
        if time.dtype.kind != "f":
            raise InvalidSeries(f"Time channel '{self.time_channel}' must be numeric.")

        normalized = _validate_channels("RawSeries", self.channels, time.size)
        normalized[self.time_channel] = time
        object.__setattr__(self, "channels", normalized)

    @property
    def time(self) -> np.ndarray:
        return self.channels[self.time_channel]

    @property
    def speed(self) -> np.ndarray:
        return self.channels[self.speed_channel]

    @property
    def n(self) -> int:
        return int(self.time.size)

    def with_channel(self, name: str, values: Any) -> "RawSeries":
        """Return a new RawSeries with channel `name` added or replaced."""
        new_channels = dict(self.channels)
        new_channels[name] = values
        return RawSeries(
            time_channel=self.time_channel,
            speed_channel=self.speed_channel,
            channels=new_channels,
            meta=self.meta.copy(),
        )

    def with_meta(self, **changes: Any) -> "RawSeries":
        return RawSeries(
            time_channel=self.time_channel,
            speed_channel=self.speed_channel,
            channels=dict(self.channels),
            meta=self.meta.copy(**changes),
        )


@dataclass(frozen=True, slots=True)
class UniformSeries(_ChannelMapping):
    """
    A series on a fixed-step grid: ``time[k] = t0 + k * interval`` (accumulated).

    ``channels`` holds every channel of the source RawSeries, the source time
    channel included, resampled onto ``time``.
    """
    time: np.ndarray = field(repr=False)
    channels: Mapping[str, Any] = field(default_factory=dict, repr=False)
    interval: float = 1.0
    time_channel: str | None = None
    speed_channel: str | None = None
    meta: SeriesMeta = field(default_factory=SeriesMeta, repr=False)

    def __post_init__(self) -> None:
        t = np.asarray(self.time, dtype=np.float64)
        if t.ndim != 1:
            raise InvalidSeries(f"`time` must be 1D, got shape {t.shape}")
        if t.size > 0:
            if not np.isfinite(t).all():
                raise InvalidSeries("`time` contains non-finite values (NaN/Inf).")
            if np.any(np.diff(t) <= 0):
                raise InvalidSeries("`time` must be strictly increasing.")

        if not np.isfinite(self.interval) or self.interval <= 0:
            raise InvalidSeries(f"`interval` must be a positive number, got {self.interval!r}")
        if not isinstance(self.meta, SeriesMeta):
            raise InvalidSeries("UniformSeries.meta must be a SeriesMeta instance.")

        normalized = _validate_channels("UniformSeries", self.channels, t.size)
        if self.speed_channel is not None and self.speed_channel not in normalized:
            raise InvalidSeries(f"Speed channel '{self.speed_channel}' is missing.")

        object.__setattr__(self, "time", t)
        object.__setattr__(self, "channels", normalized)
        object.__setattr__(self, "interval", float(self.interval))

    @property
    def n(self) -> int:
        return int(self.time.size)

    @property
    def t_start(self) -> float | None:
        return None if self.n == 0 else float(self.time[0])

    @property
    def t_end(self) -> float | None:
        return None if self.n == 0 else float(self.time[-1])

    @property
    def step(self) -> float:
        """Grid step as observed on the first two samples."""
        if self.n < 2:
            return self.interval
        return float(self.time[1] - self.time[0])

    @property
    def speed(self) -> np.ndarray:
        if self.speed_channel is None:
            raise ChannelNotFound("<speed>")
        return self[self.speed_channel]
