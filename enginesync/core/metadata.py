# enginesync/core/metadata.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .exceptions import InvalidSeries


@dataclass(frozen=True, slots=True)
class SeriesMeta:
    """
    Metadata attached to a RawSeries / UniformSeries.

    - label: short name of the log kind ("csv", "xml", ...)
    - source: origin (file path, "<text>", ...)
    - speed_unit: unit of the speed channel after normalization (kph, mph)
    - attrs: arbitrary additional fields
    """
    label: str | None = None
    source: str | None = None
    speed_unit: str | None = None
    attrs: dict[str, Any] = field(default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        if self.attrs is None:
            object.__setattr__(self, "attrs", {})
        elif not isinstance(self.attrs, dict):
            raise InvalidSeries("SeriesMeta.attrs must be a dict.")

    def copy(self, **changes: Any) -> "SeriesMeta":
        values = {
            "label": self.label,
            "source": self.source,
            "speed_unit": self.speed_unit,
            "attrs": self.attrs.copy(),
        }
        values.update(changes)
        return SeriesMeta(**values)
