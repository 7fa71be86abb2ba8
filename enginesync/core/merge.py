# core/merge.py
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Iterator

import numpy as np
import pandas as pd

from .exceptions import ChannelNotFound
from .series import UniformSeries

logger = logging.getLogger(__name__)

TIME_FIELD = "Time"

Record = dict[str, Any]


@dataclass(slots=True)
class MergedTable:
    """
    Row-oriented synchronized table.

    Every record holds exactly the fields listed in `columns`, in that order.
    Null cells are None.
    """
    columns: tuple[str, ...]
    records: list[Record] = field(default_factory=list, repr=False)

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[Record]:
        return iter(self.records)

    def __getitem__(self, index: int) -> Record:
        return self.records[index]

    def column(self, name: str) -> list[Any]:
        if name not in self.columns:
            raise ChannelNotFound(name)
        return [rec[name] for rec in self.records]

    def to_frame(self):
        """Return the table as a pandas DataFrame (columns in insertion order)."""
        return pd.DataFrame.from_records(self.records, columns=list(self.columns))


def _cell(value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, (float, np.floating)):
        return None if math.isnan(value) else float(value)
    if isinstance(value, np.generic):
        return value.item()
    return value


def nearest_index(target: float, start: float, step: float) -> int:
    """Grid index closest to `target`; halves round up."""
    return math.floor((target - start) / step + 0.5)


def merge(
    a: UniformSeries,
    b: UniformSeries,
    offset: float,
    *,
    first_prefix: str = "csv_",
    second_prefix: str = "xml_",
) -> MergedTable:
    """
    Join `b` onto the grid of `a`, shifted by `offset`.

    One record per sample of `a`. The sample of `b` paired with ``a.time[i]``
    is the grid index nearest to ``a.time[i] - offset``; records without a
    partner carry None in every `b` field.
    """
    step = a.step
    b_start = b.t_start if b.n else 0.0

    a_fields = [(first_prefix + name, values) for name, values in a.items()]
    b_fields = [(second_prefix + name, values) for name, values in b.items()]
    columns = (TIME_FIELD, *(f for f, _ in a_fields), *(f for f, _ in b_fields))

    records: list[Record] = []
    matched = 0
    for i, t in enumerate(a.time.tolist()):
        row: Record = {TIME_FIELD: f"{t:.3f}"}
        for fname, values in a_fields:
            row[fname] = _cell(values[i])

        j = nearest_index(t - offset, b_start, step)
        if 0 <= j < b.n:
            matched += 1
            for fname, values in b_fields:
                row[fname] = _cell(values[j])
        else:
            for fname, _ in b_fields:
                row[fname] = None
        records.append(row)

    logger.debug("Merged %d rows, %d paired with the second series", len(records), matched)
    return MergedTable(columns=columns, records=records)
