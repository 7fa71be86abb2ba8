# enginesync/io/csv_reader.py
from __future__ import annotations

import io
import re
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd

from enginesync.core import RawSeries, SeriesMeta, ReadError, StructuralParseError
from enginesync.core.series import numeric


_NUMBER_RE = re.compile(r"^\s*-?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?\s*$")
_TRUE = ("true", "TRUE")
_FALSE = ("false", "FALSE")


def _type_cell(cell: Any) -> Any:
    """Cell-wise typing: numbers -> float, true/false -> bool, empty -> None, anything else stays text."""
    if cell is None:
        return None
    if isinstance(cell, float):
        return None if np.isnan(cell) else cell
    text = str(cell)
    if text == "":
        return None
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    if _NUMBER_RE.match(text):
        return float(text)
    return text


def find_column(columns: list[str], needle: str) -> str | None:
    """First column whose name contains `needle` (case-insensitive)."""
    needle = needle.lower()
    for col in columns:
        if needle in col.lower():
            return col
    return None


def parse_csv_text(text: str, *, source: str | None = None) -> RawSeries:
    """
    Parse a tabular log with a header row.

    ``#`` comments and blank lines are skipped. The first column
    whose name contains "time" becomes the time channel and the first one
    containing "speed" the speed channel.
    """
    try:
        df = pd.read_csv(
            io.StringIO(text),
            comment="#",
            skip_blank_lines=True,
            dtype=object,
            keep_default_na=False,
        )
    except pd.errors.EmptyDataError as e:
        raise StructuralParseError("CSV input is empty.") from e
    except pd.errors.ParserError as e:
        raise StructuralParseError(f"Malformed CSV: {e}") from e

    columns = [str(c) for c in df.columns]
    time_key = find_column(columns, "time")
    speed_key = find_column(columns, "speed")
    if time_key is None or speed_key is None:
        raise StructuralParseError("Could not auto-find Time/Speed columns in CSV.")

    channels: dict[str, Any] = {}
    for col, name in zip(df.columns, columns):
        cells = [_type_cell(v) for v in df[col].tolist()]
        if name in (time_key, speed_key):
            channels[name] = numeric(np.array(cells, dtype=object))
        else:
            channels[name] = cells

    return RawSeries(
        time_channel=time_key,
        speed_channel=speed_key,
        channels=channels,
        meta=SeriesMeta(label="csv", source=source),
    )


def read_csv_log(path: str | Path) -> RawSeries:
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise ReadError(f"Failed to read CSV file '{path}': {e}") from e
    return parse_csv_text(text, source=str(path))
