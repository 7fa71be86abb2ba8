# enginesync/io/writer.py
from __future__ import annotations

from pathlib import Path

from enginesync.core import MergedTable

LINE_TERMINATOR = "\r\n"


def to_csv_text(table: MergedTable) -> str:
    """Render `table` as CSV text; None cells become empty fields."""
    return table.to_frame().to_csv(index=False, na_rep="", lineterminator=LINE_TERMINATOR)


def write_csv(table: MergedTable, path: str | Path) -> Path:
    path = Path(path)
    path.write_text(to_csv_text(table), encoding="utf-8", newline="")
    return path
