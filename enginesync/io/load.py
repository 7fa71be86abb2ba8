# enginesync/io/load.py
from __future__ import annotations

from pathlib import Path

from enginesync.core import RawSeries, StructuralParseError
from enginesync.io.csv_reader import read_csv_log
from enginesync.io.xml_reader import read_xml_log

_READERS = {
    "csv": read_csv_log,
    "xml": read_xml_log,
}


def load_log(path: str | Path, kind: str | None = None) -> RawSeries:
    """Read a CSV or XML log; `kind` defaults to the file suffix."""
    path = Path(path)
    kind = (kind or path.suffix.lstrip(".")).lower()
    try:
        reader = _READERS[kind]
    except KeyError as e:
        raise StructuralParseError(
            f"Unknown log kind {kind!r} for '{path}'; expected one of {sorted(_READERS)}"
        ) from e
    return reader(path)
