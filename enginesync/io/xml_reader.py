# enginesync/io/xml_reader.py
from __future__ import annotations

import logging
import re
from pathlib import Path

from enginesync.config import XML_RECORD_TAG, XML_SPEED_TAG, XML_TIME_TAG
from enginesync.core import RawSeries, SeriesMeta, ReadError, StructuralParseError

logger = logging.getLogger(__name__)


_TAG_RE = re.compile(r"<([A-Za-z]+)>")
_LOG_TIME_RE = re.compile(r"(?P<h>\d{2}):(?P<m>\d{2}):(?P<s>\d{2})(?:\.(?P<frac>\d+))?")
# Longest numeric prefix, the way JavaScript's parseFloat reads it.
_FLOAT_PREFIX_RE = re.compile(r"[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def _record_re(tag: str) -> re.Pattern[str]:
    return re.compile(rf"<{tag}>.*?</{tag}>", re.S)


def _value_re(tag: str) -> re.Pattern[str]:
    return re.compile(rf"<{tag}>(.*?)</{tag}>", re.S)


def parse_log_time(raw: str | None) -> float | None:
    """Parse ``HH:MM:SS[.fraction]`` into elapsed seconds.

    Examples
    --------
    "00:01:02.5" -> 62.5
    "1:02:03"    -> None
    """
    if not raw:
        return None
    m = _LOG_TIME_RE.fullmatch(raw)
    if not m:
        return None
    fractional = float("0." + (m.group("frac") or "0"))
    return int(m.group("h")) * 3600 + int(m.group("m")) * 60 + int(m.group("s")) + fractional


def parse_number(raw: str | None) -> float | None:
    """Read the leading number of `raw`; None when there is none.

    Examples
    --------
    "42.5"    -> 42.5
    "12km/h"  -> 12.0
    "n/a"     -> None
    """
    if raw is None:
        return None
    m = _FLOAT_PREFIX_RE.match(raw.lstrip())
    if not m:
        return None
    return float(m.group(0).replace("Infinity", "inf"))


def discover_tags(record: str, record_tag: str = XML_RECORD_TAG) -> list[str]:
    """Opening tags of `record` in document order, without repeats."""
    tags: list[str] = []
    for tag in _TAG_RE.findall(record):
        if tag != record_tag and tag not in tags:
            tags.append(tag)
    return tags


def parse_xml_text(text: str, *, source: str | None = None) -> RawSeries:
    """
    Parse an appended log of ``<EngineDataLog>`` records.

    The tag set is taken from the first record; a tag missing from a later
    record yields a null sample. ``LogTime`` is converted to elapsed
    seconds, every other tag to a number (null when unparseable).
    """
    records = _record_re(XML_RECORD_TAG).findall(text)
    if not records:
        raise StructuralParseError(f"No <{XML_RECORD_TAG}> entries found.")

    tags = discover_tags(records[0])
    if not tags:
        raise StructuralParseError(f"Could not find tags in <{XML_RECORD_TAG}>.")

    patterns = {tag: _value_re(tag) for tag in tags}
    data: dict[str, list[float | None]] = {tag: [] for tag in tags}
    for record in records:
        for tag, pattern in patterns.items():
            m = pattern.search(record)
            raw = m.group(1).strip() if m else None
            if tag == XML_TIME_TAG:
                data[tag].append(parse_log_time(raw))
            else:
                data[tag].append(parse_number(raw))

    if not data.get(XML_TIME_TAG) or not data.get(XML_SPEED_TAG):
        raise StructuralParseError(
            f"XML file must contain <{XML_TIME_TAG}> and <{XML_SPEED_TAG}> tags with data."
        )

    logger.debug("Parsed %d <%s> records with %d tags", len(records), XML_RECORD_TAG, len(tags))
    return RawSeries(
        time_channel=XML_TIME_TAG,
        speed_channel=XML_SPEED_TAG,
        channels=data,
        meta=SeriesMeta(label="xml", source=source),
    )


def read_xml_log(path: str | Path) -> RawSeries:
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ReadError(f"Failed to read XML file '{path}': {e}") from e
    return parse_xml_text(text, source=str(path))
