# enginesync/config.py
"""
Defaults and run configuration for the synchronization pipeline.

The module-level constants are the defaults used by the parsers, the unit
normalizer and the pipeline; SyncConfig bundles the per-run settings.
"""
from __future__ import annotations

import math
from dataclasses import dataclass

from enginesync.core.exceptions import InvalidConfig

DEFAULT_RESAMPLE_INTERVAL = 0.1   # seconds
MIN_RESAMPLED_SAMPLES = 10

# --- Speed units ---
KPH = "kph"
MPH = "mph"
SPEED_UNITS = (KPH, MPH)
MPH_TO_KPH = 1.60934

# --- Merged table ---
FIRST_PREFIX = "csv_"
SECOND_PREFIX = "xml_"

# --- Tagged-record (XML) log ---
XML_RECORD_TAG = "EngineDataLog"
XML_TIME_TAG = "LogTime"
XML_SPEED_TAG = "VehicleSpeed"


@dataclass(frozen=True, slots=True)
class SyncConfig:
    """
    Settings for one pipeline run.

    manual_offset:
        When set, offset estimation is skipped and this value (seconds) is used.
    """
    resample_interval: float = DEFAULT_RESAMPLE_INTERVAL
    manual_offset: float | None = None
    csv_speed_unit: str = KPH
    xml_speed_unit: str = KPH
    min_samples: int = MIN_RESAMPLED_SAMPLES

    def __post_init__(self) -> None:
        try:
            interval = float(self.resample_interval)
        except (TypeError, ValueError) as e:
            raise InvalidConfig(f"resample_interval must be a number, got {self.resample_interval!r}") from e
        if not math.isfinite(interval) or interval <= 0:
            raise InvalidConfig(f"resample_interval must be positive, got {self.resample_interval!r}")
        object.__setattr__(self, "resample_interval", interval)

        if self.manual_offset is not None:
            try:
                offset = float(self.manual_offset)
            except (TypeError, ValueError) as e:
                raise InvalidConfig(f"manual_offset must be a number, got {self.manual_offset!r}") from e
            if not math.isfinite(offset):
                raise InvalidConfig("manual_offset must be finite.")
            object.__setattr__(self, "manual_offset", offset)

        for attr in ("csv_speed_unit", "xml_speed_unit"):
            unit = getattr(self, attr)
            if unit not in SPEED_UNITS:
                raise InvalidConfig(f"{attr} must be one of {SPEED_UNITS}, got {unit!r}")

        if not isinstance(self.min_samples, int) or self.min_samples < 2:
            raise InvalidConfig("min_samples must be an integer >= 2.")
