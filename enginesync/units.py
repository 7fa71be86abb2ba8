# enginesync/units.py
from __future__ import annotations

import logging

import numpy as np

from enginesync.config import KPH, MPH, MPH_TO_KPH, SPEED_UNITS
from enginesync.core.exceptions import InvalidConfig
from enginesync.core.series import RawSeries, numeric

logger = logging.getLogger(__name__)


def normalize_speed(series: RawSeries, unit: str) -> RawSeries:
    """
    Express the speed channel of `series` in kph.

    `unit` is the unit the log was recorded in. Null samples become 0.
    """
    if unit not in SPEED_UNITS:
        raise InvalidConfig(f"Unknown speed unit {unit!r}; expected one of {SPEED_UNITS}")

    if unit == KPH:
        return series if series.meta.speed_unit == KPH else series.with_meta(speed_unit=KPH)

    logger.debug("Converting %s from %s to %s", series.speed_channel, MPH, KPH)
    speed = numeric(series.speed)
    scaled = np.where(np.isnan(speed), 0.0, speed) * MPH_TO_KPH
    return series.with_channel(series.speed_channel, scaled).with_meta(speed_unit=KPH)
