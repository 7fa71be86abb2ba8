# test/test_units.py
import numpy as np
import pytest

from enginesync.config import MPH_TO_KPH
from enginesync.core import InvalidConfig, RawSeries, SeriesMeta
from enginesync.units import normalize_speed


def _series():
    return RawSeries(
        time_channel="t",
        speed_channel="spd",
        channels={"t": [0.0, 1.0, 2.0], "spd": [10.0, None, 30.0], "rpm": [1.0, 2.0, 3.0]},
        meta=SeriesMeta(label="csv"),
    )


def test_mph_is_scaled_to_kph():
    s = _series()
    out = normalize_speed(s, "mph")

    assert out.speed[0] == pytest.approx(10.0 * MPH_TO_KPH)
    assert out.speed[2] == pytest.approx(30.0 * MPH_TO_KPH)
    assert out.speed[1] == 0.0
    assert out.meta.speed_unit == "kph"
    # other channels and the input are untouched
    assert np.allclose(out["rpm"], [1.0, 2.0, 3.0])
    assert s.speed[0] == 10.0


def test_kph_leaves_values_alone():
    out = normalize_speed(_series(), "kph")
    assert out.speed[0] == 10.0
    assert out.meta.speed_unit == "kph"


def test_unknown_unit_raises():
    with pytest.raises(InvalidConfig):
        normalize_speed(_series(), "knots")
