# test/test_metadata.py
import pytest

from enginesync.core import SeriesMeta, InvalidSeries


def test_seriesmeta_accepts_dict_and_normalizes_none():
    m = SeriesMeta(label="csv", attrs={"k": 1})
    assert m.attrs == {"k": 1}

    m2 = SeriesMeta(attrs=None)
    assert m2.attrs == {}


def test_seriesmeta_rejects_non_dict_attrs():
    with pytest.raises(InvalidSeries):
        SeriesMeta(attrs=["not", "a", "dict"])  # type: ignore[arg-type]


def test_seriesmeta_copy_applies_changes_and_copies_attrs():
    m = SeriesMeta(label="xml", source="log.xml", speed_unit="mph", attrs={"a": 1})
    m2 = m.copy(speed_unit="kph")

    assert m2.label == "xml"
    assert m2.source == "log.xml"
    assert m2.speed_unit == "kph"
    assert m2.attrs == {"a": 1}
    assert m2.attrs is not m.attrs
