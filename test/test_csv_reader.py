# test/test_csv_reader.py
import numpy as np
import pytest

from enginesync.core import RawSeries, ReadError, StructuralParseError
from enginesync.io.csv_reader import _type_cell, find_column, parse_csv_text, read_csv_log


SAMPLE_CSV = """# exported by dash logger
Elapsed Time (s),GPS Speed,Gear,Note
0.0,0,1,start
0.5,12.5,1,

1.0,25,2,ok
# trailing comment
1.5,,2,ok
"""


def test_find_column_is_case_insensitive_and_first_match():
    cols = ["Lap", "TIME (s)", "time2", "Wheel SPEED"]
    assert find_column(cols, "time") == "TIME (s)"
    assert find_column(cols, "speed") == "Wheel SPEED"
    assert find_column(cols, "rpm") is None


def test_parse_detects_designated_columns():
    s = parse_csv_text(SAMPLE_CSV, source="dash.csv")

    assert isinstance(s, RawSeries)
    assert s.time_channel == "Elapsed Time (s)"
    assert s.speed_channel == "GPS Speed"
    assert s.meta.label == "csv"
    assert s.meta.source == "dash.csv"
    assert list(s.keys()) == ["Elapsed Time (s)", "GPS Speed", "Gear", "Note"]


def test_parse_skips_comments_and_blank_lines():
    s = parse_csv_text(SAMPLE_CSV)
    assert s.n == 4
    assert np.allclose(s.time, [0.0, 0.5, 1.0, 1.5])


def test_parse_types_cells():
    s = parse_csv_text(SAMPLE_CSV)

    speed = s.speed
    assert speed.dtype == np.float64
    assert speed[:3].tolist() == [0.0, 12.5, 25.0]
    assert np.isnan(speed[3])

    assert s["Gear"].tolist() == [1.0, 1.0, 2.0, 2.0]
    assert s["Note"].tolist() == ["start", None, "ok", "ok"]


def test_text_in_time_column_becomes_null():
    s = parse_csv_text("time,speed\n0,1\nbad,2\n2,3\n")
    assert np.isnan(s.time[1])
    assert s.time[2] == 2.0


def test_missing_speed_column_raises():
    with pytest.raises(StructuralParseError, match="Time/Speed"):
        parse_csv_text("time,rpm\n0,800\n")


def test_missing_time_column_raises():
    with pytest.raises(StructuralParseError):
        parse_csv_text("stamp,speed\n0,10\n")


def test_empty_input_raises():
    with pytest.raises(StructuralParseError):
        parse_csv_text("")


def test_malformed_rows_raise():
    with pytest.raises(StructuralParseError):
        parse_csv_text('time,speed\n0,1\n1,2,3,4\n')


def test_read_csv_log_from_file(tmp_path):
    path = tmp_path / "run.csv"
    path.write_text(SAMPLE_CSV, encoding="utf-8")

    s = read_csv_log(path)
    assert s.n == 4
    assert s.meta.source == str(path)


def test_read_missing_file_raises_readerror(tmp_path):
    with pytest.raises(ReadError):
        read_csv_log(tmp_path / "missing.csv")


def test_boolean_cells_are_typed():
    assert _type_cell("true") is True
    assert _type_cell("TRUE") is True
    assert _type_cell("false") is False
    assert _type_cell("FALSE") is False
    # other spellings stay text
    assert _type_cell("True") == "True"

    s = parse_csv_text("time,speed,abs\n0,1,true\n1,2,n/a\n")
    assert s["abs"].dtype == object
    assert s["abs"].tolist() == [True, "n/a"]
