# test/test_xml_reader.py
import numpy as np
import pytest

from enginesync.core import ReadError, StructuralParseError
from enginesync.io.xml_reader import (
    discover_tags,
    parse_log_time,
    parse_number,
    parse_xml_text,
    read_xml_log,
)


SAMPLE_XML = """<?xml version="1.0"?>
<Log>
<EngineDataLog>
  <LogTime>00:00:01.5</LogTime>
  <VehicleSpeed>12.5</VehicleSpeed>
  <EngineRPM>850</EngineRPM>
</EngineDataLog>
<EngineDataLog>
  <LogTime>00:00:02</LogTime>
  <VehicleSpeed>n/a</VehicleSpeed>
  <EngineRPM>900rpm</EngineRPM>
</EngineDataLog>
<EngineDataLog>
  <LogTime>bad</LogTime>
  <VehicleSpeed> 30 </VehicleSpeed>
</EngineDataLog>
</Log>
"""


class TestParsingFunctions:
    def test_parse_log_time(self):
        assert parse_log_time("00:00:01.5") == pytest.approx(1.5)
        assert parse_log_time("01:02:03") == pytest.approx(3723.0)
        assert parse_log_time("10:00:00.25") == pytest.approx(36000.25)

    def test_parse_log_time_rejects_other_shapes(self):
        assert parse_log_time("1:02:03") is None
        assert parse_log_time("00:00:01.") is None
        assert parse_log_time("") is None
        assert parse_log_time(None) is None

    def test_parse_number_reads_leading_number(self):
        assert parse_number("42") == 42.0
        assert parse_number("-3.5e2") == -350.0
        assert parse_number("12km/h") == 12.0
        assert parse_number(".5") == 0.5
        assert parse_number("Infinity") == float("inf")

    def test_parse_number_unparseable_is_none(self):
        assert parse_number("n/a") is None
        assert parse_number("") is None
        assert parse_number(None) is None

    def test_discover_tags_in_order_without_record_tag(self):
        record = "<EngineDataLog><LogTime>1</LogTime><A>2</A><LogTime>3</LogTime></EngineDataLog>"
        assert discover_tags(record) == ["LogTime", "A"]


def test_parse_xml_text_channels_and_values():
    s = parse_xml_text(SAMPLE_XML, source="engine.xml")

    assert s.time_channel == "LogTime"
    assert s.speed_channel == "VehicleSpeed"
    assert list(s.keys()) == ["LogTime", "VehicleSpeed", "EngineRPM"]
    assert s.meta.label == "xml"
    assert s.n == 3

    assert s.time[:2].tolist() == [1.5, 2.0]
    assert np.isnan(s.time[2])

    assert s.speed[0] == 12.5
    assert np.isnan(s.speed[1])
    assert s.speed[2] == 30.0

    # tag missing from the third record -> null
    assert s["EngineRPM"][:2].tolist() == [850.0, 900.0]
    assert np.isnan(s["EngineRPM"][2])


def test_no_records_raises():
    with pytest.raises(StructuralParseError, match="No <EngineDataLog> entries"):
        parse_xml_text("<Log></Log>")


def test_no_tags_raises():
    with pytest.raises(StructuralParseError, match="Could not find tags"):
        parse_xml_text("<EngineDataLog>just text</EngineDataLog>")


def test_required_tags_missing_raises():
    text = "<EngineDataLog><LogTime>00:00:01</LogTime><Rpm>1</Rpm></EngineDataLog>"
    with pytest.raises(StructuralParseError, match="LogTime.*VehicleSpeed"):
        parse_xml_text(text)


def test_read_xml_log_from_file(tmp_path):
    path = tmp_path / "engine.xml"
    path.write_text(SAMPLE_XML, encoding="utf-8")
    s = read_xml_log(path)
    assert s.n == 3
    assert s.meta.source == str(path)


def test_read_missing_file_raises_readerror(tmp_path):
    with pytest.raises(ReadError):
        read_xml_log(tmp_path / "missing.xml")
