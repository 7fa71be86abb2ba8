# test/test_load.py
import pytest

from enginesync.core import StructuralParseError
from enginesync.io.load import load_log


def test_dispatch_on_suffix(tmp_path):
    csv_path = tmp_path / "a.CSV"
    csv_path.write_text("time,speed\n0,1\n1,2\n", encoding="utf-8")
    xml_path = tmp_path / "b.xml"
    xml_path.write_text(
        "<EngineDataLog><LogTime>00:00:00</LogTime><VehicleSpeed>5</VehicleSpeed></EngineDataLog>",
        encoding="utf-8",
    )

    assert load_log(csv_path).meta.label == "csv"
    assert load_log(xml_path).meta.label == "xml"


def test_explicit_kind_overrides_suffix(tmp_path):
    path = tmp_path / "export.txt"
    path.write_text("time,speed\n0,1\n", encoding="utf-8")
    assert load_log(path, "csv").n == 1


def test_unknown_kind_raises(tmp_path):
    with pytest.raises(StructuralParseError):
        load_log(tmp_path / "log.json")
