from __future__ import annotations

import json
from pathlib import Path

import pytest

from graph import GenealogyGraph
from parsing import load_json_records, load_records, normalize_date, read_gedcom_records


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("25 NOV 1954", "1954-11-25"),
        ("1698", "1698-00-00"),
        ("ABT 1905", "1905-00-00"),
        ("AFTER 1900", "1900-00-00"),
        ("(About:1746-00-00)", "1746-00-00"),
        ("(1839-08-29)", "1839-08-29"),
        ("NOV 1954", "1954-11-00"),
        ("(May, 1837)", "1837-05-00"),
        ("(02 May1838)", "1838-05-02"),
        ("(01-27-1920)", "1920-01-27"),
        ("(04 05 1911)", "1911-04-05"),
        ("(April 17, 1850)", "1850-04-17"),
        ("(SEPT. 17,1910)", "1910-09-17"),
        ("(1789?)", "1789-00-00"),
    ],
)
def test_normalize_date(raw: str, expected: str) -> None:
    assert normalize_date(raw) == expected


@pytest.mark.parametrize("raw", [None, "", "   ", "someday", "13-45-1900", "Smarch 1900"])
def test_normalize_date_rejects_garbage(raw: str | None) -> None:
    assert normalize_date(raw) is None


def test_load_json_records_accepts_list_or_object(tmp_path: Path) -> None:
    records = [{"id": "a", "name": "Ann"}, {"id": "b", "name": "Bob"}]
    as_list = tmp_path / "list.json"
    as_list.write_text(json.dumps(records), encoding="utf-8")
    as_object = tmp_path / "object.json"
    as_object.write_text(json.dumps({"persons": records + ["junk"]}), encoding="utf-8")

    assert load_json_records(as_list) == records
    assert load_records(as_object) == records


def test_load_json_records_rejects_other_shapes(tmp_path: Path) -> None:
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"people": []}), encoding="utf-8")
    with pytest.raises(ValueError):
        load_json_records(path)


GEDCOM = """\
0 HEAD
1 SOUR TEST
1 GEDC
2 VERS 5.5.1
2 FORM LINEAGE-LINKED
1 CHAR UTF-8
0 @I1@ INDI
1 NAME John /Smith/
1 SEX M
1 FAMS @F1@
0 @I2@ INDI
1 NAME Mary /Jones/
1 SEX F
1 FAMS @F1@
0 @I3@ INDI
1 NAME Tom /Smith/
1 SEX M
1 FAMC @F1@
0 @F1@ FAM
1 HUSB @I1@
1 WIFE @I2@
1 CHIL @I3@
0 TRLR
"""


def test_read_gedcom_records(tmp_path: Path) -> None:
    path = tmp_path / "tree.ged"
    path.write_text(GEDCOM, encoding="utf-8")

    records = load_records(path)
    assert records == read_gedcom_records(path)
    by_id = {r["id"]: r for r in records}
    assert set(by_id) == {"I1", "I2", "I3"}
    assert by_id["I1"]["name"] == "John Smith"
    assert by_id["I1"]["gender"] == "M"
    assert by_id["I1"]["parentOf"] == ["F1"]
    assert by_id["I3"]["childOf"] == ["F1"]

    graph = GenealogyGraph.from_records(records)
    assert graph.parents("I3") == ["I1", "I2"]
    assert graph.partners("I2") == ["I1"]
