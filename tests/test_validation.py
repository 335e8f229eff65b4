from __future__ import annotations

import logging

import pytest

from graph import GenealogyGraph
from validation import CyclicAncestryError, find_ancestry_cycle, load_graph, validate_graph


def _cyclic_records() -> list[dict]:
    # A is B's parent and B is A's parent.
    return [
        {"id": "A", "name": "Ann", "childOf": "F2", "parentOf": "F1"},
        {"id": "B", "name": "Ben", "childOf": "F1", "parentOf": "F2"},
    ]


def test_clean_graph_has_no_warnings(extended_graph: GenealogyGraph) -> None:
    assert find_ancestry_cycle(extended_graph) is None
    assert validate_graph(extended_graph) == []


def test_cycle_is_reported_with_persons_only() -> None:
    graph = GenealogyGraph.from_records(_cyclic_records())
    assert sorted(find_ancestry_cycle(graph)) == ["A", "B"]
    warnings = validate_graph(graph)
    assert len(warnings) == 1
    assert warnings[0].startswith("Cycle detected")


def test_load_graph_rejects_cycles() -> None:
    with pytest.raises(CyclicAncestryError) as exc_info:
        load_graph(_cyclic_records())
    assert sorted(exc_info.value.cycle_nodes) == ["A", "B"]


def test_date_checks(caplog: pytest.LogCaptureFixture) -> None:
    records = [
        {"id": "P", "name": "Pat", "bdate": "1950-01-01", "parentOf": "F"},
        {"id": "Early", "name": "Early", "bdate": "1940-00-00", "childOf": "F"},
        {"id": "Young", "name": "Young", "bdate": "1955-06-01", "childOf": "F"},
        {"id": "Fine", "name": "Fine", "bdate": "1980", "childOf": "F"},
        {"id": "Ghost", "name": "Ghost", "bdate": "1900-01-01", "ddate": "1899-12-31"},
    ]

    with caplog.at_level(logging.WARNING, logger="validation"):
        graph = load_graph(records)

    warnings = validate_graph(graph)
    assert warnings == [
        "Impossible: Early born before parent Pat",
        "Suspicious: Pat was less than 12 years old when Young was born",
        "Impossible: Ghost died before being born",
    ]
    assert [r.getMessage() for r in caplog.records] == warnings
