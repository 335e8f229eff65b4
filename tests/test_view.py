from __future__ import annotations

import pytest

from config import SIZE_MODE_ENV, SizeMode, default_size_mode
from graph import GenealogyGraph, UnknownPersonError
from view import TreeView


def test_select_focal_tracks_current_person(nuclear_graph: GenealogyGraph) -> None:
    view = TreeView(nuclear_graph, SizeMode.COMPACT)
    assert view.focal_id is None

    layout = view.select_focal("C")
    assert view.focal_id == "C"
    assert view.layout is layout
    assert layout.focal_id == "C"

    view.select_focal("A")
    assert view.focal_id == "A"


def test_bad_focal_keeps_previous_view(nuclear_graph: GenealogyGraph) -> None:
    view = TreeView(nuclear_graph, SizeMode.COMPACT)
    previous = view.select_focal("A")

    with pytest.raises(UnknownPersonError):
        view.select_focal("missing")

    assert view.focal_id == "A"
    assert view.layout is previous


def test_set_size_mode_rerenders_current_focal(nuclear_graph: GenealogyGraph) -> None:
    view = TreeView(nuclear_graph, SizeMode.COMPACT)
    assert view.set_size_mode(SizeMode.ILLUSTRATED) is None

    view.select_focal("D")
    layout = view.set_size_mode(SizeMode.COMPACT)
    assert layout is not None
    assert {b.height for b in layout.boxes} == {20}

    layout = view.set_size_mode(SizeMode.ILLUSTRATED)
    assert {b.height for b in layout.boxes} == {50}
    assert view.focal_id == "D"


def test_load_replaces_graph(nuclear_graph: GenealogyGraph, remarried_graph: GenealogyGraph) -> None:
    view = TreeView(nuclear_graph, SizeMode.COMPACT)
    view.select_focal("A")

    view.load(remarried_graph)
    assert view.focal_id is None
    assert view.layout is None
    assert view.select_focal("X").focal_id == "X"


def test_default_size_mode_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(SIZE_MODE_ENV, raising=False)
    assert default_size_mode() is SizeMode.ILLUSTRATED

    monkeypatch.setenv(SIZE_MODE_ENV, "Compact")
    assert default_size_mode() is SizeMode.COMPACT
    assert TreeView(GenealogyGraph({}, {})).mode is SizeMode.COMPACT

    monkeypatch.setenv(SIZE_MODE_ENV, "huge")
    with pytest.raises(ValueError):
        default_size_mode()
