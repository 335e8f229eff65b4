from __future__ import annotations

import matplotlib

# Keep plotting tests headless.
matplotlib.use("Agg")

import pytest  # noqa: E402

from graph import GenealogyGraph  # noqa: E402


@pytest.fixture()
def nuclear_graph() -> GenealogyGraph:
    # A (m) + B (f) -> children C (1990) and D (1985), C listed first.
    return GenealogyGraph.from_records(
        [
            {"id": "A", "name": "Adam", "gender": "m", "parentOf": "F1"},
            {"id": "B", "name": "Berta", "gender": "f", "parentOf": "F1"},
            {"id": "C", "name": "Carl", "gender": "m", "bdate": "1990-04-02", "childOf": "F1"},
            {"id": "D", "name": "Dora", "gender": "f", "bdate": "1985-00-00", "childOf": "F1"},
        ]
    )


@pytest.fixture()
def remarried_graph() -> GenealogyGraph:
    # X has child K with Y (family F1) and child L with Z (family F2).
    return GenealogyGraph.from_records(
        [
            {"id": "X", "name": "Xavier", "gender": "m", "parentOf": ["F1", "F2"]},
            {"id": "Y", "name": "Yvonne", "gender": "f", "parentOf": ["F1"]},
            {"id": "Z", "name": "Zoe", "gender": "f", "parentOf": ["F2"]},
            {"id": "K", "name": "Kim", "childOf": "F1"},
            {"id": "L", "name": "Lou", "childOf": "F2"},
        ]
    )


@pytest.fixture()
def extended_graph() -> GenealogyGraph:
    """Three generations around X.

    GA + GB -> P, U           (family G)
    P + Q   -> X, S           (family F1)
    U       -> K              (family H)
    S       -> N              (family FS)
    """
    return GenealogyGraph.from_records(
        [
            {"id": "GA", "name": "Grandpa", "gender": "m", "parentOf": "G"},
            {"id": "GB", "name": "Grandma", "gender": "f", "parentOf": "G"},
            {"id": "P", "name": "Paul", "gender": "m", "childOf": "G", "parentOf": "F1"},
            {"id": "U", "name": "Uma", "gender": "f", "childOf": "G", "parentOf": "H"},
            {"id": "Q", "name": "Quinn", "gender": "f", "parentOf": "F1"},
            {"id": "X", "name": "Xena", "gender": "f", "bdate": "1970", "childOf": "F1"},
            {"id": "S", "name": "Sam", "gender": "m", "bdate": "1972", "childOf": "F1", "parentOf": "FS"},
            {"id": "K", "name": "Kai", "childOf": "H"},
            {"id": "N", "name": "Nina", "gender": "f", "childOf": "FS"},
        ]
    )
