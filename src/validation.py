"""Graph validation for family tree data."""

import logging
from typing import Any, Iterable

import networkx as nx

from graph import GenealogyGraph, GraphBuilder

log = logging.getLogger(__name__)


class CyclicAncestryError(ValueError):
    """Raised when a person is recorded as their own ancestor."""

    def __init__(self, cycle_nodes: list[str]):
        super().__init__(f"Cycle detected in parent-child relationships: {cycle_nodes}")
        self.cycle_nodes = cycle_nodes


def _year(date: str | None) -> int | None:
    # Dates are normalized to YYYY-MM-DD; only the year is reliable
    if not date:
        return None
    try:
        return int(date[:4])
    except ValueError:
        return None


def find_ancestry_cycle(graph: GenealogyGraph) -> list[str] | None:
    """Return the persons on one parent-child cycle, or None if there is none."""
    G = graph.to_networkx()
    try:
        cycle = nx.find_cycle(G, orientation="original")
    except nx.NetworkXNoCycle:
        return None
    # Family hub nodes sit between each parent and child; report persons only
    return [edge[0] for edge in cycle if G.nodes[edge[0]].get("node_type") == "person"]


def validate_graph(graph: GenealogyGraph) -> list[str]:
    """
    Validate the family tree graph for:
    - Cycles in parent-child relationships
    - Impossible ages (child born before parent)
    - Date ordering issues

    Returns a list of warning messages.
    """
    warnings: list[str] = []

    cycle_nodes = find_ancestry_cycle(graph)
    if cycle_nodes:
        warnings.append(f"Cycle detected in parent-child relationships: {cycle_nodes}")

    for family in graph.families():
        for parent_id in family.parents:
            parent = graph.person(parent_id)
            for child_id in family.children:
                child = graph.person(child_id)
                if not parent.birth_date or not child.birth_date:
                    continue
                # Normalized dates compare correctly as strings
                if child.birth_date < parent.birth_date:
                    warnings.append(
                        f"Impossible: {child.name} born before parent {parent.name}"
                    )
                    continue
                parent_year = _year(parent.birth_date)
                child_year = _year(child.birth_date)
                if parent_year is not None and child_year is not None:
                    if child_year - parent_year < 12:
                        warnings.append(
                            f"Suspicious: {parent.name} was less than 12 years "
                            f"old when {child.name} was born"
                        )

    # Check death before birth
    for person in graph.persons():
        if person.birth_date and person.death_date and person.death_date < person.birth_date:
            warnings.append(f"Impossible: {person.name} died before being born")

    return warnings


def load_graph(records: Iterable[dict[str, Any]]) -> GenealogyGraph:
    """
    Build a graph from person records and check it before layout.

    Raises:
        CyclicAncestryError: if someone is their own ancestor

    Other findings are logged as warnings and do not stop loading.
    """
    builder = GraphBuilder()
    stored = builder.insert_many(records)
    graph = builder.build()
    log.debug("Loaded %d persons into %d families", stored, len(graph.families()))

    cycle_nodes = find_ancestry_cycle(graph)
    if cycle_nodes:
        raise CyclicAncestryError(cycle_nodes)

    for warning in validate_graph(graph):
        log.warning(warning)
    return graph
