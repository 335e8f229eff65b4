"""Genealogy graph storage and relationship queries."""

from dataclasses import dataclass, field
import logging
from typing import Any, Iterable

import networkx as nx

from models import GENDER_ORDER, Family, Gender, Person

log = logging.getLogger(__name__)


class UnknownPersonError(ValueError):
    """Raised when a person id is not present in the graph."""

    def __init__(self, person_id: str):
        super().__init__(f"Person ID {person_id} not found in graph")
        self.person_id = person_id


def _as_id_list(value: Any) -> list[str]:
    """Normalize a childOf/parentOf value: None -> [], bare id -> [id]."""
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value]
    return [str(value)]


def _as_text(value: Any) -> str | None:
    """Dates and icons arrive as strings or bare numbers (1990); None stays None."""
    if value is None or value == "":
        return None
    return str(value)


def _unique(items: Iterable[str]) -> list[str]:
    # De-duplicate while preserving order
    return list(dict.fromkeys(items))


@dataclass
class _FamilyDraft:
    parents: list[str] = field(default_factory=list)
    children: list[str] = field(default_factory=list)


class GraphBuilder:
    """Collects person records and links them through their families.

    Persons and families may arrive in any order, so a family is materialized
    the first time anything refers to it.
    """

    def __init__(self):
        self._persons: dict[str, Person] = {}
        self._families: dict[str, _FamilyDraft] = {}

    def family(self, family_id: str) -> Family:
        """Get-or-create a family and return a snapshot of it."""
        draft = self._draft(str(family_id))
        return Family(str(family_id), tuple(draft.parents), tuple(draft.children))

    def _draft(self, family_id: str) -> _FamilyDraft:
        if family_id not in self._families:
            self._families[family_id] = _FamilyDraft()
        return self._families[family_id]

    def insert_person(self, record: dict[str, Any]) -> bool:
        """
        Store a person record and register it in every family it names.

        Records with a null id, or with an id that is already stored, are
        ignored (the first record wins).

        Returns:
            True if the record was stored
        """
        raw_id = record.get("id")
        if raw_id is None:
            log.debug("Dropping person record without id: %r", record.get("name"))
            return False
        person_id = str(raw_id)
        if person_id in self._persons:
            log.debug("Dropping duplicate person record %s", person_id)
            return False

        child_of = _as_id_list(record.get("childOf"))
        parent_of = _as_id_list(record.get("parentOf"))
        name = record.get("name") or ""
        person = Person(
            id=person_id,
            name=name,
            fullname=record.get("fullname") or None,
            gender=Gender.parse(record.get("gender")),
            birth_date=_as_text(record.get("bdate")),
            death_date=_as_text(record.get("ddate")),
            icon=_as_text(record.get("icon")),
            child_of=tuple(child_of),
            parent_of=tuple(parent_of),
        )
        self._persons[person_id] = person

        for family_id in child_of:
            self._draft(family_id).children.append(person_id)
        for family_id in parent_of:
            self._draft(family_id).parents.append(person_id)
        return True

    def insert_many(self, records: Iterable[dict[str, Any]]) -> int:
        return sum(1 for r in records if self.insert_person(r))

    def build(self) -> "GenealogyGraph":
        families = {
            fid: Family(fid, tuple(d.parents), tuple(d.children))
            for fid, d in self._families.items()
        }
        return GenealogyGraph(dict(self._persons), families)


class GenealogyGraph:
    """Read-only person/family store with derived relationship queries."""

    def __init__(self, persons: dict[str, Person], families: dict[str, Family]):
        self._persons = persons
        self._families = families

    @classmethod
    def from_records(cls, records: Iterable[dict[str, Any]]) -> "GenealogyGraph":
        builder = GraphBuilder()
        builder.insert_many(records)
        return builder.build()

    def __contains__(self, person_id: object) -> bool:
        return person_id in self._persons

    def __len__(self) -> int:
        return len(self._persons)

    def persons(self) -> list[Person]:
        return list(self._persons.values())

    def families(self) -> list[Family]:
        return list(self._families.values())

    def person(self, person_id: str) -> Person:
        try:
            return self._persons[person_id]
        except KeyError:
            raise UnknownPersonError(person_id) from None

    def family(self, family_id: str) -> Family:
        # Unknown ids read as empty; the frozen graph is never extended.
        family = self._families.get(family_id)
        if family is None:
            return Family(family_id)
        return family

    # ------------------------------------------------------------------
    # Relationship queries
    # ------------------------------------------------------------------

    def parents(self, person_id: str) -> list[str]:
        out: list[str] = []
        for family_id in self.person(person_id).child_of:
            out.extend(self.family(family_id).parents)
        return out

    def children(self, person_id: str) -> list[str]:
        out: list[str] = []
        for family_id in self.person(person_id).parent_of:
            out.extend(self.family(family_id).children)
        return out

    def partners(self, person_id: str) -> list[str]:
        out: list[str] = []
        for family_id in self.person(person_id).parent_of:
            out.extend(p for p in self.family(family_id).parents if p != person_id)
        return _unique(out)

    def partner_of(self, person_id: str, family_id: str) -> str | None:
        for parent_id in self.family(family_id).parents:
            if parent_id != person_id:
                return parent_id
        return None

    def siblings(self, person_id: str) -> list[str]:
        """
        Children of each parent, excluding the person.

        Not de-duplicated: a full sibling is reached once through each shared
        parent and therefore appears twice.
        """
        out: list[str] = []
        for parent_id in self.parents(person_id):
            out.extend(c for c in self.children(parent_id) if c != person_id)
        return out

    def uncles(self, person_id: str) -> list[str]:
        parents = self.parents(person_id)
        grandparents: list[str] = []
        for parent_id in parents:
            grandparents.extend(self.parents(parent_id))
        out: list[str] = []
        for grandparent_id in _unique(grandparents):
            out.extend(c for c in self.children(grandparent_id) if c not in parents)
        return _unique(out)

    def cousins(self, person_id: str) -> list[str]:
        out: list[str] = []
        for uncle_id in self.uncles(person_id):
            out.extend(self.children(uncle_id))
        return _unique(out)

    def nephews(self, person_id: str) -> list[str]:
        out: list[str] = []
        for sibling_id in self.siblings(person_id):
            out.extend(self.children(sibling_id))
        return _unique(out)

    def sort_by_birth_date(self, person_ids: Iterable[str]) -> list[str]:
        """Stable ascending sort on the raw birth date string (missing first)."""
        return sorted(person_ids, key=lambda pid: self.person(pid).birth_date or "")

    def qualifying_families(self, person_id: str) -> list[Family]:
        """Families the person is a child in that have at least one parent."""
        families = (self.family(f) for f in self.person(person_id).child_of)
        return [f for f in families if f.parents]

    def parents_in_display_order(self, family_id: str) -> list[str]:
        """Parents of a family ordered male, female, unknown (stable)."""
        return sorted(
            self.family(family_id).parents,
            key=lambda pid: GENDER_ORDER[self.person(pid).gender],
        )

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def to_networkx(self) -> nx.DiGraph:
        """
        Build a union-node graph of the data.

        Person nodes carry their attributes; each family becomes a node of
        type "family" joined to its parents by "spouse_to_family" edges and to
        its children by "family_to_child" edges.

        Returns:
            A networkx DiGraph suitable for traversal and validation
        """
        G = nx.DiGraph()

        for p in self._persons.values():
            G.add_node(
                p.id,
                node_type="person",
                person_name=p.name,
                gender=p.gender.value,
                birth_date=p.birth_date,
                death_date=p.death_date,
            )

        for f in self._families.values():
            fam_node = f"FAM_{f.id}"
            G.add_node(fam_node, node_type="family", family_id=f.id, spouses=f.parents)
            for parent_id in f.parents:
                G.add_edge(parent_id, fam_node, edge_type="spouse_to_family")
            for child_id in f.children:
                G.add_edge(fam_node, child_id, edge_type="family_to_child")

        return G
