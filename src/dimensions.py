"""Bounding box sizes of ancestor and descendant subtrees.

Every size is a (width, height) pair measured in the same unit as a person
box. Ancestor blocks grow leftwards (earlier generations), descendant blocks
grow rightwards. A DimensionCalculator belongs to a single render: its memo
table is only valid for one graph and one set of box sizes.
"""

from typing import Callable

from config import BoxSizes
from graph import GenealogyGraph
from models import ZERO_SIZE, Size


class DimensionCalculator:
    def __init__(self, graph: GenealogyGraph, sizes: BoxSizes):
        self.graph = graph
        self.sizes = sizes
        self._memo: dict[tuple[str, ...], Size] = {}

    def _cached(self, key: tuple[str, ...], compute: Callable[[], Size]) -> Size:
        size = self._memo.get(key)
        if size is None:
            size = compute()
            self._memo[key] = size
        return size

    @property
    def person_box(self) -> Size:
        return Size(self.sizes.person_width, self.sizes.person_height)

    # ========================================================================
    # Ancestors: from a person up to the eldest recorded generation
    # ========================================================================

    def ancestors(self, person_id: str) -> Size:
        return self._cached(("ancestors", person_id), lambda: self._ancestors(person_id))

    def _ancestors(self, person_id: str) -> Size:
        width = height = 0.0
        for family in self.graph.qualifying_families(person_id):
            fam = self.ancestor_family(family.id)
            if fam.is_empty:
                continue
            width = max(width, fam.width + self.sizes.child_gap)
            if height > 0:
                height += self.sizes.sibling_gap
            height += fam.height
        return Size(width, height)

    def ancestor_family(self, family_id: str) -> Size:
        return self._cached(
            ("ancestor_family", family_id), lambda: self._ancestor_family(family_id)
        )

    def _ancestor_family(self, family_id: str) -> Size:
        parents = self.graph.family(family_id).parents
        if not parents:
            return ZERO_SIZE
        width = height = 0.0
        for parent_id in parents:
            grand = self.ancestors(parent_id)
            if height > 0:
                height += self.sizes.sibling_gap
            width = max(width, grand.width + self.sizes.person_width)
            height += grand.height
        # The parent row itself always needs room
        height = max(height, len(parents) * self.sizes.person_height)
        return Size(width, height)

    # ========================================================================
    # Descendants: from a person down through partners and children
    # ========================================================================

    def descendants(self, person_id: str) -> Size:
        return self._cached(
            ("descendants", person_id), lambda: self._descendants(person_id)
        )

    def _descendants(self, person_id: str) -> Size:
        parent_of = self.graph.person(person_id).parent_of
        if not parent_of:
            return self.person_box
        width = height = 0.0
        for family_id in parent_of:
            fam = self.family_descendants(person_id, family_id)
            width = max(width, fam.width)
            if height > 0:
                height += self.sizes.sibling_gap
            height += fam.height
        return Size(width, height)

    def family_descendants(self, person_id: str, family_id: str) -> Size:
        return self._cached(
            ("family_descendants", person_id, family_id),
            lambda: self._family_descendants(person_id, family_id),
        )

    def _family_descendants(self, person_id: str, family_id: str) -> Size:
        width, height = self.person_box
        if self.graph.partner_of(person_id, family_id) is not None:
            # Partner box sits directly beneath the person box
            height += self.sizes.person_height
        children = self.children(family_id)
        if not children.is_empty:
            width += children.width
            height = max(height, children.height)
        return Size(width, height)

    def children(self, family_id: str) -> Size:
        return self._cached(("children", family_id), lambda: self._children(family_id))

    def _children(self, family_id: str) -> Size:
        family = self.graph.family(family_id)
        if not family.children:
            return ZERO_SIZE
        max_width = height = 0.0
        for child_id in self.graph.sort_by_birth_date(family.children):
            child = self.descendants(child_id)
            if height > 0:
                height += self.sizes.sibling_gap
            max_width = max(max_width, child.width)
            height += child.height
        return Size(self.sizes.child_gap + max_width, height)

    def parent_row_offset(self, person_id: str, family_id: str) -> float:
        """
        Vertical offset of the person box inside a family's descendant block.

        With a partner, the two stacked boxes are pinned to the top when the
        children block is shorter than the family block, and centered against
        the children block while it is less than three boxes high. Otherwise
        the person box alone is centered in the block.
        """
        fam = self.family_descendants(person_id, family_id)
        ph = self.sizes.person_height
        if self.graph.partner_of(person_id, family_id) is not None:
            children = self.children(family_id)
            if children.height < fam.height:
                return 0.0
            if children.height / 2 < 1.5 * ph:
                return (children.height - 2 * ph) / 2
        return (fam.height - ph) / 2
