"""Coordinate assignment for a focal person's ancestor and descendant trees.

The focal person sits between two blocks: ancestors to the left, descendants
(with partners) to the right. Each recursive call receives the anchor point
its connector line starts from and, for the descendant walk, returns the
anchor the ancestor walk attaches to.
"""

import logging

from config import BoxSizes, SizeMode, sizes_for
from dimensions import DimensionCalculator
from graph import GenealogyGraph
from models import Box, Layout, Line, Point, Size

log = logging.getLogger(__name__)


class LayoutEngine:
    """Lays out a graph around a focal person; each `render` starts from a clean state."""

    def __init__(self, graph: GenealogyGraph, mode: SizeMode = SizeMode.ILLUSTRATED):
        self.graph = graph
        self.mode = mode
        self.sizes: BoxSizes = sizes_for(mode)
        self.dims = DimensionCalculator(graph, self.sizes)
        self.commands: list[Box | Line] = []

    def render(self, focal_id: str) -> Layout:
        """
        Lay out the tree around `focal_id`.

        Raises:
            UnknownPersonError: if `focal_id` is not in the graph
        """
        self.graph.person(focal_id)
        # Earlier layouts keep their own command lists
        self.commands = []
        self.dims = DimensionCalculator(self.graph, self.sizes)
        pad = self.sizes.pad
        anc = self.dims.ancestors(focal_id)
        des = self.dims.descendants(focal_id)
        width = anc.width + des.width + 2 * pad
        height = max(anc.height, des.height) + 2 * pad
        content_height = height - 2 * pad

        # Both blocks are centered vertically in the canvas
        anchor = self.layout_descendants(
            focal_id, Point(pad + anc.width, pad + (content_height - des.height) / 2), None
        )
        self.layout_ancestors(
            focal_id, Point(pad, pad + (content_height - anc.height) / 2), anchor
        )

        log.debug(
            "Rendered %s: canvas %sx%s, %d commands",
            focal_id,
            width,
            height,
            len(self.commands),
        )
        return Layout(
            focal_id, width, height, self.commands, illustrated=self.mode is SizeMode.ILLUSTRATED
        )

    # ========================================================================
    # Descendants
    # ========================================================================

    def layout_descendants(
        self, person_id: str, origin: Point, parent_anchor: Point | None
    ) -> Point:
        """
        Place a person with all of their partners and descendants.

        Args:
            person_id: Person to place
            origin: Top-left corner of the person's descendant block
            parent_anchor: Where the connector from the parents starts, or
                None for the focal person

        Returns:
            The left vertical midpoint of the person's first box
        """
        person = self.graph.person(person_id)
        ph = self.sizes.person_height
        is_focal = parent_anchor is None

        if not person.parent_of:
            if parent_anchor is not None:
                self._line(parent_anchor, origin.shift(dy=ph / 2))
            self._person_box(person_id, origin, is_focal=is_focal)
            return origin.shift(dy=ph / 2)

        anchor: Point | None = None
        last_box_y = 0.0
        block_offset = 0.0
        for i, family_id in enumerate(person.parent_of):
            fam_size = self.dims.family_descendants(person_id, family_id)
            fam_origin = origin.shift(dy=block_offset)
            box_pos = fam_origin.shift(dy=self.dims.parent_row_offset(person_id, family_id))

            if i > 0:
                # Join this family's box to the previous box of the same person
                x = origin.x + self.sizes.partner_shift / 2
                self._line(Point(x, last_box_y + ph), Point(x, box_pos.y))
            elif parent_anchor is not None:
                self._line(parent_anchor, box_pos.shift(dy=ph / 2))

            self._person_box(person_id, box_pos, is_focal=is_focal and i == 0)
            if anchor is None:
                anchor = box_pos.shift(dy=ph / 2)
            last_box_y = box_pos.y

            partner_id = self.graph.partner_of(person_id, family_id)
            if partner_id is not None:
                shift = self.sizes.partner_shift
                self._person_box(
                    partner_id,
                    box_pos.shift(shift, ph),
                    Size(self.sizes.person_width - shift, ph),
                )

            self.layout_children(
                family_id,
                fam_origin.shift(dx=self.sizes.person_width + self.sizes.child_gap),
                box_pos.shift(self.sizes.person_width, ph / 2),
            )
            block_offset += fam_size.height + self.sizes.sibling_gap

        return anchor

    def layout_children(self, family_id: str, origin: Point, parent_anchor: Point) -> None:
        """Stack the children of a family top to bottom, eldest first."""
        offset = 0.0
        children = self.graph.sort_by_birth_date(self.graph.family(family_id).children)
        for child_id in children:
            child_size = self.dims.descendants(child_id)
            self.layout_descendants(child_id, origin.shift(dy=offset), parent_anchor)
            offset += child_size.height + self.sizes.sibling_gap

    # ========================================================================
    # Ancestors
    # ========================================================================

    def layout_ancestors(self, person_id: str, origin: Point, child_anchor: Point | None) -> None:
        """
        Place every parent family of a person inside its ancestor block.

        Args:
            person_id: Person whose ancestors are placed
            origin: Top-left corner of the person's ancestor block
            child_anchor: Point on the person's box the family connectors end at
        """
        anc = self.dims.ancestors(person_id)
        offset = 0.0
        for family in self.graph.qualifying_families(person_id):
            fam_size = self.dims.ancestor_family(family.id)
            fam_origin = origin.shift(anc.width - fam_size.width - self.sizes.child_gap, offset)
            self.layout_ancestor_family(family.id, fam_origin, child_anchor)
            offset += fam_size.height + self.sizes.sibling_gap

    def layout_ancestor_family(
        self, family_id: str, origin: Point, child_anchor: Point | None
    ) -> None:
        size = self.dims.ancestor_family(family_id)
        pw, ph = self.sizes.person_width, self.sizes.person_height
        parents = self.graph.parents_in_display_order(family_id)
        row_top = origin.y + size.height / 2 - len(parents) * ph / 2

        grand_offset = 0.0
        for i, parent_id in enumerate(parents):
            box_pos = Point(origin.x + size.width - pw, row_top + i * ph)
            self._person_box(parent_id, box_pos)
            grand = self.dims.ancestors(parent_id)
            if grand.is_empty:
                continue
            self.layout_ancestors(
                parent_id,
                Point(origin.x + size.width - grand.width - pw, origin.y + grand_offset),
                box_pos.shift(dy=ph / 2),
            )
            grand_offset += grand.height + self.sizes.sibling_gap

        if child_anchor is not None:
            self._line(child_anchor, Point(origin.x + size.width, origin.y + size.height / 2))

    # ========================================================================
    # Draw commands
    # ========================================================================

    def _person_box(
        self, person_id: str, pos: Point, size: Size | None = None, is_focal: bool = False
    ) -> None:
        person = self.graph.person(person_id)
        if size is None:
            size = Size(self.sizes.person_width, self.sizes.person_height)
        illustrated = self.mode is SizeMode.ILLUSTRATED
        self.commands.append(
            Box(
                id=person.id,
                x=pos.x,
                y=pos.y,
                width=size.width,
                height=size.height,
                label=person.name,
                style=person.gender,
                is_focal=is_focal,
                detail=person.lifespan if illustrated else None,
                icon=person.icon if illustrated else None,
            )
        )

    def _line(self, start: Point, end: Point) -> None:
        self.commands.append(Line(start.x, start.y, end.x, end.y))


def render_layout(
    graph: GenealogyGraph, focal_id: str, mode: SizeMode = SizeMode.ILLUSTRATED
) -> Layout:
    """Lay out the tree around `focal_id` in a fresh render pass."""
    return LayoutEngine(graph, mode).render(focal_id)
