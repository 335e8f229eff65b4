"""Navigation state: which person the tree is currently centered on."""

import logging

from config import SizeMode, default_size_mode
from graph import GenealogyGraph
from layout import render_layout
from models import Layout

log = logging.getLogger(__name__)


class TreeView:
    """
    Holds the loaded graph, the active box size mode and the focal person.

    Every navigation step renders from scratch; nothing from a previous
    layout is reused.
    """

    def __init__(self, graph: GenealogyGraph, mode: SizeMode | None = None):
        self.graph = graph
        self.mode = mode if mode is not None else default_size_mode()
        self.focal_id: str | None = None
        self.layout: Layout | None = None

    def load(self, graph: GenealogyGraph) -> None:
        """Swap in a freshly loaded dataset; the current focal is forgotten."""
        self.graph = graph
        self.focal_id = None
        self.layout = None

    def select_focal(self, person_id: str) -> Layout:
        # Render first so a bad id leaves the previous view in place
        layout = render_layout(self.graph, person_id, self.mode)
        self.focal_id = person_id
        self.layout = layout
        log.debug("Focal person is now %s", person_id)
        return layout

    def set_size_mode(self, mode: SizeMode) -> Layout | None:
        """Switch box sizes and re-render the current focal person, if any."""
        self.mode = mode
        if self.focal_id is None:
            return None
        return self.select_focal(self.focal_id)
