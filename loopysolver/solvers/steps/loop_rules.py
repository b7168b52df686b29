"""
Rules that look at whole marked fragments of the loop.
"""

from typing import Dict

from ...core.grid import LoopyGrid, EdgeState
from ...core.controller import GridController
from ...core.graph_utils import marked_fragments, loose_ends
from ..metadata import SolverStepMetadata
from .base import SolverStep


class PrematureLoopSolverStep(SolverStep):
    """
    Disables edges that would close a fragment into a loop while other marked
    fragments still exist; the puzzle only allows a single loop.

    This is the one rule that looks beyond a single vertex or face: it needs
    the marked fragments of the whole grid to tell which loose ends belong
    together. It only ever disables an edge that would close a loop early.
    """

    name = "premature_loop"

    def apply(self, grid: LoopyGrid, metadata: SolverStepMetadata) -> LoopyGrid:
        controller = GridController(grid)
        grid = controller.grid

        fragments = marked_fragments(grid)
        if len(fragments) < 2:
            return grid

        owner: Dict[int, int] = {}
        for index, fragment in enumerate(fragments):
            for edge_id in fragment:
                edge = grid.edges[edge_id]
                owner[edge.start] = index
                owner[edge.end] = index

        ends = set(loose_ends(grid))
        closing = []
        for vertex in sorted(ends):
            for edge_id in self.normal_edges(grid, grid.edges_sharing_vertex(vertex)):
                other = grid.edges[edge_id].other_vertex(vertex)
                if other in ends and owner.get(other) == owner.get(vertex):
                    closing.append(edge_id)

        controller.set_edges(EdgeState.DISABLED, closing)
        return grid
