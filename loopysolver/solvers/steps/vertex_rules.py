"""
Rules driven by the edges around a single vertex.

A vertex of the final loop has either zero or two marked edges.
"""

from ...core.grid import LoopyGrid, EdgeState
from ...core.controller import GridController
from ..metadata import SolverStepMetadata
from .base import SolverStep


class DeadEndRemovalSolverStep(SolverStep):
    """Disables edges leading into a vertex with no other way out"""

    name = "dead_end_removal"

    def apply(self, grid: LoopyGrid, metadata: SolverStepMetadata) -> LoopyGrid:
        controller = GridController(grid)
        grid = controller.grid

        for vertex in range(len(grid.vertices)):
            if metadata.matches_stored_vertex_state(vertex, grid):
                continue

            enabled = [e for e in grid.edges_sharing_vertex(vertex) if grid.edges[e].is_enabled]
            if len(enabled) == 1:
                controller.set_edges(EdgeState.DISABLED, self.normal_edges(grid, enabled))

            metadata.store_vertex_state(vertex, grid)

        return grid


class TwoEdgesPerVertexSolverStep(SolverStep):
    """
    Closes vertices that already carry two marked edges, and extends loose
    ends that have a single way forward.
    """

    name = "two_edges_per_vertex"

    def apply(self, grid: LoopyGrid, metadata: SolverStepMetadata) -> LoopyGrid:
        controller = GridController(grid)
        grid = controller.grid

        for vertex in range(len(grid.vertices)):
            if metadata.matches_stored_vertex_state(vertex, grid):
                continue

            edge_ids = grid.edges_sharing_vertex(vertex)
            marked = self.marked_edges(grid, edge_ids)
            normal = self.normal_edges(grid, edge_ids)

            if len(marked) == 2 and normal:
                controller.set_edges(EdgeState.DISABLED, normal)
            elif len(marked) == 1 and len(normal) == 1:
                controller.set_edges(EdgeState.MARKED, normal)

            metadata.store_vertex_state(vertex, grid)

        return grid
