"""
Rules driven by face hints.
"""

from ...core.grid import LoopyGrid, EdgeState, FaceId
from ...core.controller import GridController
from ..metadata import SolverStepMetadata
from .base import SolverStep


class ZeroHintSolverStep(SolverStep):
    """Disables every edge around faces hinted 0. Runs once per pipeline run."""

    name = "zero_hint"

    def apply(self, grid: LoopyGrid, metadata: SolverStepMetadata) -> LoopyGrid:
        if metadata.is_flag_marked():
            return grid

        controller = GridController(grid)
        grid = controller.grid

        for face in grid.faces:
            if face.hint == 0:
                controller.set_edges(EdgeState.DISABLED, self.normal_edges(grid, face.edge_ids))

        metadata.mark_flag()
        return grid


class ExactEdgeCountSolverStep(SolverStep):
    """
    Completes faces whose hint is decided by their current edge counts:
    once the marked edges reach the hint the rest of the face is disabled, and
    when only just enough edges remain enabled they are all marked.
    """

    name = "exact_edge_count"

    def apply(self, grid: LoopyGrid, metadata: SolverStepMetadata) -> LoopyGrid:
        controller = GridController(grid)
        grid = controller.grid

        for face_id, face in enumerate(grid.faces):
            if face.hint is None:
                continue
            face_id = FaceId(face_id)
            if metadata.matches_stored_face_state(face_id, grid):
                continue

            marked = self.marked_edges(grid, face.edge_ids)
            normal = self.normal_edges(grid, face.edge_ids)

            if normal:
                if len(marked) == face.hint:
                    controller.set_edges(EdgeState.DISABLED, normal)
                elif len(marked) + len(normal) == face.hint:
                    controller.set_edges(EdgeState.MARKED, normal)

            metadata.store_face_state(face_id, grid)

        return grid
