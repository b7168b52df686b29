"""
Corner entry rule.
"""

from ...core.grid import LoopyGrid, EdgeState, FaceId
from ...core.controller import GridController
from ...core.graph_utils import single_path_edges
from ..metadata import SolverStepMetadata
from .base import SolverStep


class CornerEntrySolverStep(SolverStep):
    """
    Handles loose ends that touch a hinted face at one of its corners, where
    the line has no choice but to run along the edges of that face.

    In the field below the marked edge on the top right has to continue
    through the face hinted 1. Whichever way it goes it marks one edge of
    that face, so the left and bottom edges of the face cannot be marked.
    Turning down the right edge would also force the bottom edge, which is
    two edges, so that path is ruled out as well.

        . _ . _ .
        ! _ ! _ ║
        ! _ ! 1 !
    """

    name = "corner_entry"

    def apply(self, grid: LoopyGrid, metadata: SolverStepMetadata) -> LoopyGrid:
        controller = GridController(grid)
        for vertex in range(len(grid.vertices)):
            self._apply_to_vertex(controller, vertex)
        return controller.grid

    def _apply_to_vertex(self, controller: GridController, vertex: int):
        grid = controller.grid
        edge_ids = grid.edges_sharing_vertex(vertex)

        # Only loose ends of a line are of interest
        if len(self.marked_edges(grid, edge_ids)) != 1:
            return
        normal = self.normal_edges(grid, edge_ids)
        if not normal:
            return

        # All the ways forward have to run along one single face
        common_faces = set(grid.faces_sharing_edge(normal[0]))
        for edge_id in normal[1:]:
            common_faces &= set(grid.faces_sharing_edge(edge_id))

        if len(common_faces) != 1:
            return

        self._apply_to_face(controller, common_faces.pop(), vertex)

    def _apply_to_face(self, controller: GridController, face_id: FaceId, vertex: int):
        grid = controller.grid
        hint = grid.hint(face_id)
        if hint is None:
            return

        face_edges = grid.edges_for_face(face_id)
        candidates = [e for e in face_edges
                      if grid.edges[e].has_vertex(vertex) and grid.edges[e].state == EdgeState.NORMAL]
        if not candidates:
            return

        # Every way in is traced on the same grid, before anything is disabled
        paths = [[e for e in single_path_edges(grid, edge_id) if grid.face_contains_edge(face_id, e)]
                 for edge_id in candidates]
        least_count = min(len(path) for path in paths)

        # Edges the line may still take through this face
        reachable = set()
        too_long = []
        for path in paths:
            # Taking this path would mark more edges than the hint allows
            if len(path) > hint:
                too_long.extend(path)
            else:
                reachable.update(path)

        controller.set_edges(EdgeState.DISABLED, self.normal_edges(grid, too_long))

        if least_count >= hint:
            # Entering the face uses up the hint: nothing away from the corner
            # can be marked, apart from the rest of the path taken
            to_disable = [e for e in face_edges
                          if not grid.edges[e].has_vertex(vertex) and e not in reachable]
            controller.set_edges(EdgeState.DISABLED, self.normal_edges(grid, to_disable))
