"""
Controller for changing edge states on a Loopy grid.
"""

from typing import Iterable

from .grid import LoopyGrid, EdgeState
from .errors import InvalidEdgeError, InvalidFaceError


class GridController:
    """
    Applies edge state changes to a private copy of a grid.

    All solver steps change state through a controller. No hint consistency
    checks happen here: callers only request changes they have justified.
    Every setter returns the number of edges whose state actually changed.
    """

    def __init__(self, grid: LoopyGrid):
        self.grid = grid.copy()

    def set_edge(self, state: EdgeState, edge_id: int) -> int:
        """Set the state of a single edge"""
        return self.set_edges(state, [edge_id])

    def set_edges(self, state: EdgeState, edge_ids: Iterable[int]) -> int:
        """
        Set the state of several edges at once.

        All indices are checked before any edge is touched, so an invalid
        index leaves the grid unchanged.

        Raises:
            InvalidEdgeError: if any index is out of range
        """
        edge_ids = list(edge_ids)
        edge_count = len(self.grid.edges)
        for edge_id in edge_ids:
            if not 0 <= edge_id < edge_count:
                raise InvalidEdgeError(edge_id, edge_count)

        changed = 0
        for edge_id in edge_ids:
            edge = self.grid.edges[edge_id]
            if edge.state != state:
                edge.state = state
                changed += 1
        return changed

    def set_edges_for_face(self, state: EdgeState, face_id: int) -> int:
        """Set the state of every boundary edge of a face"""
        self._check_face(face_id)
        return self.set_edges(state, self.grid.edges_for_face(face_id))

    def set_edge_for_face(self, state: EdgeState, face_id: int, local_index: int) -> int:
        """Set the state of a face boundary edge given its index within the face"""
        self._check_face(face_id)
        edge_ids = self.grid.edges_for_face(face_id)
        if not 0 <= local_index < len(edge_ids):
            raise InvalidFaceError(face_id, len(self.grid.faces), local_index)
        return self.set_edge(state, edge_ids[local_index])

    def set_all_edges(self, state: EdgeState) -> int:
        """Set the state of every edge of the grid"""
        return self.set_edges(state, range(len(self.grid.edges)))

    def _check_face(self, face_id: int):
        if not 0 <= face_id < len(self.grid.faces):
            raise InvalidFaceError(face_id, len(self.grid.faces))
