"""
Per-step memo used by solver steps to skip neighbourhoods they already
analysed during the current pipeline run.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Set, Tuple

from ..core.grid import LoopyGrid, EdgeState, FaceId

GLOBAL_FLAG = "_global"


@dataclass
class SolverStepMetadata:
    """
    Snapshots and flags owned by one solver step for one pipeline run.

    Snapshots record the states of the edges around a vertex or face at the
    time a step last looked at it. A fresh instance is created every time the
    pipeline runs, so nothing carries over from one search branch to another.
    """
    vertex_states: Dict[int, Tuple[EdgeState, ...]] = field(default_factory=dict)
    face_states: Dict[FaceId, Tuple[EdgeState, ...]] = field(default_factory=dict)
    marked_faces: Set[FaceId] = field(default_factory=set)
    flags: Dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _vertex_snapshot(vertex: int, grid: LoopyGrid) -> Tuple[EdgeState, ...]:
        return tuple(grid.edges[e].state for e in grid.edges_sharing_vertex(vertex))

    @staticmethod
    def _face_snapshot(face_id: FaceId, grid: LoopyGrid) -> Tuple[EdgeState, ...]:
        return tuple(grid.edges[e].state for e in grid.edges_for_face(face_id))

    def store_vertex_state(self, vertex: int, grid: LoopyGrid):
        self.vertex_states[vertex] = self._vertex_snapshot(vertex, grid)

    def matches_stored_vertex_state(self, vertex: int, grid: LoopyGrid) -> bool:
        """True if the edges around `vertex` are unchanged since the last store"""
        stored = self.vertex_states.get(vertex)
        return stored is not None and stored == self._vertex_snapshot(vertex, grid)

    def store_face_state(self, face_id: FaceId, grid: LoopyGrid):
        self.face_states[face_id] = self._face_snapshot(face_id, grid)

    def matches_stored_face_state(self, face_id: FaceId, grid: LoopyGrid) -> bool:
        """True if the edges of `face_id` are unchanged since the last store"""
        stored = self.face_states.get(face_id)
        return stored is not None and stored == self._face_snapshot(face_id, grid)

    def mark_face(self, face_id: FaceId):
        self.marked_faces.add(face_id)

    def is_face_marked(self, face_id: FaceId) -> bool:
        return face_id in self.marked_faces

    def mark_flag(self, name: str = GLOBAL_FLAG):
        """Record that a one-off action has been taken"""
        self.flags[name] = True

    def is_flag_marked(self, name: str = GLOBAL_FLAG) -> bool:
        return self.flags.get(name) is True

    def set_value(self, name: str, value: Any):
        self.flags[name] = value

    def value(self, name: str, default: Any = None) -> Any:
        return self.flags.get(name, default)
