"""
Core data structures for Loopy puzzles.
"""

from dataclasses import dataclass, replace
from enum import IntEnum
from typing import List, Tuple, Optional, Dict, NamedTuple, NewType, Sequence, Union
from pathlib import Path
import json

import numpy as np

from .errors import GridStructureError


# Typed indices into LoopyGrid.edges / LoopyGrid.faces
EdgeId = NewType("EdgeId", int)
FaceId = NewType("FaceId", int)


class EdgeState(IntEnum):
    """State of an edge while solving.

    The integer values are the codes stored in LoopyGrid.state_vector().
    """
    NORMAL = 0  # undetermined
    MARKED = 1  # part of the loop
    DISABLED = 2  # proven not to be part of the loop

    @classmethod
    def from_name(cls, name: str) -> "EdgeState":
        return cls[name.upper()]


class Vertex(NamedTuple):
    """A point on the grid, referenced by its index"""
    x: float
    y: float


@dataclass
class Edge:
    """
    Undirected edge between two vertex indices.

    Edges are always stored from the lower vertex index to the higher one, so
    Edge(3, 1) and Edge(1, 3) are the same edge. Equality and hashing ignore
    the state.
    """
    start: int
    end: int
    state: EdgeState = EdgeState.NORMAL

    def __post_init__(self):
        if self.start > self.end:
            self.start, self.end = self.end, self.start

    def __hash__(self):
        return hash((self.start, self.end))

    def __eq__(self, other):
        if isinstance(other, Edge):
            return self.start == other.start and self.end == other.end
        return False

    def __repr__(self):
        return f"Edge({self.start}-{self.end}, {self.state.name.lower()})"

    @property
    def is_enabled(self) -> bool:
        return self.state != EdgeState.DISABLED

    @property
    def vertices(self) -> Tuple[int, int]:
        return (self.start, self.end)

    def has_vertex(self, vertex: int) -> bool:
        return self.start == vertex or self.end == vertex

    def shares_vertex(self, other: "Edge") -> bool:
        """True if this edge has an endpoint in common with `other`"""
        return (self.start == other.start or self.start == other.end or
                self.end == other.start or self.end == other.end)

    def other_vertex(self, vertex: int) -> int:
        """Endpoint opposite to `vertex`"""
        if vertex == self.start:
            return self.end
        if vertex == self.end:
            return self.start
        raise ValueError(f"Vertex {vertex} is not an endpoint of {self!r}")

    def copy(self) -> "Edge":
        return Edge(self.start, self.end, self.state)


@dataclass(frozen=True)
class Face:
    """A grid cell: its boundary edges, in order, and an optional hint.

    The position of an edge id in `edge_ids` is its face-local index.
    """
    edge_ids: Tuple[EdgeId, ...]
    hint: Optional[int] = None

    @property
    def has_hint(self) -> bool:
        return self.hint is not None

    def local_edge(self, local_index: int) -> EdgeId:
        return self.edge_ids[local_index]


class LoopyGrid:
    """Graph of vertices, edges and faces for a Loopy puzzle"""

    def __init__(self):
        self.vertices: List[Vertex] = []
        self.edges: List[Edge] = []
        self.faces: List[Face] = []

        # Topology indices. They are shared between copies and detached
        # before any structural change.
        self._edge_lookup: Dict[Tuple[int, int], EdgeId] = {}
        self._vertex_edges: Optional[Dict[int, Tuple[EdgeId, ...]]] = None
        self._edge_faces: Optional[Dict[EdgeId, Tuple[FaceId, ...]]] = None
        self._topology_shared = False

    # Construction

    def add_vertex(self, vertex: Union[Vertex, Tuple[float, float]]) -> int:
        """Add a vertex and return its index"""
        self._detach_topology()
        self.vertices.append(Vertex(*vertex))
        return len(self.vertices) - 1

    def create_edge(self, start: int, end: int) -> EdgeId:
        """
        Create an edge between two vertices.

        If an edge already joins the two vertices its id is returned instead,
        so a vertex pair never has more than one edge.

        Raises:
            GridStructureError: if a vertex index is invalid or both ends match
        """
        for vertex in (start, end):
            if not 0 <= vertex < len(self.vertices):
                raise GridStructureError(f"Invalid vertex index {vertex}")
        if start == end:
            raise GridStructureError(f"Edge cannot start and end at vertex {start}")

        key = (min(start, end), max(start, end))
        existing = self._edge_lookup.get(key)
        if existing is not None:
            return existing

        self._detach_topology()
        edge_id = EdgeId(len(self.edges))
        self.edges.append(Edge(start, end))
        self._edge_lookup[key] = edge_id
        return edge_id

    def create_face(self, vertex_indices: Sequence[int], hint: Optional[int] = None) -> FaceId:
        """
        Create a face from its boundary vertices, in order.

        Edges between consecutive vertices (and from the last vertex back to
        the first) are created, or reused when they already exist.
        """
        if len(vertex_indices) < 3:
            raise GridStructureError("A face needs at least 3 vertices")

        edge_ids = []
        for i, vertex in enumerate(vertex_indices):
            following = vertex_indices[(i + 1) % len(vertex_indices)]
            edge_ids.append(self.create_edge(vertex, following))

        return self.add_face(edge_ids, hint)

    def add_face(self, edge_ids: Sequence[int], hint: Optional[int] = None) -> FaceId:
        """Add a face bounded by existing edges"""
        edge_ids = tuple(EdgeId(e) for e in edge_ids)
        if len(edge_ids) < 3:
            raise GridStructureError("A face needs at least 3 edges")
        if len(set(edge_ids)) != len(edge_ids):
            raise GridStructureError(f"Face lists an edge more than once: {edge_ids}")
        for edge_id in edge_ids:
            if not 0 <= edge_id < len(self.edges):
                raise GridStructureError(f"Invalid edge index {edge_id}")
        self._check_hint(hint, len(edge_ids))

        self._detach_topology()
        self.faces.append(Face(edge_ids, hint))
        return FaceId(len(self.faces) - 1)

    def set_hint(self, face_id: int, hint: Optional[int]):
        """Replace the hint of a face"""
        face = self.face(face_id)
        self._check_hint(hint, len(face.edge_ids))
        self.faces[face_id] = replace(face, hint=hint)

    @staticmethod
    def _check_hint(hint: Optional[int], edge_count: int):
        if hint is not None and not 0 <= hint <= edge_count:
            raise GridStructureError(f"Hint {hint} is impossible for a face with {edge_count} edges")

    def _detach_topology(self):
        """Drop derived indices before a structural change"""
        if self._topology_shared:
            self._edge_lookup = dict(self._edge_lookup)
            self._topology_shared = False
        self._vertex_edges = None
        self._edge_faces = None

    # Queries

    def edge(self, edge_id: int) -> Edge:
        return self.edges[edge_id]

    def face(self, face_id: int) -> Face:
        return self.faces[face_id]

    def hint(self, face_id: int) -> Optional[int]:
        return self.faces[face_id].hint

    def edge_id(self, edge: Edge) -> Optional[EdgeId]:
        """Index of the edge joining the same two vertices, if any"""
        return self._edge_lookup.get((edge.start, edge.end))

    def edges_sharing_vertex(self, vertex: int) -> Tuple[EdgeId, ...]:
        """Ids of all edges incident to a vertex, in index order"""
        if self._vertex_edges is None:
            index: Dict[int, List[EdgeId]] = {}
            for i, edge in enumerate(self.edges):
                index.setdefault(edge.start, []).append(EdgeId(i))
                index.setdefault(edge.end, []).append(EdgeId(i))
            self._vertex_edges = {v: tuple(ids) for v, ids in index.items()}
        return self._vertex_edges.get(vertex, ())

    def faces_sharing_edge(self, edge_id: int) -> Tuple[FaceId, ...]:
        """Ids of the faces whose boundary contains an edge (0, 1 or 2)"""
        if self._edge_faces is None:
            index: Dict[EdgeId, List[FaceId]] = {}
            for i, face in enumerate(self.faces):
                for e in face.edge_ids:
                    index.setdefault(e, []).append(FaceId(i))
            self._edge_faces = {e: tuple(ids) for e, ids in index.items()}
        return self._edge_faces.get(edge_id, ())

    def face_contains_edge(self, face_id: int, edge_id: int) -> bool:
        return edge_id in self.faces[face_id].edge_ids

    def edges_for_face(self, face_id: int) -> Tuple[EdgeId, ...]:
        return self.faces[face_id].edge_ids

    def edge_ids_with_state(self, state: EdgeState) -> List[EdgeId]:
        return [EdgeId(i) for i, edge in enumerate(self.edges) if edge.state == state]

    def count_edges(self, face_id: int, state: EdgeState) -> int:
        """Number of boundary edges of a face in a given state"""
        return sum(1 for e in self.faces[face_id].edge_ids if self.edges[e].state == state)

    def vertex_edge_count(self, vertex: int, state: EdgeState) -> int:
        """Number of edges incident to a vertex in a given state"""
        return sum(1 for e in self.edges_sharing_vertex(vertex) if self.edges[e].state == state)

    @property
    def size(self) -> Tuple[float, float]:
        """Width and height of the bounding box of all vertices"""
        if not self.vertices:
            return (0, 0)
        xs = [v.x for v in self.vertices]
        ys = [v.y for v in self.vertices]
        return (max(xs) - min(xs), max(ys) - min(ys))

    def state_vector(self) -> np.ndarray:
        """Edge states as an int8 array, indexed by edge id"""
        return np.fromiter((int(edge.state) for edge in self.edges),
                           dtype=np.int8, count=len(self.edges))

    def is_fully_determined(self) -> bool:
        return all(edge.state != EdgeState.NORMAL for edge in self.edges)

    def copy(self) -> "LoopyGrid":
        """
        Copy the grid.

        Edge states are duplicated; the topology indices are shared until
        either grid changes its structure.
        """
        new_grid = LoopyGrid()
        new_grid.vertices = list(self.vertices)
        new_grid.edges = [edge.copy() for edge in self.edges]
        new_grid.faces = list(self.faces)

        new_grid._edge_lookup = self._edge_lookup
        new_grid._vertex_edges = self._vertex_edges
        new_grid._edge_faces = self._edge_faces
        new_grid._topology_shared = True
        self._topology_shared = True
        return new_grid

    # Serialization

    def to_dict(self) -> dict:
        """Convert grid to dictionary for serialization"""
        return {
            'vertices': [[v.x, v.y] for v in self.vertices],
            'edges': [
                {
                    'start': e.start,
                    'end': e.end,
                    'state': e.state.name.lower()
                }
                for e in self.edges
            ],
            'faces': [
                {
                    'edges': list(f.edge_ids),
                    'hint': f.hint
                }
                for f in self.faces
            ]
        }

    @classmethod
    def from_dict(cls, data: dict) -> "LoopyGrid":
        """Create grid from dictionary"""
        grid = cls()

        for x, y in data['vertices']:
            grid.add_vertex(Vertex(x, y))

        for edge_data in data.get('edges', []):
            expected_id = len(grid.edges)
            edge_id = grid.create_edge(edge_data['start'], edge_data['end'])
            # Face edge lists refer to positions in this list
            if edge_id != expected_id:
                raise GridStructureError(
                    f"Duplicate edge between vertices {edge_data['start']} and {edge_data['end']}")
            state = edge_data.get('state')
            if state:
                grid.edges[edge_id].state = EdgeState.from_name(state)

        for face_data in data.get('faces', []):
            grid.add_face(face_data['edges'], face_data.get('hint'))

        return grid

    def save(self, filepath: Path):
        """Save grid to JSON file"""
        with open(filepath, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load(cls, filepath: Path) -> "LoopyGrid":
        """Load grid from JSON file"""
        with open(filepath, 'r') as f:
            data = json.load(f)
        return cls.from_dict(data)

    def __repr__(self):
        return (f"LoopyGrid({len(self.vertices)} vertices, {len(self.edges)} edges, "
                f"{len(self.faces)} faces)")
