import numpy as np
import pytest

from loopysolver.core.grid import LoopyGrid, Edge, EdgeState, Vertex, Face
from loopysolver.core.errors import GridStructureError


def test_edge_is_canonical_and_ignores_state():
    edge = Edge(3, 1)
    assert (edge.start, edge.end) == (1, 3)
    assert edge == Edge(1, 3, EdgeState.MARKED)
    assert hash(edge) == hash(Edge(1, 3))
    assert edge != Edge(1, 2)


def test_edge_vertex_helpers():
    edge = Edge(2, 5)
    assert edge.has_vertex(5)
    assert not edge.has_vertex(3)
    assert edge.other_vertex(2) == 5
    assert edge.shares_vertex(Edge(5, 7))
    assert not edge.shares_vertex(Edge(6, 7))
    with pytest.raises(ValueError):
        edge.other_vertex(4)


def test_edge_enabled_flag():
    assert Edge(0, 1).is_enabled
    assert Edge(0, 1, EdgeState.MARKED).is_enabled
    assert not Edge(0, 1, EdgeState.DISABLED).is_enabled


def test_create_edge_reuses_existing_pair():
    grid = LoopyGrid()
    for point in [(0, 0), (1, 0), (1, 1)]:
        grid.add_vertex(point)

    first = grid.create_edge(0, 1)
    assert grid.create_edge(1, 0) == first
    assert len(grid.edges) == 1
    assert grid.edge_id(Edge(1, 0)) == first
    assert grid.edge_id(Edge(1, 2)) is None


def test_create_edge_rejects_bad_vertices():
    grid = LoopyGrid()
    grid.add_vertex(Vertex(0, 0))
    grid.add_vertex(Vertex(1, 0))

    with pytest.raises(GridStructureError):
        grid.create_edge(0, 5)
    with pytest.raises(GridStructureError):
        grid.create_edge(1, 1)


def test_create_face_closes_polygon():
    grid = LoopyGrid()
    for point in [(0, 0), (1, 0), (0, 1)]:
        grid.add_vertex(point)

    face_id = grid.create_face([0, 1, 2], hint=2)
    face = grid.face(face_id)
    assert len(face.edge_ids) == 3
    assert grid.edge(face.local_edge(2)) == Edge(0, 2)
    assert grid.hint(face_id) == 2


def test_add_face_validates_input():
    grid = LoopyGrid()
    for point in [(0, 0), (1, 0), (0, 1)]:
        grid.add_vertex(point)
    grid.create_face([0, 1, 2])

    with pytest.raises(GridStructureError):
        grid.add_face([0, 1])
    with pytest.raises(GridStructureError):
        grid.add_face([0, 1, 7])
    with pytest.raises(GridStructureError):
        grid.add_face([0, 1, 2], hint=4)


def test_square_grid_topology(square_2x2):
    grid = square_2x2
    assert (len(grid.vertices), len(grid.edges), len(grid.faces)) == (9, 12, 4)
    assert grid.edges_for_face(0) == (0, 1, 2, 3)
    assert grid.edges_for_face(3) == (6, 10, 11, 7)
    assert grid.edges_sharing_vertex(4) == (1, 2, 6, 7)
    assert grid.faces_sharing_edge(1) == (0, 1)
    assert grid.faces_sharing_edge(0) == (0,)
    assert grid.face_contains_edge(2, 7)
    assert not grid.face_contains_edge(0, 7)
    assert grid.size == (2, 2)


def test_set_hint(square_2x2):
    square_2x2.set_hint(1, 3)
    assert square_2x2.hint(1) == 3
    assert square_2x2.face(1).has_hint

    square_2x2.set_hint(1, None)
    assert not square_2x2.face(1).has_hint

    with pytest.raises(GridStructureError):
        square_2x2.set_hint(1, 5)


def test_copy_is_independent(square_2x2):
    copy = square_2x2.copy()
    copy.edges[0].state = EdgeState.MARKED

    assert square_2x2.edges[0].state == EdgeState.NORMAL
    assert copy.edges_sharing_vertex(0) == square_2x2.edges_sharing_vertex(0)


def test_copy_detaches_on_structural_change(square_2x2):
    copy = square_2x2.copy()
    new_vertex = copy.add_vertex((5, 5))
    copy.create_edge(0, new_vertex)

    assert len(copy.edges) == 13
    assert len(square_2x2.edges) == 12
    assert square_2x2.edges_sharing_vertex(0) == (0, 3)
    assert copy.edges_sharing_vertex(0) == (0, 3, 12)


def test_state_vector_and_counts(square_2x2):
    square_2x2.edges[1].state = EdgeState.MARKED
    square_2x2.edges[2].state = EdgeState.DISABLED

    states = square_2x2.state_vector()
    assert states.dtype == np.int8
    assert states.tolist()[:4] == [0, 1, 2, 0]
    assert square_2x2.count_edges(0, EdgeState.MARKED) == 1
    assert square_2x2.vertex_edge_count(4, EdgeState.NORMAL) == 2
    assert square_2x2.edge_ids_with_state(EdgeState.DISABLED) == [2]
    assert not square_2x2.is_fully_determined()


def test_serialization(tmp_path, square_2x2):
    square_2x2.set_hint(0, 2)
    square_2x2.edges[5].state = EdgeState.MARKED

    path = tmp_path / "grid.json"
    square_2x2.save(path)
    loaded = LoopyGrid.load(path)

    assert loaded.faces == square_2x2.faces
    assert loaded.edges[5].state == EdgeState.MARKED
    assert loaded.edges == square_2x2.edges
    assert loaded.faces[0] == Face((0, 1, 2, 3), 2)


def test_from_dict_rejects_duplicate_edges(square_2x2):
    data = square_2x2.to_dict()
    data['edges'].insert(1, {'start': 1, 'end': 0, 'state': 'normal'})

    with pytest.raises(GridStructureError, match="Duplicate edge between vertices 1 and 0"):
        LoopyGrid.from_dict(data)
