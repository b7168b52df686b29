from loopysolver.core.controller import GridController
from loopysolver.core.grid import LoopyGrid, Edge, EdgeState
from loopysolver.core.graph_utils import (
    single_path_edges, is_unique_segment, is_loop,
    marked_fragments, is_closed_fragment, loose_ends
)


def branching_graph() -> LoopyGrid:
    #  .__.
    #  !__!__.
    #  !
    grid = LoopyGrid()
    for point in [(0, 0), (1, 0), (1, 1), (0, 1), (2, 1), (0, 2)]:
        grid.add_vertex(point)
    grid.create_edge(0, 1)  # 0
    grid.create_edge(1, 2)  # 1
    grid.create_edge(2, 3)  # 2
    grid.create_edge(3, 0)  # 3
    grid.create_edge(2, 4)  # 4
    grid.create_edge(3, 5)  # 5
    return grid


def test_single_path_stops_at_branches():
    grid = branching_graph()

    assert sorted(single_path_edges(grid, 0)) == [0, 1, 3]
    assert single_path_edges(grid, 2) == [2]


def test_single_path_starts_with_the_given_edge():
    grid = branching_graph()
    assert single_path_edges(grid, 1)[0] == 1


def test_single_path_excluding_disabled_edges():
    grid = branching_graph()
    grid.edges[1].state = EdgeState.DISABLED

    assert sorted(single_path_edges(grid, 0, exclude_disabled=True)) == [0, 3]
    assert sorted(single_path_edges(grid, 0, exclude_disabled=False)) == [0, 1, 3]
    assert sorted(single_path_edges(grid, 4, exclude_disabled=True)) == [2, 4]
    assert single_path_edges(grid, 4, exclude_disabled=False) == [4]


def test_single_path_reports_closed_chain_once(square_3x3):
    # •══•  •   •
    # ║  Y
    # •  •XX•   •
    # ║     ║
    # •══•  •═══•
    #    ║      ║
    # •  •══•═══•
    controller = GridController(square_3x3)
    controller.set_all_edges(EdgeState.DISABLED)
    for face_id in (0, 3, 4, 7, 8):
        controller.set_edges_for_face(EdgeState.MARKED, face_id)
    controller.set_edge_for_face(EdgeState.DISABLED, 0, 2)
    controller.set_edge_for_face(EdgeState.DISABLED, 3, 1)
    controller.set_edge_for_face(EdgeState.DISABLED, 4, 2)
    controller.set_edge_for_face(EdgeState.DISABLED, 7, 1)
    grid = controller.grid

    result = single_path_edges(grid, 6)
    assert len(result) == len(set(result))
    assert sorted(result) == [0, 1, 3, 6, 11, 12, 13, 16, 17, 21, 22, 23]


def test_is_unique_segment():
    assert is_unique_segment([Edge(0, 1), Edge(1, 2), Edge(2, 3)])
    assert is_unique_segment([Edge(0, 1), Edge(1, 2), Edge(2, 0)])
    assert not is_unique_segment([])
    assert not is_unique_segment([Edge(0, 1), Edge(2, 3)])
    assert not is_unique_segment([Edge(0, 1), Edge(0, 2), Edge(0, 3)])


def test_is_loop():
    assert is_loop([Edge(0, 1), Edge(1, 2), Edge(2, 0)])
    assert not is_loop([Edge(0, 1), Edge(1, 2)])
    assert not is_loop([Edge(0, 1), Edge(1, 2), Edge(2, 0),
                        Edge(3, 4), Edge(4, 5), Edge(5, 3)])
    assert not is_loop([])


def test_fragments_and_loose_ends(square_2x2):
    controller = GridController(square_2x2)
    controller.set_edges(EdgeState.MARKED, [0, 1, 3, 10])
    grid = controller.grid

    fragments = marked_fragments(grid)
    assert fragments == [{0, 1, 3}, {10}]
    assert not is_closed_fragment(grid, fragments[0])
    assert loose_ends(grid) == [3, 4, 5, 8]

    controller.set_edge(EdgeState.MARKED, 2)
    assert is_closed_fragment(controller.grid, marked_fragments(controller.grid)[0])
