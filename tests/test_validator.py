from loopysolver.core.controller import GridController
from loopysolver.core.grid import LoopyGrid, EdgeState
from loopysolver.core.validator import GridValidator
from loopysolver.generators.square_grid import SquareGridGenerator


PERIMETER_2X2 = [0, 3, 4, 5, 8, 9, 10, 11]


def with_marked(grid, edge_ids):
    controller = GridController(grid)
    controller.set_edges(EdgeState.MARKED, edge_ids)
    return controller.grid


def test_structure_of_generated_grid(square_3x3):
    result = GridValidator.validate_grid_structure(square_3x3)
    assert result
    assert result.warnings == ["Grid has no hints"]


def test_structure_of_empty_grid():
    result = GridValidator.validate_grid_structure(LoopyGrid())
    assert not result
    assert len(result.errors) == 2


def test_partial_state_hint_exceeded():
    grid = with_marked(SquareGridGenerator.from_string("1.|.."), [0, 1])
    result = GridValidator.validate_partial_solution(grid)
    assert not result
    assert "exceeds its hint" in result.errors[0]


def test_partial_state_hint_unreachable():
    grid = SquareGridGenerator.from_string("3.|..")
    controller = GridController(grid)
    controller.set_edges(EdgeState.DISABLED, [0, 1])

    assert not GridValidator.validate_partial_solution(controller.grid)


def test_partial_state_branching_vertex(square_2x2):
    grid = with_marked(square_2x2, [1, 2, 6])
    result = GridValidator.validate_partial_solution(grid)
    assert not result
    assert any("Vertex 4" in error for error in result.errors)


def test_partial_state_dead_end(square_2x2):
    controller = GridController(square_2x2)
    controller.set_edge(EdgeState.MARKED, 0)
    controller.set_edge(EdgeState.DISABLED, 3)

    assert not GridValidator.validate_partial_solution(controller.grid)


def test_partial_state_closed_loop_with_other_fragment(square_2x2):
    grid = with_marked(square_2x2, [0, 1, 2, 3, 10])
    result = GridValidator.validate_partial_solution(grid)
    assert not result
    assert "other marked fragment" in result.errors[0]


def test_partial_state_closed_loop_with_unmet_hint():
    grid = with_marked(SquareGridGenerator.from_string("..|.1"), [0, 1, 2, 3])
    assert not GridValidator.validate_partial_solution(grid)


def test_partial_state_open_line_is_fine(square_2x2):
    grid = with_marked(square_2x2, [0, 1])
    assert GridValidator.validate_partial_solution(grid)


def test_solution_checks():
    grid = with_marked(SquareGridGenerator.from_string("22|22"), PERIMETER_2X2)

    assert GridValidator.is_solved(grid)
    result = GridValidator.validate_solution(grid)
    assert result
    assert result.warnings == ["Some edges are still undetermined"]

    broken = with_marked(SquareGridGenerator.from_string("22|22"), PERIMETER_2X2[:-1])
    assert not GridValidator.is_solved(broken)
    assert not GridValidator.validate_solution(broken)


def test_grid_statistics():
    grid = with_marked(SquareGridGenerator.from_string("3.|.0"), [0])
    stats = GridValidator.get_grid_statistics(grid)

    assert stats['num_faces'] == 4
    assert stats['num_hints'] == 2
    assert stats['hint_density'] == 0.5
    assert stats['marked_edges'] == 1
    assert stats['normal_edges'] == 11
    assert stats['hint_distribution'] == {3: 1, 0: 1}
