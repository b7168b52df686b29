import numpy as np
import pytest

from loopysolver.core.errors import GridStructureError
from loopysolver.generators.square_grid import SquareGridGenerator


def test_generated_numbering():
    grid = SquareGridGenerator(3, 3).generate()

    assert len(grid.vertices) == 16
    assert len(grid.edges) == 24
    assert grid.vertices[5] == (1, 1)
    # Top, right, bottom, left
    assert grid.edges_for_face(4) == (6, 13, 14, 10)
    assert grid.edges_for_face(8) == (16, 22, 23, 20)


def test_hints_by_cell():
    generator = SquareGridGenerator(3, 2)
    generator.set_hint(2, 1, 3)

    assert generator.hint(2, 1) == 3
    assert generator.face_index(2, 1) == 5
    assert generator.generate().hint(5) == 3

    with pytest.raises(GridStructureError):
        generator.set_hint(3, 0, 1)
    with pytest.raises(GridStructureError):
        generator.set_hint(0, 0, 5)


def test_invalid_dimensions():
    with pytest.raises(GridStructureError):
        SquareGridGenerator(0, 3)
    with pytest.raises(GridStructureError):
        SquareGridGenerator(2, 2, hints=[[1, 2]])


def test_from_string():
    grid = SquareGridGenerator.from_string("3.2\n.1.\n2 3")

    assert len(grid.faces) == 9
    assert [face.hint for face in grid.faces] == [3, None, 2, None, 1, None, 2, None, 3]
    assert SquareGridGenerator.from_string("3.2|.1.|2 3").faces == grid.faces

    with pytest.raises(GridStructureError):
        SquareGridGenerator.from_string("3x|..")
    with pytest.raises(GridStructureError):
        SquareGridGenerator.from_string("")


def test_hint_matrix_conversion():
    matrix = np.array([[3, -1, 2],
                       [-1, 0, -1]])
    grid = SquareGridGenerator.from_hint_matrix(matrix)

    assert len(grid.faces) == 6
    assert grid.hint(0) == 3
    assert grid.hint(1) is None
    assert grid.hint(4) == 0
    assert np.array_equal(SquareGridGenerator.to_hint_matrix(grid, 3, 2), matrix)

    with pytest.raises(GridStructureError):
        SquareGridGenerator.to_hint_matrix(grid, 2, 2)
    with pytest.raises(GridStructureError):
        SquareGridGenerator.from_hint_matrix(np.array([1, 2, 3]))
