import pytest

from loopysolver.core.grid import LoopyGrid
from loopysolver.generators.square_grid import SquareGridGenerator


# 2x2 square grid edge ids:
#
#   0 ──e0── 1 ──e4── 2
#   │        │        │
#   e3  f0   e1  f1   e5
#   │        │        │
#   3 ──e2── 4 ──e6── 5
#   │        │        │
#   e9  f2   e7  f3   e10
#   │        │        │
#   6 ──e8── 7 ──e11─ 8
@pytest.fixture
def square_2x2() -> LoopyGrid:
    return SquareGridGenerator(2, 2).generate()


@pytest.fixture
def square_3x3() -> LoopyGrid:
    return SquareGridGenerator(3, 3).generate()
