"""
Base class for deduction rules run by the step pipeline.
"""

from abc import ABC, abstractmethod
from typing import Iterable, List

from ...core.grid import LoopyGrid, EdgeState, EdgeId
from ..metadata import SolverStepMetadata


class SolverStep(ABC):
    """
    A single deduction rule.

    A step takes a grid and returns a new grid with whatever it could deduce
    from local structure (the edges around a vertex, the boundary and hint of
    a face). Steps never mutate their input, never turn a marked or disabled
    edge back to normal, and change nothing when applied to their own output
    without other changes in between.
    """

    #: Registry key, also used in logs and statistics
    name: str = "step"

    @abstractmethod
    def apply(self, grid: LoopyGrid, metadata: SolverStepMetadata) -> LoopyGrid:
        """Return the grid produced by applying this rule to `grid`"""
        pass

    @staticmethod
    def normal_edges(grid: LoopyGrid, edge_ids: Iterable[int]) -> List[EdgeId]:
        return [EdgeId(e) for e in edge_ids if grid.edges[e].state == EdgeState.NORMAL]

    @staticmethod
    def marked_edges(grid: LoopyGrid, edge_ids: Iterable[int]) -> List[EdgeId]:
        return [EdgeId(e) for e in edge_ids if grid.edges[e].state == EdgeState.MARKED]

    def __repr__(self):
        return f"{self.__class__.__name__}()"
