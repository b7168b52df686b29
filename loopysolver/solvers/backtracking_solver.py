"""
Backtracking solver for Loopy puzzles.

Deduction rules run to a fixpoint; when they get stuck the solver guesses
the state of one undetermined edge and searches both branches depth first.
"""

from typing import Optional, Sequence, Dict, Any

from ..core.grid import LoopyGrid, EdgeState, EdgeId
from ..core.controller import GridController
from ..core.validator import GridValidator
from ..core.utils import calculate_solution_stats
from .base_solver import BaseSolver, SolverConfig, SolverResult, SolverStatus
from .pipeline import StepPipeline
from .steps import SolverStep, build_steps


class BacktrackingSolver(BaseSolver):
    """
    Depth-first search over grid copies.

    Each node of the search:
    1. Runs the step pipeline to a fixpoint
    2. Abandons the branch if the validator finds a contradiction
    3. Accepts the grid if every hint is met and the marked edges form one loop
    4. Otherwise picks the first normal edge and tries it marked, then disabled

    Every branch assignment counts as one guess, and the order is fixed, so a
    given puzzle always takes the same number of guesses.
    """

    # Branch order for a guessed edge
    GUESS_ORDER = (EdgeState.MARKED, EdgeState.DISABLED)

    def __init__(self, config: Optional[SolverConfig] = None,
                 steps: Optional[Sequence[SolverStep]] = None):
        super().__init__(config)
        if steps is None:
            steps = build_steps(self.config.steps)
        self.pipeline = StepPipeline(steps, logger=self.logger)

        self.max_depth = 0

    def _solve(self, grid: LoopyGrid) -> SolverResult:
        self.pipeline.reset_stats()
        self.max_depth = 0

        root = self.pipeline.run(grid)
        self.logger.debug(f"Initial propagation: {calculate_solution_stats(root)}")

        solution = self._search(root, depth=0, propagated=True)

        stats = self._collect_stats()
        if solution is None:
            return SolverResult(
                success=False,
                solution=root,
                status=SolverStatus.NO_SOLUTION,
                message="Puzzle has no solution",
                stats=stats
            )

        return SolverResult(
            success=True,
            solution=solution,
            status=SolverStatus.SOLVED,
            message="Solved",
            stats=stats
        )

    def _search(self, grid: LoopyGrid, depth: int, propagated: bool = False) -> Optional[LoopyGrid]:
        """
        Search for a solution below `grid`.

        Returns:
            Solved grid, or None if this branch holds no solution
        """
        self.max_depth = max(self.max_depth, depth)

        if not propagated:
            grid = self.pipeline.run(grid)

        validation = GridValidator.validate_partial_solution(grid)
        if not validation:
            self.logger.debug(f"Depth {depth}: contradiction ({validation.errors[0]})")
            return None

        if GridValidator.is_solved(grid):
            return self._finalize(grid)

        edge_id = self._select_edge(grid)
        if edge_id is None:
            # Fully determined but not a single loop
            return None

        for state in self.GUESS_ORDER:
            self._increment_guesses()
            self.logger.debug(f"Depth {depth}: guessing edge {edge_id} is {state.name.lower()}")

            controller = GridController(grid)
            controller.set_edge(state, edge_id)
            self._call_progress_callbacks(controller.grid, {'depth': depth, 'edge': edge_id})

            solution = self._search(controller.grid, depth + 1)
            if solution is not None:
                return solution

        return None

    @staticmethod
    def _select_edge(grid: LoopyGrid) -> Optional[EdgeId]:
        """First undetermined edge by index"""
        for i, edge in enumerate(grid.edges):
            if edge.state == EdgeState.NORMAL:
                return EdgeId(i)
        return None

    @staticmethod
    def _finalize(grid: LoopyGrid) -> LoopyGrid:
        """Disable whatever is still undetermined in a solved grid"""
        controller = GridController(grid)
        controller.set_edges(EdgeState.DISABLED, grid.edge_ids_with_state(EdgeState.NORMAL))
        return controller.grid

    def _collect_stats(self) -> Dict[str, Any]:
        return {
            'pipeline_runs': self.pipeline.runs,
            'passes': self.pipeline.passes,
            'rules_used': dict(self.pipeline.rules_used),
            'max_depth': self.max_depth,
        }
