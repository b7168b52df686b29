"""
Runs solver steps repeatedly until the grid stops changing.
"""

import logging
from collections import defaultdict
from typing import Dict, List, Optional, Sequence

import numpy as np

from ..core.grid import LoopyGrid, EdgeState
from ..core.errors import StepMonotonicityError
from ..core.utils import timer
from .metadata import SolverStepMetadata
from .steps import SolverStep, build_steps


class StepPipeline:
    """
    Applies an ordered list of solver steps to a fixpoint.

    One pass runs every step once, each on the grid produced by the step
    before it. Passes repeat until a whole pass leaves every edge state as it
    was. Since steps only ever move edges away from normal, the number of
    passes that change something is bounded by the number of edges.
    """

    def __init__(self, steps: Optional[Sequence[SolverStep]] = None,
                 logger: Optional[logging.Logger] = None):
        self.steps: List[SolverStep] = list(steps) if steps is not None else build_steps()
        self.logger = logger or logging.getLogger(__name__)

        # Statistics, accumulated over runs until reset_stats()
        self.runs = 0
        self.passes = 0
        self.rules_used: Dict[str, int] = defaultdict(int)

    def add_step(self, step: SolverStep):
        self.steps.append(step)

    def reset_stats(self):
        self.runs = 0
        self.passes = 0
        self.rules_used = defaultdict(int)

    @timer
    def run(self, grid: LoopyGrid) -> LoopyGrid:
        """
        Run all steps until no step changes the grid.

        Every run starts with fresh metadata for each step.

        Returns:
            Grid at the fixpoint; `grid` itself is not modified

        Raises:
            StepMonotonicityError: If a step reverts a decided edge
        """
        metadata = [SolverStepMetadata() for _ in self.steps]
        self.runs += 1

        current = grid
        states = current.state_vector()
        passes = 0

        while True:
            pass_start = states
            passes += 1

            for step, step_metadata in zip(self.steps, metadata):
                result = step.apply(current, step_metadata)
                new_states = result.state_vector()
                self._record_changes(step, states, new_states)
                current, states = result, new_states

            if np.array_equal(pass_start, states):
                break

        self.passes += passes
        self.logger.debug(f"Fixpoint reached after {passes} pass(es)")
        return current

    def _record_changes(self, step: SolverStep, before: np.ndarray, after: np.ndarray):
        changed = before != after
        if not changed.any():
            return

        reverted = changed & (before != EdgeState.NORMAL)
        if reverted.any():
            raise StepMonotonicityError(step.name, np.flatnonzero(reverted).tolist())

        self.rules_used[step.name] += int(changed.sum())
