"""
Solvers for Loopy puzzles.
"""

from .base_solver import BaseSolver, SolverConfig, SolverResult, SolverStatus
from .backtracking_solver import BacktrackingSolver
from .metadata import SolverStepMetadata
from .pipeline import StepPipeline
from .steps import SolverStep, STEP_REGISTRY, build_steps

__all__ = [
    # Base classes
    'BaseSolver',
    'SolverConfig',
    'SolverResult',
    'SolverStatus',

    # Search
    'BacktrackingSolver',

    # Deduction
    'SolverStep',
    'SolverStepMetadata',
    'StepPipeline',
    'STEP_REGISTRY',
    'build_steps',
]


# Solver registry for easy access
SOLVER_REGISTRY = {
    'backtracking': BacktrackingSolver,
}


def get_solver(name: str, config: SolverConfig = None) -> BaseSolver:
    """
    Get a solver by name.

    Args:
        name: Solver name (backtracking)
        config: Optional solver configuration

    Returns:
        Solver instance

    Raises:
        ValueError: If solver name is not recognized
    """
    solver_class = SOLVER_REGISTRY.get(name.lower())
    if not solver_class:
        raise ValueError(f"Unknown solver: {name}. Available: {list(SOLVER_REGISTRY.keys())}")

    return solver_class(config)
