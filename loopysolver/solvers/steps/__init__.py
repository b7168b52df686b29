"""
Deduction rules for the step pipeline.
"""

from typing import List, Optional, Sequence

from .base import SolverStep
from .hint_rules import ZeroHintSolverStep, ExactEdgeCountSolverStep
from .vertex_rules import DeadEndRemovalSolverStep, TwoEdgesPerVertexSolverStep
from .corner_entry import CornerEntrySolverStep
from .loop_rules import PrematureLoopSolverStep
from ... import config

__all__ = [
    'SolverStep',
    'ZeroHintSolverStep',
    'ExactEdgeCountSolverStep',
    'DeadEndRemovalSolverStep',
    'TwoEdgesPerVertexSolverStep',
    'CornerEntrySolverStep',
    'PrematureLoopSolverStep',
    'STEP_REGISTRY',
    'build_steps',
]


# Step registry for lookup by name
STEP_REGISTRY = {
    step_class.name: step_class
    for step_class in (
        ZeroHintSolverStep,
        ExactEdgeCountSolverStep,
        DeadEndRemovalSolverStep,
        TwoEdgesPerVertexSolverStep,
        CornerEntrySolverStep,
        PrematureLoopSolverStep,
    )
}


def build_steps(names: Optional[Sequence[str]] = None) -> List[SolverStep]:
    """
    Instantiate solver steps by name.

    Args:
        names: Step names in pipeline order. Defaults to config.DEFAULT_STEPS.

    Returns:
        Step instances

    Raises:
        ValueError: If a step name is unknown
    """
    if names is None:
        names = config.DEFAULT_STEPS

    steps = []
    for name in names:
        step_class = STEP_REGISTRY.get(name.lower())
        if not step_class:
            raise ValueError(f"Unknown solver step: {name}. Available: {list(STEP_REGISTRY.keys())}")
        steps.append(step_class())
    return steps
