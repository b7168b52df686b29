"""
Core data structures and utilities for the Loopy solver.
"""

from .grid import LoopyGrid, Vertex, Edge, EdgeState, Face, EdgeId, FaceId
from .controller import GridController
from .errors import (
    LoopySolverError, GridStructureError, InvalidEdgeError,
    InvalidFaceError, StepMonotonicityError, GuessLimitExceeded
)
from .graph_utils import (
    single_path_edges, is_unique_segment, is_loop,
    marked_fragments, is_closed_fragment, loose_ends
)
from .validator import GridValidator, ValidationResult
from .utils import setup_logger, timer, memory_usage, calculate_solution_stats

__all__ = [
    # Data structures
    'LoopyGrid', 'Vertex', 'Edge', 'EdgeState', 'Face', 'EdgeId', 'FaceId',

    # State changes
    'GridController',

    # Errors
    'LoopySolverError', 'GridStructureError', 'InvalidEdgeError',
    'InvalidFaceError', 'StepMonotonicityError', 'GuessLimitExceeded',

    # Graph traversal
    'single_path_edges', 'is_unique_segment', 'is_loop',
    'marked_fragments', 'is_closed_fragment', 'loose_ends',

    # Validation
    'GridValidator', 'ValidationResult',

    # Utilities
    'setup_logger', 'timer', 'memory_usage', 'calculate_solution_stats'
]
