"""
Exception types raised by the Loopy solver core.

Puzzle contradictions are not exceptions: they are reported through
ValidationResult and SolverResult. Everything here signals malformed input
or a bug in a deduction rule.
"""

from typing import Optional


class LoopySolverError(Exception):
    """Base class for solver errors"""


class GridStructureError(LoopySolverError, ValueError):
    """Raised when a grid is built from invalid vertices, edges or faces"""


class InvalidEdgeError(LoopySolverError, IndexError):
    """Raised when an edge index does not exist in the grid"""

    def __init__(self, edge_index: int, edge_count: int):
        super().__init__(f"Edge index {edge_index} out of range (grid has {edge_count} edges)")
        self.edge_index = edge_index
        self.edge_count = edge_count


class InvalidFaceError(LoopySolverError, IndexError):
    """Raised when a face index (or a face-local edge index) does not exist"""

    def __init__(self, face_index: int, face_count: int, local_index: Optional[int] = None):
        if local_index is None:
            message = f"Face index {face_index} out of range (grid has {face_count} faces)"
        else:
            message = f"Face {face_index} has no local edge {local_index}"
        super().__init__(message)
        self.face_index = face_index
        self.face_count = face_count
        self.local_index = local_index


class StepMonotonicityError(LoopySolverError, RuntimeError):
    """
    Raised when a solver step turns a decided edge back to normal or flips it
    between marked and disabled.
    """

    def __init__(self, step_name: str, edge_ids):
        edge_ids = list(edge_ids)
        super().__init__(f"Step '{step_name}' reverted decided edges: {edge_ids}")
        self.step_name = step_name
        self.edge_ids = edge_ids


class GuessLimitExceeded(LoopySolverError, RuntimeError):
    """Raised inside a solver when the configured guess limit is exceeded"""

    def __init__(self, max_guesses: int):
        super().__init__(f"Maximum guesses ({max_guesses}) exceeded")
        self.max_guesses = max_guesses
