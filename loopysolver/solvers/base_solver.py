"""
Base solver class for Loopy puzzles.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, fields
from enum import Enum
from pathlib import Path
from typing import Optional, Dict, Any, List, Callable, Union
import time

import yaml

from .. import config
from ..core.grid import LoopyGrid
from ..core.errors import GuessLimitExceeded
from ..core.validator import GridValidator
from ..core.utils import setup_logger, memory_usage


class SolverStatus(Enum):
    """Outcome of a solve"""
    SOLVED = "solved"
    NO_SOLUTION = "no_solution"
    INVALID_GRID = "invalid_grid"
    GUESS_LIMIT = "guess_limit"


@dataclass
class SolverConfig:
    """Configuration for puzzle solvers"""
    verbose: bool = False
    log_file: Optional[Path] = None
    max_guesses: Optional[int] = None  # None searches exhaustively
    steps: List[str] = field(default_factory=lambda: list(config.DEFAULT_STEPS))

    # Algorithm-specific parameters
    extra_params: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SolverConfig':
        """Create config from a dictionary; unknown keys go to extra_params"""
        known = {f.name for f in fields(cls)}
        kwargs = {key: value for key, value in data.items() if key in known}
        extra = {key: value for key, value in data.items() if key not in known}

        if kwargs.get('log_file'):
            kwargs['log_file'] = Path(kwargs['log_file'])
        if extra:
            kwargs['extra_params'] = {**kwargs.get('extra_params', {}), **extra}

        return cls(**kwargs)

    @classmethod
    def from_yaml(cls, filepath: Union[str, Path]) -> 'SolverConfig':
        """
        Load config from a YAML file.

        The settings may sit at the top level or under a `solver` key.
        """
        with open(filepath, 'r') as f:
            data = yaml.safe_load(f) or {}

        if 'solver' in data and isinstance(data['solver'], dict):
            data = data['solver']

        return cls.from_dict(data)


@dataclass
class SolverResult:
    """Result from puzzle solver"""
    success: bool
    solution: Optional[LoopyGrid] = None
    status: SolverStatus = SolverStatus.NO_SOLUTION
    solve_time: float = 0.0
    guesses: int = 0
    memory_used: float = 0.0  # MB
    message: str = ""
    stats: Dict[str, Any] = field(default_factory=dict)

    def __repr__(self):
        return (f"SolverResult({self.status.value}, time={self.solve_time:.2f}s, "
                f"guesses={self.guesses})")


class BaseSolver(ABC):
    """Abstract base class for Loopy solvers"""

    def __init__(self, config: Optional[SolverConfig] = None):
        """Initialize solver with configuration."""
        self.config = config or SolverConfig()
        self.logger = setup_logger(
            self.__class__.__name__,
            self.config.log_file,
            "DEBUG" if self.config.verbose else "INFO"
        )

        # Callbacks for monitoring progress
        self._progress_callbacks: List[Callable] = []

        self._start_time: Optional[float] = None
        self.total_guesses: int = 0

    def add_progress_callback(self, callback: Callable):
        """
        Add a callback to monitor solving progress.

        Callbacks are called as callback(total_guesses, grid, stats).
        """
        self._progress_callbacks.append(callback)

    def solve(self, grid: LoopyGrid) -> SolverResult:
        """Solve the puzzle."""
        self.logger.info(f"Starting {self.__class__.__name__} solver")
        self.logger.info(f"Grid: {grid}")

        validation = GridValidator.validate_grid_structure(grid)
        if not validation:
            self.logger.warning(f"Invalid grid: {'; '.join(validation.errors)}")
            return SolverResult(
                success=False,
                status=SolverStatus.INVALID_GRID,
                message=f"Invalid grid: {'; '.join(validation.errors)}"
            )

        self._start_time = time.time()
        self.total_guesses = 0
        initial_memory = memory_usage()

        try:
            result = self._solve(grid)
        except GuessLimitExceeded as e:
            result = SolverResult(
                success=False,
                solution=grid,
                status=SolverStatus.GUESS_LIMIT,
                message=str(e)
            )
        except Exception as e:
            self.logger.error(f"Error during solving: {str(e)}", exc_info=True)
            raise

        # A reported solution has to hold up
        if result.success and result.solution:
            validation = GridValidator.validate_solution(result.solution)
            if not validation:
                result.success = False
                result.status = SolverStatus.NO_SOLUTION
                result.message = f"Invalid solution: {'; '.join(validation.errors)}"

        result.solve_time = time.time() - self._start_time
        result.memory_used = memory_usage() - initial_memory
        result.guesses = self.total_guesses

        if result.success:
            self.logger.info(f"Solved in {result.solve_time:.2f}s with {result.guesses} guesses")
        else:
            self.logger.warning(f"Failed to solve: {result.message}")

        return result

    @abstractmethod
    def _solve(self, grid: LoopyGrid) -> SolverResult:
        """Implement the specific solving algorithm."""
        pass

    def _increment_guesses(self):
        """Count a guess and check the configured limit"""
        self.total_guesses += 1

        if self.config.max_guesses is not None and self.total_guesses > self.config.max_guesses:
            raise GuessLimitExceeded(self.config.max_guesses)

    def _call_progress_callbacks(self, grid: Optional[LoopyGrid] = None,
                                 stats: Optional[Dict[str, Any]] = None):
        """Call all registered progress callbacks"""
        for callback in self._progress_callbacks:
            try:
                callback(self.total_guesses, grid, stats or {})
            except Exception as e:
                self.logger.error(f"Error in progress callback: {e}")
