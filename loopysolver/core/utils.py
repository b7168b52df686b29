"""
Utility functions for the Loopy solver.
"""

import logging
import os
import time
from functools import wraps
from pathlib import Path
from typing import Optional, Dict, Any

import psutil

from .. import config
from .grid import LoopyGrid, EdgeState
from .graph_utils import marked_fragments, loose_ends


def setup_logger(name: str, log_file: Optional[Path] = None, level: str = config.LOG_LEVEL) -> logging.Logger:
    """
    Set up a logger with console and optional file output.

    Args:
        name: Logger name
        log_file: Optional log file path
        level: Logging level

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper()))

    # Remove existing handlers
    logger.handlers = []

    console_handler = logging.StreamHandler()
    console_handler.setLevel(getattr(logging, level.upper()))

    formatter = logging.Formatter(config.LOG_FORMAT, datefmt=config.LOG_DATE_FORMAT)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(getattr(logging, level.upper()))
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def timer(func):
    """Decorator to time function execution"""
    @wraps(func)
    def wrapper(*args, **kwargs):
        start_time = time.time()
        result = func(*args, **kwargs)
        execution_time = time.time() - start_time

        # Log through the instance logger when there is one
        if args and hasattr(args[0], 'logger'):
            args[0].logger.debug(f"{func.__name__} took {execution_time:.3f} seconds")
        else:
            logging.getLogger(func.__module__).debug(
                f"{func.__name__} took {execution_time:.3f} seconds")

        return result
    return wrapper


def memory_usage() -> float:
    """Get current memory usage in MB"""
    process = psutil.Process(os.getpid())
    return process.memory_info().rss / 1024 / 1024


def calculate_solution_stats(grid: LoopyGrid) -> Dict[str, Any]:
    """Calculate statistics for a (possibly partially) solved grid"""
    marked = grid.edge_ids_with_state(EdgeState.MARKED)
    fragments = marked_fragments(grid)

    stats = {
        'marked_edges': len(marked),
        'disabled_edges': len(grid.edge_ids_with_state(EdgeState.DISABLED)),
        'undetermined_edges': len(grid.edge_ids_with_state(EdgeState.NORMAL)),
        'fragments': len(fragments),
        'loose_ends': len(loose_ends(grid)),
        'satisfied_hints': sum(
            1 for i, face in enumerate(grid.faces)
            if face.hint is not None and grid.count_edges(i, EdgeState.MARKED) == face.hint
        ),
        'total_hints': sum(1 for face in grid.faces if face.hint is not None),
    }

    if grid.edges:
        stats['determined_ratio'] = 1 - stats['undetermined_edges'] / len(grid.edges)
    else:
        stats['determined_ratio'] = 0.0

    return stats
