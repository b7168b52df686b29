"""
Grid builders for Loopy puzzles.
"""

from .square_grid import SquareGridGenerator

__all__ = [
    'SquareGridGenerator',
]
