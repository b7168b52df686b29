"""
Builder for square-cell Loopy grids.
"""

from typing import List, Optional, Sequence

import numpy as np

from .. import config
from ..core.grid import LoopyGrid, Vertex, FaceId
from ..core.errors import GridStructureError


class SquareGridGenerator:
    """
    Build a rectangular grid of square faces.

    Vertices are numbered row by row, `(width + 1)` per row. Faces are
    numbered row by row as well, and each face lists its edges as top,
    right, bottom, left. Edges are created in the order faces first touch
    them, so the numbering is stable for a given width and height.
    """

    def __init__(self, width: int, height: int,
                 hints: Optional[Sequence[Sequence[Optional[int]]]] = None):
        if width <= 0 or height <= 0:
            raise GridStructureError(f"Invalid grid dimensions {width}x{height}")

        self.width = width
        self.height = height
        self._hints: List[Optional[int]] = [None] * (width * height)

        if hints is not None:
            self.load_hints(hints)

    def face_index(self, x: int, y: int) -> FaceId:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise GridStructureError(f"Cell ({x}, {y}) is outside a {self.width}x{self.height} grid")
        return FaceId(y * self.width + x)

    def set_hint(self, x: int, y: int, hint: Optional[int]):
        if hint is not None and not 0 <= hint <= 4:
            raise GridStructureError(f"Invalid hint {hint} for square cell ({x}, {y})")
        self._hints[self.face_index(x, y)] = hint

    def hint(self, x: int, y: int) -> Optional[int]:
        return self._hints[self.face_index(x, y)]

    def load_hints(self, hints: Sequence[Sequence[Optional[int]]]):
        """Set hints from rows of values; None leaves a cell without a hint"""
        if len(hints) != self.height:
            raise GridStructureError(f"Expected {self.height} hint rows, got {len(hints)}")
        for y, row in enumerate(hints):
            if len(row) != self.width:
                raise GridStructureError(f"Hint row {y} has {len(row)} cells, expected {self.width}")
            for x, hint in enumerate(row):
                self.set_hint(x, y, hint)

    def generate(self) -> LoopyGrid:
        """Create the grid"""
        grid = LoopyGrid()

        for y in range(self.height + 1):
            for x in range(self.width + 1):
                grid.add_vertex(Vertex(x, y))

        row = self.width + 1
        for y in range(self.height):
            for x in range(self.width):
                top_left = y * row + x
                top_right = top_left + 1
                bottom_right = top_left + row + 1
                bottom_left = top_left + row

                grid.create_face([top_left, top_right, bottom_right, bottom_left],
                                 hint=self._hints[y * self.width + x])

        return grid

    @classmethod
    def from_hint_matrix(cls, matrix) -> LoopyGrid:
        """
        Create a grid from a 2D hint matrix.

        Args:
            matrix: Array-like of shape (height, width); negative values
                (config.NO_HINT) mark cells without a hint

        Returns:
            Generated grid
        """
        matrix = np.asarray(matrix, dtype=int)
        if matrix.ndim != 2:
            raise GridStructureError(f"Hint matrix must be 2D, got shape {matrix.shape}")

        height, width = matrix.shape
        hints = [[int(value) if value >= 0 else None for value in row] for row in matrix]
        return cls(width, height, hints).generate()

    @staticmethod
    def to_hint_matrix(grid: LoopyGrid, width: int, height: int) -> np.ndarray:
        """Hints of a square grid as a (height, width) matrix"""
        if len(grid.faces) != width * height:
            raise GridStructureError(
                f"Grid has {len(grid.faces)} faces, expected {width * height}")

        matrix = np.full((height, width), config.NO_HINT, dtype=int)
        for face_id, face in enumerate(grid.faces):
            if face.hint is not None:
                matrix[face_id // width, face_id % width] = face.hint
        return matrix

    @classmethod
    def from_string(cls, text: str) -> LoopyGrid:
        """
        Create a grid from rows of text.

        Digits 0-4 are hints; '.' or a space is a cell without a hint. Rows
        are separated by newlines or '|'.
        """
        rows = [line for line in text.replace('|', '\n').split('\n') if line.strip()]
        if not rows:
            raise GridStructureError("Empty hint string")

        width = max(len(line) for line in rows)
        hints = []
        for line in rows:
            row = []
            for char in line.ljust(width):
                if char in '01234':
                    row.append(int(char))
                elif char in '. ':
                    row.append(None)
                else:
                    raise GridStructureError(f"Cannot parse hint character '{char}'")
            hints.append(row)

        return cls(width, len(hints), hints).generate()
