"""
Validator for Loopy grid structure and loop constraints.
"""

from typing import List

from .grid import LoopyGrid, EdgeState
from .graph_utils import is_loop, marked_fragments, is_closed_fragment


class ValidationResult:
    """Result of grid validation"""

    def __init__(self):
        self.is_valid = True
        self.errors: List[str] = []
        self.warnings: List[str] = []

    def add_error(self, error: str):
        """Add an error message"""
        self.errors.append(error)
        self.is_valid = False

    def add_warning(self, warning: str):
        """Add a warning message"""
        self.warnings.append(warning)

    def __bool__(self):
        return self.is_valid

    def __repr__(self):
        status = "Valid" if self.is_valid else "Invalid"
        return f"ValidationResult({status}, {len(self.errors)} errors, {len(self.warnings)} warnings)"


class GridValidator:
    """Validates Loopy grid structure, partial states and solutions"""

    @staticmethod
    def validate_grid_structure(grid: LoopyGrid) -> ValidationResult:
        """Validate that the grid is well formed"""
        result = ValidationResult()

        if not grid.vertices:
            result.add_error("Grid has no vertices")
        if not grid.edges:
            result.add_error("Grid has no edges")

        vertex_count = len(grid.vertices)
        seen = set()
        for i, edge in enumerate(grid.edges):
            if edge.start > edge.end:
                result.add_error(f"Edge {i} is not in canonical orientation")
            if not (0 <= edge.start < vertex_count and 0 <= edge.end < vertex_count):
                result.add_error(f"Edge {i} references a missing vertex")
            if edge.start == edge.end:
                result.add_error(f"Edge {i} is a self loop")
            if (edge.start, edge.end) in seen:
                result.add_error(f"Duplicate edge between vertices {edge.start} and {edge.end}")
            seen.add((edge.start, edge.end))

        edge_count = len(grid.edges)
        for i, face in enumerate(grid.faces):
            if len(face.edge_ids) < 3:
                result.add_error(f"Face {i} has fewer than 3 edges")
            if any(not 0 <= e < edge_count for e in face.edge_ids):
                result.add_error(f"Face {i} references a missing edge")
            if face.hint is not None and not 0 <= face.hint <= len(face.edge_ids):
                result.add_error(f"Face {i} has invalid hint: {face.hint}")

        if grid.faces and all(face.hint is None for face in grid.faces):
            result.add_warning("Grid has no hints")

        return result

    @staticmethod
    def validate_partial_solution(grid: LoopyGrid) -> ValidationResult:
        """
        Check an intermediate state for contradictions.

        Errors mean no assignment of the remaining normal edges can turn this
        state into a solution.
        """
        result = ValidationResult()

        # Face hints must stay reachable
        for i, face in enumerate(grid.faces):
            if face.hint is None:
                continue
            marked = grid.count_edges(i, EdgeState.MARKED)
            normal = grid.count_edges(i, EdgeState.NORMAL)
            if marked > face.hint:
                result.add_error(f"Face {i} exceeds its hint: {marked} > {face.hint}")
            elif marked + normal < face.hint:
                result.add_error(f"Face {i} can no longer reach its hint: "
                                 f"{marked} + {normal} < {face.hint}")

        # Every vertex ends with zero or two marked edges
        for vertex in range(len(grid.vertices)):
            marked = grid.vertex_edge_count(vertex, EdgeState.MARKED)
            if marked > 2:
                result.add_error(f"Vertex {vertex} has {marked} marked edges")
            elif marked == 1 and grid.vertex_edge_count(vertex, EdgeState.NORMAL) == 0:
                result.add_error(f"Vertex {vertex} is a dead end")

        if not result:
            return result

        # A closed fragment has to be the whole loop
        fragments = marked_fragments(grid)
        closed = [f for f in fragments if is_closed_fragment(grid, f)]
        if closed and len(fragments) > 1:
            result.add_error(f"Closed loop with {len(fragments) - 1} other marked fragment(s)")
        elif closed:
            for i, face in enumerate(grid.faces):
                if face.hint is not None and grid.count_edges(i, EdgeState.MARKED) != face.hint:
                    result.add_error(f"Loop is closed but face {i} does not match its hint")
                    break

        return result

    @staticmethod
    def is_solved(grid: LoopyGrid) -> bool:
        """True if every hint is met exactly and the marked edges form one loop"""
        for i, face in enumerate(grid.faces):
            if face.hint is not None and grid.count_edges(i, EdgeState.MARKED) != face.hint:
                return False
        marked = [grid.edges[e] for e in grid.edge_ids_with_state(EdgeState.MARKED)]
        return is_loop(marked)

    @staticmethod
    def validate_solution(grid: LoopyGrid) -> ValidationResult:
        """Validate if grid holds a complete solution"""
        result = ValidationResult()

        structure_result = GridValidator.validate_grid_structure(grid)
        if not structure_result:
            result.errors.extend(structure_result.errors)
            result.is_valid = False

        for i, face in enumerate(grid.faces):
            if face.hint is None:
                continue
            marked = grid.count_edges(i, EdgeState.MARKED)
            if marked != face.hint:
                result.add_error(f"Face {i} has {marked} marked edges, requires {face.hint}")

        marked_edges = [grid.edges[e] for e in grid.edge_ids_with_state(EdgeState.MARKED)]
        if not marked_edges:
            result.add_error("No edges are marked")
        elif not is_loop(marked_edges):
            result.add_error("Marked edges do not form a single loop")

        if grid.edge_ids_with_state(EdgeState.NORMAL):
            result.add_warning("Some edges are still undetermined")

        return result

    @staticmethod
    def get_grid_statistics(grid: LoopyGrid) -> dict:
        """Get various statistics about the grid"""
        hinted = [face.hint for face in grid.faces if face.hint is not None]
        stats = {
            'num_vertices': len(grid.vertices),
            'num_edges': len(grid.edges),
            'num_faces': len(grid.faces),
            'num_hints': len(hinted),
            'hint_density': len(hinted) / len(grid.faces) if grid.faces else 0,
            'marked_edges': len(grid.edge_ids_with_state(EdgeState.MARKED)),
            'disabled_edges': len(grid.edge_ids_with_state(EdgeState.DISABLED)),
            'normal_edges': len(grid.edge_ids_with_state(EdgeState.NORMAL)),
        }

        hint_dist = {}
        for hint in hinted:
            hint_dist[hint] = hint_dist.get(hint, 0) + 1
        stats['hint_distribution'] = hint_dist

        return stats
