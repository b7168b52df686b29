"""
Graph traversal helpers used by the deduction rules and the validator.
"""

from typing import Dict, Iterable, List, Set

import networkx as nx

from .grid import LoopyGrid, Edge, EdgeId, EdgeState


def single_path_edges(grid: LoopyGrid, from_edge: int,
                      exclude_disabled: bool = True) -> List[EdgeId]:
    """
    Find the non-branching path of edges running through an edge.

    Starting at `from_edge`, the path is walked in both directions. From each
    vertex reached, the walk continues only if exactly one other eligible
    edge touches that vertex; it stops at a branch or a dead end.

    Args:
        grid: Grid to walk
        from_edge: Id of the edge to start from
        exclude_disabled: When True, disabled edges are not eligible

    Returns:
        Ids of the edges on the path, starting with `from_edge`. Each edge
        appears once, even when the path closes on itself.
    """
    def eligible(edge_id: int) -> bool:
        return not exclude_disabled or grid.edges[edge_id].is_enabled

    path = [EdgeId(from_edge)]
    visited = {from_edge}
    start = grid.edge(from_edge)

    for pivot in (start.start, start.end):
        current = from_edge
        while True:
            candidates = [e for e in grid.edges_sharing_vertex(pivot)
                          if e != current and eligible(e)]
            if len(candidates) != 1:
                break

            following = candidates[0]
            # Closed chain: the other walk already covered the rest
            if following in visited:
                break

            visited.add(following)
            path.append(following)
            pivot = grid.edges[following].other_vertex(pivot)
            current = following

    return path


def _edge_graph(edges: Iterable[Edge]) -> nx.Graph:
    graph = nx.Graph()
    graph.add_edges_from((edge.start, edge.end) for edge in edges)
    return graph


def is_unique_segment(edges: Iterable[Edge]) -> bool:
    """
    True if the edges chain into a single run without branches.

    A closed ring counts as a segment; an empty sequence does not.
    """
    graph = _edge_graph(edges)
    if graph.number_of_edges() == 0:
        return False
    if not nx.is_connected(graph):
        return False
    return all(degree <= 2 for _, degree in graph.degree())


def is_loop(edges: Iterable[Edge]) -> bool:
    """True if the edges form one closed chain of at least 3 edges"""
    graph = _edge_graph(edges)
    if graph.number_of_edges() < 3:
        return False
    if not nx.is_connected(graph):
        return False
    return all(degree == 2 for _, degree in graph.degree())


def marked_fragments(grid: LoopyGrid) -> List[Set[EdgeId]]:
    """
    Group the marked edges into connected fragments.

    Returns:
        One set of edge ids per fragment, ordered by smallest edge id
    """
    graph = nx.Graph()
    for i, edge in enumerate(grid.edges):
        if edge.state == EdgeState.MARKED:
            graph.add_edge(edge.start, edge.end, id=EdgeId(i))

    fragments = []
    for component in nx.connected_components(graph):
        subgraph = graph.subgraph(component)
        fragments.append({data['id'] for _, _, data in subgraph.edges(data=True)})

    fragments.sort(key=min)
    return fragments


def is_closed_fragment(grid: LoopyGrid, fragment: Iterable[int]) -> bool:
    return is_loop(grid.edges[e] for e in fragment)


def loose_ends(grid: LoopyGrid) -> List[int]:
    """Vertices with exactly one marked edge"""
    counts: Dict[int, int] = {}
    for edge in grid.edges:
        if edge.state == EdgeState.MARKED:
            counts[edge.start] = counts.get(edge.start, 0) + 1
            counts[edge.end] = counts.get(edge.end, 0) + 1
    return sorted(v for v, count in counts.items() if count == 1)
