"""
Bounded breadth-first expansion over a document graph.

Edges are stored directed but walked in both directions. The first depth at
which a node is reached is final (visited-set semantics). Nodes reached at
`max_depth` are returned but not expanded.
"""

from collections import deque
from collections.abc import Iterable

from docgraph.models.graph import EdgeType, Graph, GraphNode
from docgraph.utils.exceptions import ValidationError


class GraphExpander:
    """
    Expands seed nodes through graph relations.

    Adjacency is indexed once per graph in edge order, so repeated
    expansions over the same graph are deterministic.
    """

    def __init__(self, edge_types: Iterable[EdgeType] | None = None):
        """
        Initialize expander.

        Args:
            edge_types: Edge kinds to walk (all kinds if None)
        """
        self.edge_types = frozenset(edge_types) if edge_types is not None else None

    def _adjacency(self, graph: Graph) -> dict[str, list[str]]:
        adjacency: dict[str, list[str]] = {}
        for edge in graph.edges:
            if self.edge_types is not None and edge.type not in self.edge_types:
                continue
            adjacency.setdefault(edge.source, []).append(edge.target)
            adjacency.setdefault(edge.target, []).append(edge.source)
        return adjacency

    def expand(
        self, seed_node_ids: Iterable[str], graph: Graph, max_depth: int = 2
    ) -> list[GraphNode]:
        """
        Collect nodes within `max_depth` hops of the seeds.

        Args:
            seed_node_ids: Starting node ids (depth 0)
            graph: Graph to walk (read-only)
            max_depth: Maximum hop count from any seed

        Returns:
            Graph nodes in discovery order; seeds absent from the graph are skipped

        Raises:
            ValidationError: If max_depth is negative
        """
        if max_depth < 0:
            raise ValidationError("max_depth cannot be negative")

        adjacency = self._adjacency(graph)

        visited: dict[str, None] = {}
        queue: deque[tuple[str, int]] = deque()
        for seed in seed_node_ids:
            if seed not in visited:
                visited[seed] = None
                queue.append((seed, 0))

        while queue:
            node_id, depth = queue.popleft()
            if depth >= max_depth:
                continue
            for neighbor in adjacency.get(node_id, ()):
                if neighbor not in visited:
                    visited[neighbor] = None
                    queue.append((neighbor, depth + 1))

        nodes_by_id = {node.id: node for node in graph.nodes}
        return [nodes_by_id[node_id] for node_id in visited if node_id in nodes_by_id]


def expand_graph(seed_node_ids: Iterable[str], graph: Graph, max_depth: int = 2) -> list[GraphNode]:
    """Expand over all edge kinds with a one-off GraphExpander."""
    return GraphExpander().expand(seed_node_ids, graph, max_depth)
