"""Document graph construction and traversal."""

from docgraph.core.graph.builder import GraphBuilder, build_graph, coerce_pages, tokenize
from docgraph.core.graph.expander import GraphExpander, expand_graph
from docgraph.core.graph.registry import GraphRegistry

__all__ = [
    "GraphBuilder",
    "build_graph",
    "coerce_pages",
    "tokenize",
    "GraphExpander",
    "expand_graph",
    "GraphRegistry",
]
