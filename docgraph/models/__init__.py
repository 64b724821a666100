"""
Data models for docgraph.

- Graph: GraphNode, GraphEdge, Graph, NodeType, EdgeType, NodeMetadata
- Document input: PageInput, ImageInput, IngestionSummary
- Memory: Memory, UserProfile and metadata conventions
- Retrieval: SearchResult, ProvenanceRecord, EscalationDecision,
  RetrievalResult, QueryContext, QueryAnswer
"""

from docgraph.models.document import ImageInput, IngestionSummary, PageInput
from docgraph.models.graph import EdgeType, Graph, GraphEdge, GraphNode, NodeMetadata, NodeType
from docgraph.models.memory import (
    GRAPH_NODE_MARKER,
    INTERACTION_TYPE,
    NODE_ID_KEY,
    NODE_TYPE_KEY,
    TYPE_KEY,
    Memory,
    UserProfile,
)
from docgraph.models.retrieval import (
    EscalationDecision,
    ProvenanceRecord,
    QueryAnswer,
    QueryContext,
    RetrievalResult,
    SearchResult,
)

__all__ = [
    # Graph models
    "NodeType",
    "EdgeType",
    "NodeMetadata",
    "GraphNode",
    "GraphEdge",
    "Graph",
    # Document input models
    "PageInput",
    "ImageInput",
    "IngestionSummary",
    # Memory models
    "Memory",
    "UserProfile",
    "NODE_TYPE_KEY",
    "GRAPH_NODE_MARKER",
    "NODE_ID_KEY",
    "TYPE_KEY",
    "INTERACTION_TYPE",
    # Retrieval models
    "SearchResult",
    "ProvenanceRecord",
    "EscalationDecision",
    "RetrievalResult",
    "QueryContext",
    "QueryAnswer",
]
