"""
Knowledge graph models.

A document is decomposed into a typed graph:
- Document -> Page -> {TextChunk, Image} via `contains` edges (a forest)
- Image -> TextChunk via `visual_of` edges (OCR text appears in the chunk)
- TextChunk -> TextChunk via `references` edges (shared vocabulary)
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class NodeType(str, Enum):
    """Types of nodes in the document graph."""

    DOCUMENT = "Document"
    PAGE = "Page"
    SECTION = "Section"
    TEXT_CHUNK = "TextChunk"
    IMAGE = "Image"
    ENTITY = "Entity"


class EdgeType(str, Enum):
    """Types of edges in the document graph."""

    CONTAINS = "contains"
    MENTIONS = "mentions"
    VISUAL_OF = "visual_of"
    REFERENCES = "references"


_METADATA_FIELDS = ("document_id", "page_number", "chunk_index", "image_id")


class NodeMetadata(BaseModel):
    """
    Typed node metadata.

    Structural fields are optional so the same struct serves every node type;
    anything open-ended goes to `extra`.
    """

    document_id: str | None = None
    page_number: int | None = None
    chunk_index: int | None = None
    image_id: str | None = None
    extra: dict[str, Any] = Field(default_factory=dict)

    def to_payload(self) -> dict[str, Any]:
        """
        Flatten to a plain dict for storage alongside a memory.

        Returns:
            Dict with set structural fields and the extra annotations merged in
        """
        payload = dict(self.extra)
        for name in _METADATA_FIELDS:
            value = getattr(self, name)
            if value is not None:
                payload[name] = value
        return payload

    @classmethod
    def from_payload(cls, payload: dict[str, Any] | None) -> "NodeMetadata":
        """
        Rebuild typed metadata from a stored payload.

        Unknown keys are kept in `extra`. Values that do not fit a structural
        field's type are kept in `extra` as well rather than failing.

        Args:
            payload: Flat metadata dict (may be None)

        Returns:
            NodeMetadata instance
        """
        payload = dict(payload or {})
        fields: dict[str, Any] = {}

        document_id = payload.pop("document_id", None)
        if document_id is not None:
            fields["document_id"] = str(document_id)

        for name in ("page_number", "chunk_index"):
            value = payload.get(name)
            if isinstance(value, int) and not isinstance(value, bool):
                fields[name] = payload.pop(name)

        image_id = payload.pop("image_id", None)
        if image_id is not None:
            fields["image_id"] = str(image_id)

        return cls(**fields, extra=payload)


class GraphNode(BaseModel):
    """A unit in the document graph (also the shape of a retrieved context unit)."""

    id: str
    type: NodeType
    content: str = ""
    metadata: NodeMetadata = Field(default_factory=NodeMetadata)
    embedding: list[float] | None = None


class GraphEdge(BaseModel):
    """Directed edge between two graph nodes."""

    id: str
    source: str
    target: str
    type: EdgeType
    weight: float | None = None


class Graph(BaseModel):
    """Nodes and edges produced for one document."""

    nodes: list[GraphNode] = Field(default_factory=list)
    edges: list[GraphEdge] = Field(default_factory=list)

    def get_node(self, node_id: str) -> GraphNode | None:
        """Return the node with this id, or None."""
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def nodes_of_type(self, node_type: NodeType) -> list[GraphNode]:
        return [node for node in self.nodes if node.type == node_type]

    def edges_of_type(self, edge_type: EdgeType) -> list[GraphEdge]:
        return [edge for edge in self.edges if edge.type == edge_type]
