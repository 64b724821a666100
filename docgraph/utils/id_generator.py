"""
ID generation utilities for docgraph.

Memories get random ids; graph nodes and edges get ids derived from the
document id and their structural position so that re-building a graph for
the same document regenerates identical ids:
- Memories: mem_xxx
- Document node: doc-{document_id}
- Page node: page-{document_id}-{page_number}
- Chunk node: chunk-{document_id}-{page_number}-{chunk_index}
- Image node: image-{document_id}-{image_id}
"""

from uuid import uuid4


def generate_memory_id() -> str:
    """
    Generate unique Memory ID.

    Returns:
        ID in format "mem_xxx" where xxx is 12 hex characters
    """
    return f"mem_{uuid4().hex[:12]}"


def document_node_id(document_id: str) -> str:
    """Node ID of the Document root."""
    return f"doc-{document_id}"


def page_node_id(document_id: str, page_number: int) -> str:
    """Node ID of a Page."""
    return f"page-{document_id}-{page_number}"


def chunk_node_id(document_id: str, page_number: int, chunk_index: int) -> str:
    """
    Node ID of a TextChunk.

    Args:
        document_id: Owning document ID
        page_number: 1-based page the chunk is assigned to
        chunk_index: Zero-based index within that page's chunks

    Returns:
        ID in format "chunk-{document_id}-{page_number}-{chunk_index}"
    """
    return f"chunk-{document_id}-{page_number}-{chunk_index}"


def image_node_id(document_id: str, image_id: str) -> str:
    """Node ID of an Image."""
    return f"image-{document_id}-{image_id}"


def edge_id(kind: str, source: str, target: str) -> str:
    """
    Edge ID derived from its endpoints.

    Args:
        kind: Edge type value (contains, visual_of, references, ...)
        source: Source node ID
        target: Target node ID

    Returns:
        ID in format "edge-{kind}-{source}-{target}"
    """
    return f"edge-{kind}-{source}-{target}"
