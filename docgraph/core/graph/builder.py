"""
Graph construction from a decomposed document.

Builds a typed node/edge graph from pages, text chunks and images:

1. One Document node.
2. One Page node per page, `contains` edge from the Document.
3. Chunks assigned to pages positionally (chunk i goes to the page with
   i % page_count == page_number - 1) as TextChunk nodes, `contains` edge
   from their Page. The assignment does not look at content, so a chunk can
   land on a page it was not extracted from.
4. Image nodes (content = OCR text) with `contains` edges from their Page,
   plus `visual_of` edges to same-page chunks that contain the OCR prefix.
5. `references` edges between TextChunks that share enough long tokens, emitted
   in both directions (ordered pairs, so the edge set may contain cycles).

Step 5 compares every pair of chunks and dominates the cost for large
documents; `GraphConfig.max_reference_chunks` caps the chunks it considers.
"""

from collections.abc import Iterable, Sequence
from itertools import permutations
from typing import Any

from docgraph.config import GraphConfig
from docgraph.models.document import ImageInput, PageInput
from docgraph.models.graph import EdgeType, Graph, GraphEdge, GraphNode, NodeMetadata, NodeType
from docgraph.utils.exceptions import GraphConstructionError
from docgraph.utils.id_generator import (
    chunk_node_id,
    document_node_id,
    edge_id,
    image_node_id,
    page_node_id,
)
from docgraph.utils.logger import get_logger

logger = get_logger(__name__)


def _field(raw: Any, *names: str) -> Any:
    """First present value among `names` on a dict or object."""
    for name in names:
        if isinstance(raw, dict):
            if raw.get(name) is not None:
                return raw[name]
        elif getattr(raw, name, None) is not None:
            return getattr(raw, name)
    return None


def _as_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _coerce_image(raw: Any, page_number: int | None, position: int) -> ImageInput:
    if isinstance(raw, ImageInput):
        return raw
    image_id = _field(raw, "image_id", "imageId")
    ocr_text = _field(raw, "ocr_text", "ocrText")
    return ImageInput(
        image_id=str(image_id) if image_id is not None else f"{page_number}-{position}",
        ocr_text=ocr_text if isinstance(ocr_text, str) else None,
        page_number=_as_int(_field(raw, "page_number", "pageNumber")) or page_number,
    )


def _coerce_page(raw: Any, position: int) -> PageInput:
    """Turn a page record into a PageInput, degrading missing fields to empty content."""
    if isinstance(raw, PageInput):
        return raw.model_copy(deep=True)
    page_number = _as_int(_field(raw, "page_number", "pageNumber")) or position + 1
    text = _field(raw, "text")
    raw_images = _field(raw, "images") or []
    images = [
        _coerce_image(image, page_number, index)
        for index, image in enumerate(raw_images)
        if image is not None
    ]
    return PageInput(
        page_number=page_number,
        text=text if isinstance(text, str) else "",
        images=images,
    )


def coerce_pages(pages: Iterable[Any] | None) -> list[PageInput]:
    """Normalize raw page records (dicts, objects or PageInput) into PageInputs."""
    return [_coerce_page(page, index) for index, page in enumerate(pages or [])]


def tokenize(text: str, min_length: int = 4) -> set[str]:
    """
    Lower-cased whitespace tokens longer than `min_length` characters.

    Args:
        text: Text to tokenize
        min_length: Tokens must be strictly longer than this

    Returns:
        Set of qualifying tokens (punctuation is kept as part of tokens)
    """
    return {token for token in text.lower().split() if len(token) > min_length}


class GraphBuilder:
    """
    Builds a document graph. Pure and synchronous; safe to share.
    """

    def __init__(self, config: GraphConfig | None = None):
        """
        Initialize graph builder.

        Args:
            config: Graph thresholds (defaults if not provided)
        """
        self.config = config or GraphConfig()

    def build(
        self,
        document_id: str,
        pages: Sequence[PageInput | dict[str, Any]],
        chunks: Sequence[str | None],
        images: Iterable[ImageInput | dict[str, Any]] | None = None,
    ) -> Graph:
        """
        Build the graph for one document.

        Args:
            document_id: Document identifier (node ids derive from it)
            pages: Page records `{page_number, text, images}`
            chunks: Flat list of chunk strings for the whole document
            images: Optional flat list of images carrying `page_number`;
                merged into their page unless already listed there

        Returns:
            Graph with nodes in construction order

        Raises:
            GraphConstructionError: If document_id is empty
        """
        if not document_id or not str(document_id).strip():
            raise GraphConstructionError("document_id cannot be empty")

        page_inputs = self._merge_images(
            coerce_pages(pages),
            images,
        )
        chunk_texts = [chunk if isinstance(chunk, str) else "" for chunk in chunks or []]

        nodes: list[GraphNode] = []
        edges: list[GraphEdge] = []

        doc_node = GraphNode(
            id=document_node_id(document_id),
            type=NodeType.DOCUMENT,
            content=f"Document {document_id}",
            metadata=NodeMetadata(document_id=document_id),
        )
        nodes.append(doc_node)

        chunk_nodes: list[GraphNode] = []
        page_count = len(page_inputs)

        for page in page_inputs:
            page_node = GraphNode(
                id=page_node_id(document_id, page.page_number),
                type=NodeType.PAGE,
                content=f"Page {page.page_number}",
                metadata=NodeMetadata(document_id=document_id, page_number=page.page_number),
            )
            nodes.append(page_node)
            edges.append(self._edge(EdgeType.CONTAINS, doc_node.id, page_node.id))

            page_chunks = [
                text
                for index, text in enumerate(chunk_texts)
                if index % page_count == page.page_number - 1
            ]

            page_chunk_nodes = []
            for chunk_index, text in enumerate(page_chunks):
                chunk_node = GraphNode(
                    id=chunk_node_id(document_id, page.page_number, chunk_index),
                    type=NodeType.TEXT_CHUNK,
                    content=text,
                    metadata=NodeMetadata(
                        document_id=document_id,
                        page_number=page.page_number,
                        chunk_index=chunk_index,
                    ),
                )
                nodes.append(chunk_node)
                page_chunk_nodes.append(chunk_node)
                edges.append(self._edge(EdgeType.CONTAINS, page_node.id, chunk_node.id))

            for image in page.images:
                image_node = GraphNode(
                    id=image_node_id(document_id, image.image_id),
                    type=NodeType.IMAGE,
                    content=image.ocr_text or "",
                    metadata=NodeMetadata(
                        document_id=document_id,
                        page_number=page.page_number,
                        image_id=image.image_id,
                    ),
                )
                nodes.append(image_node)
                edges.append(self._edge(EdgeType.CONTAINS, page_node.id, image_node.id))
                edges.extend(self._visual_edges(image_node, page_chunk_nodes))

            chunk_nodes.extend(page_chunk_nodes)

        edges.extend(self._reference_edges(chunk_nodes))

        logger.info(
            f"Built graph for {document_id}: {len(nodes)} nodes, {len(edges)} edges",
            extra={
                "document_id": document_id,
                "pages": page_count,
                "chunks": len(chunk_nodes),
                "nodes": len(nodes),
                "edges": len(edges),
            },
        )
        return Graph(nodes=nodes, edges=edges)

    @staticmethod
    def _edge(
        edge_type: EdgeType, source: str, target: str, weight: float | None = None
    ) -> GraphEdge:
        return GraphEdge(
            id=edge_id(edge_type.value, source, target),
            source=source,
            target=target,
            type=edge_type,
            weight=weight,
        )

    @staticmethod
    def _merge_images(
        pages: list[PageInput],
        images: Iterable[ImageInput | dict[str, Any]] | None,
    ) -> list[PageInput]:
        if not images:
            return pages

        by_number = {page.page_number: page for page in pages}
        for index, raw in enumerate(images):
            if raw is None:
                continue
            image = _coerce_image(raw, None, index)
            page = by_number.get(image.page_number) if image.page_number is not None else None
            if page is None:
                continue
            if all(existing.image_id != image.image_id for existing in page.images):
                page.images.append(image)
        return pages

    def _visual_edges(self, image_node: GraphNode, chunk_nodes: list[GraphNode]) -> list[GraphEdge]:
        """`visual_of` edges from an image to chunks containing its OCR prefix."""
        ocr_text = image_node.content
        if not ocr_text.strip():
            return []

        prefix = ocr_text.lower()[: self.config.visual_prefix_chars]
        return [
            self._edge(EdgeType.VISUAL_OF, image_node.id, chunk.id)
            for chunk in chunk_nodes
            if prefix in chunk.content.lower()
        ]

    def _reference_edges(self, chunk_nodes: list[GraphNode]) -> list[GraphEdge]:
        """`references` edges, one per direction, between chunks sharing enough long tokens."""
        limit = self.config.max_reference_chunks
        candidates = chunk_nodes if limit is None else chunk_nodes[:limit]
        if limit is not None and len(chunk_nodes) > limit:
            logger.warning(
                f"Cross-linking capped at {limit} of {len(chunk_nodes)} chunks",
                extra={"limit": limit, "chunks": len(chunk_nodes)},
            )

        token_sets = [tokenize(node.content, self.config.min_token_length) for node in candidates]

        edges = []
        for (i, first), (j, second) in permutations(enumerate(candidates), 2):
            shared = token_sets[i] & token_sets[j]
            if len(shared) > self.config.min_shared_tokens:
                edges.append(
                    self._edge(EdgeType.REFERENCES, first.id, second.id, weight=float(len(shared)))
                )
        return edges


def build_graph(
    document_id: str,
    pages: Sequence[PageInput | dict[str, Any]],
    chunks: Sequence[str | None],
    images: Iterable[ImageInput | dict[str, Any]] | None = None,
    config: GraphConfig | None = None,
) -> Graph:
    """Build a document graph with a one-off GraphBuilder."""
    return GraphBuilder(config).build(document_id, pages, chunks, images)
