"""
Document ingestion: pages and chunks in, embedded graph memories out.

Pipeline:
pages (+ optional chunks/images) → chunk page text if needed → build graph
→ embed node contents concurrently → store as graph memories → register graph
"""

import time
from collections.abc import Iterable, Sequence
from typing import Any

from docgraph.config import Config
from docgraph.core.chunking.chunker import chunk_text
from docgraph.core.embeddings.base import Embedder
from docgraph.core.graph.builder import GraphBuilder, coerce_pages
from docgraph.core.graph.registry import GraphRegistry
from docgraph.core.memory_store.base import MemoryStore
from docgraph.models.document import ImageInput, IngestionSummary, PageInput
from docgraph.models.graph import Graph, GraphNode, NodeType
from docgraph.utils.exceptions import DocGraphError, EmbeddingError, ValidationError
from docgraph.utils.logger import get_logger

logger = get_logger(__name__)


class DocumentIngestionService:
    """
    Turns an extracted document into stored, searchable graph memories.
    """

    def __init__(
        self,
        memory_store: MemoryStore,
        embedder: Embedder,
        config: Config | None = None,
        graph_registry: GraphRegistry | None = None,
    ):
        """
        Initialize ingestion service.

        Args:
            memory_store: Store receiving the graph memories
            embedder: Embedder for node contents
            config: Configuration (defaults if not provided)
            graph_registry: Registry receiving the built graph (optional)
        """
        self.config = config or Config()
        self.memory_store = memory_store
        self.embedder = embedder
        self.graph_registry = graph_registry
        self.builder = GraphBuilder(self.config.graph)

    async def ingest(
        self,
        user_id: str,
        document_id: str,
        pages: Sequence[PageInput | dict[str, Any]],
        chunks: Sequence[str] | None = None,
        images: Iterable[ImageInput | dict[str, Any]] | None = None,
    ) -> IngestionSummary:
        """
        Ingest one document for a user.

        Args:
            user_id: Owner user ID
            document_id: Document identifier (also the file id used at query time)
            pages: Extracted pages
            chunks: Text chunks; the page texts are chunked when None
            images: Optional flat image list merged into pages by page number

        Returns:
            IngestionSummary with counts and timing

        Raises:
            ValidationError: If user_id is empty
            GraphConstructionError: If document_id is empty
            EmbeddingError: If embedding node contents fails
            StoreError: If the memory store fails
        """
        if not user_id or not user_id.strip():
            raise ValidationError("user_id is required")

        start = time.time()
        page_inputs = coerce_pages(pages)

        if chunks is None:
            full_text = "\n".join(page.text for page in page_inputs if page.text)
            chunks = chunk_text(
                full_text,
                chunk_size=self.config.chunking.chunk_size,
                overlap=self.config.chunking.overlap,
            )

        graph = self.builder.build(document_id, page_inputs, chunks, images)
        nodes = await self._embed_nodes(graph, document_id)
        stored = await self.memory_store.store_graph_nodes(user_id, nodes)

        if self.graph_registry is not None:
            self.graph_registry.register(user_id, document_id, Graph(nodes=nodes, edges=graph.edges))

        summary = IngestionSummary(
            document_id=document_id,
            total_pages=len(page_inputs),
            total_chunks=len(chunks),
            total_images=len(graph.nodes_of_type(NodeType.IMAGE)),
            total_nodes=len(graph.nodes),
            total_edges=len(graph.edges),
            stored_memories=len(stored),
            processing_time_ms=(time.time() - start) * 1000,
        )

        logger.info(
            f"Ingested {document_id}: {summary.total_nodes} nodes, {summary.total_edges} edges "
            f"({summary.processing_time_ms:.1f}ms)",
            extra={"user_id": user_id, **summary.model_dump()},
        )
        return summary

    async def _embed_nodes(self, graph: Graph, document_id: str) -> list[GraphNode]:
        """Copies of the graph nodes with embeddings; blank nodes stay unembedded."""
        targets = [index for index, node in enumerate(graph.nodes) if node.content.strip()]

        try:
            embeddings = await self.embedder.batch_embed(
                [graph.nodes[index].content for index in targets]
            )
        except EmbeddingError:
            raise
        except DocGraphError as e:
            raise EmbeddingError(
                f"Failed to embed nodes for {document_id}: {e}", context=e.context
            ) from e
        except Exception as e:
            logger.error(
                f"Failed to embed nodes for {document_id}: {e!r}",
                extra={"document_id": document_id, "error": repr(e)},
            )
            raise EmbeddingError(
                f"Failed to embed nodes for {document_id}: {e}",
                context={"document_id": document_id},
            ) from e

        nodes = list(graph.nodes)
        for index, embedding in zip(targets, embeddings, strict=True):
            nodes[index] = nodes[index].model_copy(update={"embedding": embedding})
        return nodes
