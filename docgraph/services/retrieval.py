"""
Hybrid retrieval: vector search supplemented by a search-agent pass.

Pipeline:
profile → embed query → primary vector search (graph units only)
→ escalation decision → [search agent + graph expansion] → merge (first wins)
→ bound to context size → provenance

Only the primary pass can fail the retrieval; everything after it degrades
to "no supplemental units".
"""

import asyncio
import time
from collections.abc import Iterable

from docgraph.config import Config
from docgraph.core.embeddings.base import Embedder
from docgraph.core.graph.expander import GraphExpander
from docgraph.core.graph.registry import GraphRegistry
from docgraph.core.memory_store.base import MemoryStore
from docgraph.models.graph import GraphNode, NodeMetadata, NodeType
from docgraph.models.memory import NODE_TYPE_KEY, TYPE_KEY, Memory
from docgraph.models.retrieval import ProvenanceRecord, RetrievalResult, SearchResult
from docgraph.services.escalation import EscalationPolicy
from docgraph.services.search_agent import SearchAgent
from docgraph.utils.exceptions import RetrievalError, RetrievalInputError
from docgraph.utils.logger import get_logger

logger = get_logger(__name__)

# Unit types graph expansion may contribute to the answer context
_EXPANDABLE_TYPES = frozenset({NodeType.TEXT_CHUNK, NodeType.IMAGE})


def _node_type(value: object) -> NodeType:
    try:
        return NodeType(value)
    except ValueError:
        return NodeType.TEXT_CHUNK


def _unit_metadata(metadata: dict) -> NodeMetadata:
    """Typed unit metadata without the storage bookkeeping keys."""
    payload = {k: v for k, v in metadata.items() if k not in (NODE_TYPE_KEY, TYPE_KEY)}
    return NodeMetadata.from_payload(payload)


def memory_to_unit(memory: Memory) -> GraphNode:
    """Map a graph-derived memory back to a GraphNode-shaped unit."""
    return GraphNode(
        id=memory.unit_id,
        type=_node_type(memory.metadata.get(TYPE_KEY)),
        content=memory.content,
        metadata=_unit_metadata(memory.metadata),
        embedding=memory.embedding,
    )


def search_result_to_unit(result: SearchResult) -> GraphNode:
    """Map a search-agent result to a GraphNode-shaped unit (no embedding)."""
    return GraphNode(
        id=result.source,
        type=_node_type(result.metadata.get(TYPE_KEY)),
        content=result.content,
        metadata=_unit_metadata(result.metadata),
    )


def merge_units(*unit_lists: Iterable[GraphNode]) -> list[GraphNode]:
    """
    Union unit lists, deduplicated by id.

    The first occurrence of an id wins, so earlier lists take precedence.
    """
    merged: dict[str, GraphNode] = {}
    for units in unit_lists:
        for unit in units:
            if unit.id not in merged:
                merged[unit.id] = unit
    return list(merged.values())


def build_provenance(units: Iterable[GraphNode]) -> list[ProvenanceRecord]:
    """One provenance record per unit."""
    return [
        ProvenanceRecord(source=unit.id, type=unit.type, page_number=unit.metadata.page_number)
        for unit in units
    ]


class HybridRetriever:
    """
    Coordinates primary vector search and the supplemental search pass.

    All collaborators are injected; the retriever holds no state of its own.
    """

    def __init__(
        self,
        memory_store: MemoryStore,
        embedder: Embedder,
        config: Config | None = None,
        search_agent: SearchAgent | None = None,
        policy: EscalationPolicy | None = None,
        graph_registry: GraphRegistry | None = None,
        expander: GraphExpander | None = None,
    ):
        """
        Initialize hybrid retriever.

        Args:
            memory_store: Shared memory store
            embedder: Query embedder
            config: Configuration (defaults if not provided)
            search_agent: Supplemental search (built from the store/embedder if None)
            policy: Escalation policy (built from config if None)
            graph_registry: Built graphs, used for file-scoped graph expansion
            expander: Graph expander (walks every edge kind if None)
        """
        self.config = config or Config()
        self.memory_store = memory_store
        self.embedder = embedder
        self.search_agent = search_agent or SearchAgent(
            memory_store, embedder, self.config.retrieval
        )
        self.policy = policy or EscalationPolicy(self.config.escalation)
        self.graph_registry = graph_registry
        self.expander = expander or GraphExpander()

    async def retrieve(self, user_id: str, query: str, file_id: str | None = None) -> RetrievalResult:
        """
        Retrieve ranked, provenance-tagged context units for a query.

        Args:
            user_id: Owner user ID
            query: Natural-language query
            file_id: Optional document id scoping graph expansion

        Returns:
            RetrievalResult with at most `max_context_units` units

        Raises:
            RetrievalInputError: If the query is empty (no embedding call is made)
            RetrievalError: If embedding the query or the primary search fails
        """
        if not query or not query.strip():
            raise RetrievalInputError("query is required")

        start = time.time()
        retrieval_config = self.config.retrieval

        try:
            profile = await self.memory_store.get_profile(user_id)
            query_embedding = await asyncio.wait_for(
                self.embedder.embed(query), timeout=retrieval_config.embed_timeout
            )
            primary_memories = await self.memory_store.search_by_similarity(
                user_id, query_embedding, retrieval_config.primary_limit
            )
        except Exception as e:
            logger.error(
                f"Primary retrieval failed: {e!r}",
                extra={"user_id": user_id, "error": repr(e), "error_type": type(e).__name__},
            )
            raise RetrievalError(
                f"Retrieval failed: {e}", context={"user_id": user_id, "stage": "primary"}
            ) from e

        primary_units = [
            memory_to_unit(memory) for memory in primary_memories if memory.is_graph_node()
        ]
        primary_time = (time.time() - start) * 1000

        decision = self.policy.evaluate(query, len(primary_units))

        supplemental_units: list[GraphNode] = []
        if decision.escalate:
            try:
                supplemental_units = await self._supplement(
                    user_id, query, query_embedding, primary_units, file_id
                )
            except Exception as e:
                logger.warning(
                    f"Supplemental search failed, using primary units only: {e!r}",
                    extra={"user_id": user_id, "error": repr(e)},
                )

        units = merge_units(primary_units, supplemental_units)[: retrieval_config.max_context_units]
        provenance = build_provenance(units)

        logger.info(
            f"Retrieval: primary={len(primary_units)} units ({primary_time:.1f}ms), "
            f"supplemental={len(supplemental_units)}, final={len(units)}, "
            f"escalated={decision.escalate}",
            extra={
                "user_id": user_id,
                "file_id": file_id,
                "reasons": decision.reasons,
                "total_ms": (time.time() - start) * 1000,
            },
        )

        return RetrievalResult(
            units=units,
            provenance=provenance,
            used_search_agent=decision.escalate,
            escalation=decision,
            profile=profile,
        )

    async def _supplement(
        self,
        user_id: str,
        query: str,
        query_embedding: list[float],
        primary_units: list[GraphNode],
        file_id: str | None,
    ) -> list[GraphNode]:
        """Search-agent units followed by graph-expanded units; never raises."""
        results = await self.search_agent.search(
            user_id,
            query,
            self.config.retrieval.search_agent_max_results,
            query_embedding=query_embedding,
        )
        units = [search_result_to_unit(result) for result in results]
        units.extend(self._expand(user_id, primary_units, file_id))
        return units

    def _expand(
        self, user_id: str, primary_units: list[GraphNode], file_id: str | None
    ) -> list[GraphNode]:
        """Neighbors of the primary units in the user's own graph for the file, if registered."""
        depth = self.config.retrieval.expansion_depth
        if not file_id or depth <= 0 or self.graph_registry is None or not primary_units:
            return []

        try:
            graph = self.graph_registry.get(user_id, file_id)
            if graph is None:
                return []
            expanded = self.expander.expand([unit.id for unit in primary_units], graph, depth)
        except Exception as e:
            logger.warning(
                f"Graph expansion failed for {file_id}: {e!r}",
                extra={"user_id": user_id, "file_id": file_id, "error": repr(e)},
            )
            return []

        return [node for node in expanded if node.type in _EXPANDABLE_TYPES]
