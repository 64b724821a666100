"""
Search agent: supplementary retrieval for queries the primary pass serves poorly.

Pipeline:
query embedding → similarity search (2 × max_results) → keep document content
→ key-term expansion until max_results is reached or terms run out

Any failure yields an empty result; the agent never aborts retrieval.
"""

import asyncio

from docgraph.config import RetrievalConfig
from docgraph.core.embeddings.base import Embedder
from docgraph.core.memory_store.base import MemoryStore
from docgraph.models.memory import TYPE_KEY, Memory
from docgraph.models.retrieval import SearchResult
from docgraph.services.escalation import iter_key_terms
from docgraph.utils.logger import get_logger

logger = get_logger(__name__)


class SearchAgent:
    """
    Secondary similarity search with key-term expansion.
    """

    def __init__(
        self,
        memory_store: MemoryStore,
        embedder: Embedder,
        config: RetrievalConfig | None = None,
    ):
        """
        Initialize search agent.

        Args:
            memory_store: Shared memory store
            embedder: Embedder for query and key-term embeddings
            config: Retrieval limits and deadlines
        """
        self.memory_store = memory_store
        self.embedder = embedder
        self.config = config or RetrievalConfig()

    async def search(
        self,
        user_id: str,
        query: str,
        max_results: int | None = None,
        query_embedding: list[float] | None = None,
    ) -> list[SearchResult]:
        """
        Find up to `max_results` supplementary units.

        Args:
            user_id: Owner user ID
            query: User query
            max_results: Result cap (config default if None)
            query_embedding: Reuse an existing query embedding instead of re-embedding

        Returns:
            Search results, or [] if anything fails or the deadline passes
        """
        if max_results is None:
            max_results = self.config.search_agent_max_results
        if max_results <= 0:
            return []
        try:
            return await asyncio.wait_for(
                self._search(user_id, query, max_results, query_embedding),
                timeout=self.config.search_agent_timeout,
            )
        except Exception as e:
            logger.warning(
                f"Search agent failed, continuing without supplemental results: {e!r}",
                extra={"user_id": user_id, "error": repr(e), "error_type": type(e).__name__},
            )
            return []

    async def _search(
        self,
        user_id: str,
        query: str,
        max_results: int,
        query_embedding: list[float] | None,
    ) -> list[SearchResult]:
        if query_embedding is None:
            query_embedding = await self.embedder.embed(query)

        scored = await self.memory_store.search_with_scores(
            user_id, query_embedding, max_results * 2
        )

        results: list[SearchResult] = []
        seen: set[str] = set()
        for memory, score in scored:
            if len(results) >= max_results:
                break
            if not self._is_document_content(memory) or memory.unit_id in seen:
                continue
            seen.add(memory.unit_id)
            results.append(self._to_result(memory, score))

        if len(results) < max_results:
            await self._expand_with_key_terms(user_id, query, results, max_results)

        logger.debug(
            f"Search agent found {len(results)} results",
            extra={"user_id": user_id, "results": len(results)},
        )
        return results[:max_results]

    async def _expand_with_key_terms(
        self,
        user_id: str,
        query: str,
        results: list[SearchResult],
        max_results: int,
    ) -> None:
        """Append results for key terms until `max_results` is reached."""
        seen = {result.source for result in results}

        for term in iter_key_terms(query, self.config.key_term_limit):
            if len(results) >= max_results:
                break

            term_embedding = await self.embedder.embed(term)
            term_hits = await self.memory_store.search_with_scores(
                user_id, term_embedding, self.config.key_term_search_limit
            )

            for memory, score in term_hits:
                if len(results) >= max_results:
                    break
                if memory.unit_id in seen:
                    continue
                seen.add(memory.unit_id)
                results.append(self._to_result(memory, score))

    @staticmethod
    def _is_document_content(memory: Memory) -> bool:
        """Graph-derived units, or typed memories that are not interactions."""
        if memory.is_graph_node():
            return True
        return bool(memory.metadata.get(TYPE_KEY)) and not memory.is_interaction()

    @staticmethod
    def _to_result(memory: Memory, score: float) -> SearchResult:
        return SearchResult(
            content=memory.content,
            metadata=dict(memory.metadata),
            relevance_score=score,
            source=memory.unit_id,
        )
