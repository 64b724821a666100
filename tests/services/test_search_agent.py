"""
Tests for the search agent.
"""

import asyncio

import pytest

from docgraph.config import RetrievalConfig
from docgraph.core.embeddings.base import Embedder
from docgraph.services.search_agent import SearchAgent

GRAPH = {"node_type": "graph", "type": "TextChunk"}


class MappingEmbedder(Embedder):
    """Looks texts up in a fixed table; unknown texts map to a default vector."""

    def __init__(self, table, default=(0.0, 0.0, 1.0), delay=0.0):
        self.table = table
        self.default = list(default)
        self.delay = delay
        self.calls = []

    async def embed(self, text: str, **kwargs):
        self.calls.append(text)
        if self.delay:
            await asyncio.sleep(self.delay)
        return list(self.table.get(text, self.default))

    async def close(self):
        pass


async def add_node(store, node_id, content, embedding, user_id="u1"):
    return await store.upsert(user_id, content, embedding, {**GRAPH, "node_id": node_id})


@pytest.mark.unit
@pytest.mark.asyncio
class TestSearchAgent:
    """Secondary search, filtering and key-term expansion."""

    async def test_returns_graph_units_with_scores(self, memory_store):
        await add_node(memory_store, "chunk-d-1-0", "revenue", [1.0, 0.0, 0.0])
        await add_node(memory_store, "chunk-d-1-1", "margins", [0.0, 1.0, 0.0])
        agent = SearchAgent(memory_store, MappingEmbedder({}), RetrievalConfig())

        results = await agent.search("u1", "q", 1, query_embedding=[1.0, 0.1, 0.0])

        assert len(results) == 1
        assert results[0].source == "chunk-d-1-0"
        assert results[0].relevance_score == pytest.approx(0.995, abs=1e-3)
        assert results[0].metadata["type"] == "TextChunk"

    async def test_filters_interactions_and_untyped(self, memory_store):
        await memory_store.upsert("u1", "Query: x\nAnswer: y", [1.0, 0.0, 0.0], {"type": "interaction"})
        await memory_store.upsert("u1", "loose note", [1.0, 0.0, 0.0], {})
        await memory_store.upsert("u1", "typed note", [1.0, 0.0, 0.0], {"type": "summary"})
        await add_node(memory_store, "chunk-d-1-0", "chunk", [1.0, 0.0, 0.0])
        agent = SearchAgent(memory_store, MappingEmbedder({}), RetrievalConfig(key_term_limit=0))

        results = await agent.search("u1", "q", 5, query_embedding=[1.0, 0.0, 0.0])

        assert [r.content for r in results] == ["typed note", "chunk"]

    async def test_dedupes_by_node_id(self, memory_store):
        await add_node(memory_store, "chunk-d-1-0", "chunk", [1.0, 0.0, 0.0])
        await add_node(memory_store, "chunk-d-1-0", "chunk", [1.0, 0.0, 0.0])
        agent = SearchAgent(memory_store, MappingEmbedder({}))

        results = await agent.search("u1", "q", 5, query_embedding=[1.0, 0.0, 0.0])

        assert [r.source for r in results] == ["chunk-d-1-0"]

    async def test_embeds_query_when_no_embedding_given(self, memory_store):
        await add_node(memory_store, "n1", "chunk", [1.0, 0.0, 0.0])
        embedder = MappingEmbedder({"revenue": [1.0, 0.0, 0.0]})
        agent = SearchAgent(memory_store, embedder)

        results = await agent.search("u1", "revenue", 1)

        assert embedder.calls == ["revenue"]
        assert [r.source for r in results] == ["n1"]

    async def test_no_key_terms_when_primary_fills(self, memory_store):
        for i in range(3):
            await add_node(memory_store, f"n{i}", f"chunk {i}", [1.0, float(i), 0.0])
        embedder = MappingEmbedder({})
        agent = SearchAgent(memory_store, embedder)

        results = await agent.search(
            "u1", "quarterly revenue growth", 3, query_embedding=[1.0, 0.0, 0.0]
        )

        assert len(results) == 3
        assert embedder.calls == []

    async def test_key_term_expansion_stops_when_full(self, memory_store):
        """The second term already fills the results; the third is never embedded."""
        await add_node(memory_store, "n-query", "query hit", [1.0, 0.0, 0.0])
        await memory_store.upsert("u1", "past answer", [0.0, 1.0, 0.0], {"type": "interaction"})
        await memory_store.upsert("u1", "untyped note", [0.0, 0.0, 1.0], {})
        embedder = MappingEmbedder(
            {"alpha": [1.0, 0.0, 0.0], "bravo": [0.0, 1.0, 0.0], "charlie": [0.0, 0.0, 1.0]}
        )
        agent = SearchAgent(memory_store, embedder, RetrievalConfig(key_term_search_limit=1))

        results = await agent.search(
            "u1", "alpha bravo charlie", 2, query_embedding=[1.0, 0.0, 0.0]
        )

        assert [r.content for r in results] == ["query hit", "past answer"]
        assert embedder.calls == ["alpha", "bravo"]

    async def test_key_term_results_deduped_by_source(self, memory_store):
        await add_node(memory_store, "n1", "only node", [1.0, 0.0, 0.0])
        embedder = MappingEmbedder({"alpha": [1.0, 0.0, 0.0], "bravo": [1.0, 0.0, 0.0]})
        agent = SearchAgent(memory_store, embedder)

        results = await agent.search("u1", "alpha bravo", 5, query_embedding=[1.0, 0.0, 0.0])

        assert [r.source for r in results] == ["n1"]
        assert embedder.calls == ["alpha", "bravo"]

    async def test_zero_max_results(self, memory_store):
        embedder = MappingEmbedder({})
        agent = SearchAgent(memory_store, embedder)

        assert await agent.search("u1", "anything", 0) == []
        assert embedder.calls == []

    async def test_failure_returns_empty(self, memory_store, failing_embedder):
        await add_node(memory_store, "n1", "chunk", [1.0, 0.0, 0.0])
        agent = SearchAgent(memory_store, failing_embedder)

        assert await agent.search("u1", "what is revenue", 5) == []
        assert failing_embedder.calls == 1

    async def test_timeout_returns_empty(self, memory_store):
        await add_node(memory_store, "n1", "chunk", [1.0, 0.0, 0.0])
        embedder = MappingEmbedder({}, delay=0.5)
        agent = SearchAgent(memory_store, embedder, RetrievalConfig(search_agent_timeout=0.01))

        assert await agent.search("u1", "slow query", 5) == []

    async def test_store_failure_returns_empty(self, memory_store):
        await memory_store.close()
        agent = SearchAgent(memory_store, MappingEmbedder({}))

        assert await agent.search("u1", "q", 5, query_embedding=[1.0, 0.0, 0.0]) == []
