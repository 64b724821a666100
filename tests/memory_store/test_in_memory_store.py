"""
Tests for the in-memory memory store.
"""

import asyncio

import pytest

from docgraph.core.memory_store.base import MemoryStore
from docgraph.core.memory_store.in_memory import InMemoryMemoryStore
from docgraph.models.graph import GraphNode, NodeMetadata, NodeType
from docgraph.utils.exceptions import StoreUnavailableError, ValidationError


@pytest.mark.unit
@pytest.mark.asyncio
class TestInMemoryMemoryStore:
    """Test append, profile and similarity search."""

    async def test_abstract_instantiation(self):
        """Test that abstract class cannot be instantiated."""
        with pytest.raises(TypeError, match="Can't instantiate abstract class"):
            MemoryStore()

    async def test_upsert_then_profile(self, memory_store):
        """An upserted memory is immediately visible in the profile."""
        memory = await memory_store.upsert("u1", "likes charts", None, {"type": "preference"})

        profile = await memory_store.get_profile("u1")

        assert memory.id.startswith("mem_")
        assert memory in profile.memories
        assert profile.user_id == "u1"

    async def test_upsert_same_content_appends(self, memory_store):
        """Memories are never updated in place."""
        first = await memory_store.upsert("u1", "same", [1.0, 0.0])
        second = await memory_store.upsert("u1", "same", [1.0, 0.0])

        assert first.id != second.id
        assert await memory_store.count("u1") == 2

    async def test_upsert_requires_user(self, memory_store):
        with pytest.raises(ValidationError):
            await memory_store.upsert("", "content")

    async def test_unknown_user_has_empty_profile(self, memory_store):
        profile = await memory_store.get_profile("nobody")

        assert profile.memories == []

    async def test_users_are_isolated(self, memory_store):
        await memory_store.upsert("u1", "a", [1.0, 0.0])
        await memory_store.upsert("u2", "b", [1.0, 0.0])

        results = await memory_store.search_by_similarity("u1", [1.0, 0.0], 10)

        assert [m.content for m in results] == ["a"]

    async def test_search_respects_limit(self, memory_store):
        for i in range(15):
            await memory_store.upsert("u1", f"m{i}", [1.0, float(i)])

        results = await memory_store.search_by_similarity("u1", [1.0, 0.0], 10)

        assert len(results) == 10

    async def test_search_skips_unembedded(self, memory_store):
        await memory_store.upsert("u1", "no vector", None)
        await memory_store.upsert("u1", "vector", [0.5, 0.5])

        results = await memory_store.search_by_similarity("u1", [1.0, 0.0], 10)

        assert [m.content for m in results] == ["vector"]
        assert all(m.embedding is not None for m in results)

    async def test_search_orders_by_score(self, memory_store):
        await memory_store.upsert("u1", "far", [0.0, 1.0])
        await memory_store.upsert("u1", "near", [1.0, 0.1])
        await memory_store.upsert("u1", "middle", [1.0, 1.0])

        results = await memory_store.search_with_scores("u1", [1.0, 0.0], 3)

        assert [m.content for m, _ in results] == ["near", "middle", "far"]
        scores = [score for _, score in results]
        assert scores == sorted(scores, reverse=True)

    async def test_search_ties_keep_insertion_order(self, memory_store):
        for name in ("first", "second", "third"):
            await memory_store.upsert("u1", name, [1.0, 1.0])

        results = await memory_store.search_by_similarity("u1", [1.0, 1.0], 3)

        assert [m.content for m in results] == ["first", "second", "third"]

    async def test_search_zero_limit(self, memory_store):
        await memory_store.upsert("u1", "a", [1.0])

        assert await memory_store.search_by_similarity("u1", [1.0], 0) == []

    async def test_dimension_mismatch_scores_zero(self, memory_store):
        await memory_store.upsert("u1", "short", [1.0, 0.0])
        await memory_store.upsert("u1", "match", [0.2, 0.1, 0.0])

        results = await memory_store.search_with_scores("u1", [1.0, 0.0, 0.0], 2)

        assert results[0][0].content == "match"
        assert results[1][1] == 0.0

    async def test_concurrent_upserts_are_all_kept(self, memory_store):
        """Interleaved appends for one user lose nothing."""
        await asyncio.gather(
            *(memory_store.upsert("u1", f"m{i}", [1.0, float(i)]) for i in range(50))
        )

        profile = await memory_store.get_profile("u1")

        assert len(profile.memories) == 50
        assert len({m.id for m in profile.memories}) == 50

    async def test_store_graph_nodes(self, memory_store):
        nodes = [
            GraphNode(
                id="chunk-d-1-0",
                type=NodeType.TEXT_CHUNK,
                content="revenue grew",
                metadata=NodeMetadata(document_id="d", page_number=1, chunk_index=0),
                embedding=[1.0, 0.0],
            ),
            GraphNode(id="image-d-i1", type=NodeType.IMAGE, content=""),
        ]

        stored = await memory_store.store_graph_nodes("u1", nodes)

        assert len(stored) == 2
        assert stored[0].is_graph_node()
        assert stored[0].unit_id == "chunk-d-1-0"
        assert stored[0].metadata["type"] == "TextChunk"
        assert stored[0].metadata["page_number"] == 1
        assert stored[1].embedding is None

    async def test_upsert_many_allocates_fresh_ids(self, memory_store):
        first = await memory_store.upsert("u1", "alpha", [1.0, 0.0], {"type": "note"})

        stored = await memory_store.upsert_many([first, first.model_copy(update={"user_id": "u2"})])

        assert [m.user_id for m in stored] == ["u1", "u2"]
        assert stored[0].id != first.id
        assert stored[0].metadata == {"type": "note"}
        assert await memory_store.count("u1") == 2
        assert await memory_store.count() == 3

    async def test_closed_store_raises(self):
        store = InMemoryMemoryStore()
        await store.close()

        with pytest.raises(StoreUnavailableError):
            await store.upsert("u1", "content")
        with pytest.raises(StoreUnavailableError):
            await store.search_by_similarity("u1", [1.0], 5)
