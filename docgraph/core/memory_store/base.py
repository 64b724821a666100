"""
Base interface for the memory store.

The store keeps embedded content units ("memories") per user and answers
similarity queries. A persistent vector index may implement this interface
as long as it keeps the contract below.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

from docgraph.models.graph import GraphNode
from docgraph.models.memory import (
    GRAPH_NODE_MARKER,
    NODE_ID_KEY,
    NODE_TYPE_KEY,
    TYPE_KEY,
    Memory,
    UserProfile,
)


class MemoryStore(ABC):
    """Abstract base class for memory store implementations."""

    @abstractmethod
    async def upsert(
        self,
        user_id: str,
        content: str,
        embedding: list[float] | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> Memory:
        """
        Append a new memory for a user.

        A fresh id and timestamp are always allocated; an earlier memory with
        the same content or node id is left untouched.

        Args:
            user_id: Owner user ID
            content: Content payload
            embedding: Optional embedding vector
            metadata: Optional metadata

        Returns:
            The stored memory

        Raises:
            ValidationError: If user_id is empty
            StoreUnavailableError: If the store cannot be written
        """
        pass

    @abstractmethod
    async def get_profile(self, user_id: str) -> UserProfile:
        """
        Materialize a user's profile.

        Unknown users get an empty profile, never an error.

        Raises:
            StoreUnavailableError: If the store cannot be read
        """
        pass

    @abstractmethod
    async def search_with_scores(
        self, user_id: str, query_embedding: list[float], limit: int = 10
    ) -> list[tuple[Memory, float]]:
        """
        Rank a user's embedded memories by cosine similarity.

        Args:
            user_id: Owner user ID
            query_embedding: Query vector
            limit: Maximum number of results

        Returns:
            (memory, score) pairs, best first; ties keep insertion order

        Raises:
            StoreUnavailableError: If the store cannot be read
        """
        pass

    @abstractmethod
    async def count(self, user_id: str | None = None) -> int:
        """Number of memories for one user, or across all users."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release any resources held by the store."""
        pass

    async def search_by_similarity(
        self, user_id: str, query_embedding: list[float], limit: int = 10
    ) -> list[Memory]:
        """
        Top `limit` memories by cosine similarity (memories only).

        Never returns more than `limit` results, and never a memory lacking
        an embedding.
        """
        results = await self.search_with_scores(user_id, query_embedding, limit)
        return [memory for memory, _ in results]

    async def upsert_many(self, memories: Sequence[Memory]) -> list[Memory]:
        """
        Store a batch of memories, each getting a fresh id.

        Args:
            memories: Memories to store (their ids and timestamps are replaced)

        Returns:
            The stored memories in input order
        """
        stored = []
        for memory in memories:
            stored.append(
                await self.upsert(
                    memory.user_id, memory.content, memory.embedding, dict(memory.metadata)
                )
            )
        return stored

    async def store_graph_nodes(self, user_id: str, nodes: Sequence[GraphNode]) -> list[Memory]:
        """
        Persist graph nodes as graph-derived memories.

        Args:
            user_id: Owner user ID
            nodes: Nodes to persist (embedding optional)

        Returns:
            The stored memories in node order
        """
        stored = []
        for node in nodes:
            metadata = {
                **node.metadata.to_payload(),
                NODE_TYPE_KEY: GRAPH_NODE_MARKER,
                NODE_ID_KEY: node.id,
                TYPE_KEY: node.type.value,
            }
            stored.append(await self.upsert(user_id, node.content, node.embedding, metadata))
        return stored
