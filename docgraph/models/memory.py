"""
Memory model and the per-user profile view.
"""

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Metadata conventions shared by the store, ingestion and retrieval
NODE_TYPE_KEY = "node_type"
GRAPH_NODE_MARKER = "graph"
NODE_ID_KEY = "node_id"
TYPE_KEY = "type"
INTERACTION_TYPE = "interaction"


class Memory(BaseModel):
    """
    A stored, optionally embedded content unit scoped to a user.

    Memories are never mutated in place: upserting the same content again
    creates a new entry with a fresh id. Graph-derived memories carry the
    originating graph node id under `metadata["node_id"]`.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Unique memory ID (mem_xxx)")
    user_id: str = Field(..., description="Owner user ID")
    content: str = Field(default="", description="Content payload")
    embedding: list[float] | None = Field(default=None, description="Vector embedding")
    metadata: dict[str, Any] = Field(default_factory=dict, description="Open metadata")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))

    def is_graph_node(self) -> bool:
        """True if this memory was persisted from a graph node."""
        return self.metadata.get(NODE_TYPE_KEY) == GRAPH_NODE_MARKER

    def is_interaction(self) -> bool:
        """True if this memory records a past query/answer exchange."""
        return self.metadata.get(TYPE_KEY) == INTERACTION_TYPE

    @property
    def unit_id(self) -> str:
        """
        Identity used for deduplication at retrieval time.

        Returns:
            The originating graph node id if present, else the memory id
        """
        node_id = self.metadata.get(NODE_ID_KEY)
        return str(node_id) if node_id else self.id


class UserProfile(BaseModel):
    """Read view over a user's memories, materialized on demand."""

    user_id: str
    memories: list[Memory] = Field(default_factory=list)
    preferences: dict[str, Any] = Field(default_factory=dict)
    last_updated: datetime = Field(default_factory=lambda: datetime.now(UTC))

    def context_memories(self, limit: int = 5) -> list[Memory]:
        """
        Profile memories suitable for answer context (non graph-derived).

        Args:
            limit: Maximum number of memories

        Returns:
            First `limit` memories that are not graph nodes
        """
        return [m for m in self.memories if not m.is_graph_node()][:limit]
