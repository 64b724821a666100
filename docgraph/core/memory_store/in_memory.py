"""
Volatile, process-local memory store.

Each user's memories form an independently growing log. Appends for the
same user are serialized by a per-user asyncio lock; different users never
contend. Reads work on a snapshot of the log.
"""

import asyncio
from collections import defaultdict
from datetime import UTC, datetime
from typing import Any

from docgraph.core.memory_store.base import MemoryStore
from docgraph.core.memory_store.similarity import batch_cosine_similarity
from docgraph.models.memory import Memory, UserProfile
from docgraph.utils.exceptions import StoreUnavailableError, ValidationError
from docgraph.utils.id_generator import generate_memory_id
from docgraph.utils.logger import get_logger

logger = get_logger(__name__)


class InMemoryMemoryStore(MemoryStore):
    """
    Memory store backed by a dict of per-user lists.

    Construct one per process at startup and pass it to every component.
    """

    def __init__(self):
        """Initialize an empty store."""
        self._memories: dict[str, list[Memory]] = {}
        self._locks: defaultdict[str, asyncio.Lock] = defaultdict(asyncio.Lock)
        self._closed = False
        logger.info("InMemoryMemoryStore initialized")

    def _ensure_open(self) -> None:
        if self._closed:
            raise StoreUnavailableError("Memory store is closed")

    def _snapshot(self, user_id: str) -> list[Memory]:
        return list(self._memories.get(user_id, ()))

    async def upsert(
        self,
        user_id: str,
        content: str,
        embedding: list[float] | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> Memory:
        if not user_id or not user_id.strip():
            raise ValidationError("user_id cannot be empty")
        self._ensure_open()

        memory = Memory(
            id=generate_memory_id(),
            user_id=user_id,
            content=content or "",
            embedding=list(embedding) if embedding else None,
            metadata=dict(metadata or {}),
            timestamp=datetime.now(UTC),
        )

        async with self._locks[user_id]:
            self._memories.setdefault(user_id, []).append(memory)

        logger.debug(
            f"Memory stored: {memory.id}",
            extra={"memory_id": memory.id, "user_id": user_id, "embedded": bool(embedding)},
        )
        return memory

    async def get_profile(self, user_id: str) -> UserProfile:
        self._ensure_open()
        return UserProfile(
            user_id=user_id,
            memories=self._snapshot(user_id),
            preferences={},
            last_updated=datetime.now(UTC),
        )

    async def search_with_scores(
        self, user_id: str, query_embedding: list[float], limit: int = 10
    ) -> list[tuple[Memory, float]]:
        self._ensure_open()
        if limit <= 0:
            return []

        candidates = [m for m in self._snapshot(user_id) if m.embedding]
        if not candidates:
            return []

        scores = batch_cosine_similarity(query_embedding, [m.embedding for m in candidates])

        # sorted() is stable, so equal scores keep insertion order
        ranked = sorted(zip(candidates, scores, strict=True), key=lambda pair: pair[1], reverse=True)
        return ranked[:limit]

    async def count(self, user_id: str | None = None) -> int:
        self._ensure_open()
        if user_id is not None:
            return len(self._memories.get(user_id, ()))
        return sum(len(memories) for memories in self._memories.values())

    async def close(self) -> None:
        self._closed = True
        logger.info("InMemoryMemoryStore closed")
