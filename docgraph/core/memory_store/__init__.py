"""Memory store components for docgraph."""

from docgraph.core.memory_store.base import MemoryStore
from docgraph.core.memory_store.in_memory import InMemoryMemoryStore
from docgraph.core.memory_store.similarity import batch_cosine_similarity, cosine_similarity

__all__ = [
    "MemoryStore",
    "InMemoryMemoryStore",
    "cosine_similarity",
    "batch_cosine_similarity",
]
