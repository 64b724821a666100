"""
Deterministic hashing embedder.

Maps text to a fixed-length vector without any model or network call.
Identical input always yields the identical vector, which makes retrieval
reproducible in tests and offline runs. It carries no semantic meaning.
"""

import hashlib

import numpy as np

from docgraph.core.embeddings.base import Embedder
from docgraph.utils.exceptions import ValidationError


class HashEmbedder(Embedder):
    """
    Embedder summing per-token pseudo-random vectors seeded by a hash.

    Texts sharing a lower-cased token also share that token's contribution,
    so lexical overlap shows up as cosine similarity.
    """

    def __init__(self, dimension: int = 384):
        """
        Initialize hashing embedder.

        Args:
            dimension: Output vector length
        """
        if dimension <= 0:
            raise ValidationError("dimension must be positive")
        self.dimension = dimension

    def _token_vector(self, token: str) -> np.ndarray:
        digest = hashlib.sha256(token.encode("utf-8")).digest()
        seed = int.from_bytes(digest[:8], "big")
        return np.random.default_rng(seed).standard_normal(self.dimension)

    async def embed(self, text: str, **kwargs) -> list[float]:
        """
        Embed text deterministically.

        Args:
            text: Text to embed

        Returns:
            Vector of length `dimension`

        Raises:
            ValidationError: If text is empty
        """
        if not text or not text.strip():
            raise ValidationError("Text cannot be empty")

        vector = np.zeros(self.dimension, dtype=np.float64)
        for token in text.lower().split():
            vector += self._token_vector(token)
        return vector.tolist()

    async def get_dimension(self) -> int:
        return self.dimension

    async def close(self):
        """Nothing to release."""
        pass
