"""
Ollama embedder using the batched /api/embed endpoint of ollama-python.
"""

import ollama

from docgraph.core.embeddings.base import Embedder
from docgraph.utils.exceptions import EmbeddingError, ValidationError
from docgraph.utils.logger import get_logger

logger = get_logger(__name__)


class OllamaEmbedder(Embedder):
    """
    Ollama embedder for node and query embeddings.

    One request embeds a whole batch of texts, so ingesting a document costs
    one round trip per `batch_size` nodes. Supports models like
    nomic-embed-text and all-minilm (384 dims).
    """

    def __init__(
        self,
        host: str = "http://localhost:11434",
        model: str = "nomic-embed-text",
        timeout: float = 120.0,
        truncate: bool = True,
    ):
        """
        Initialize Ollama embedder.

        Args:
            host: Ollama server URL
            model: Embedding model name
            timeout: Request timeout in seconds
            truncate: Let the server cut inputs longer than the model context
        """
        self.host = host
        self.model = model
        self.timeout = timeout
        self.truncate = truncate
        self._dimension: int | None = None

        self.client = ollama.AsyncClient(host=host, timeout=timeout)

    async def _embed_inputs(self, texts: list[str], **kwargs) -> list[list[float]]:
        """One /api/embed call; the response must hold one vector per input."""
        try:
            response = await self.client.embed(
                model=self.model, input=texts, truncate=self.truncate, **kwargs
            )
        except Exception as e:
            logger.error(
                f"Ollama embedding error: {e!r}",
                extra={"model": self.model, "host": self.host, "inputs": len(texts)},
            )
            raise EmbeddingError(
                f"Ollama embedding error: {e}", context={"model": self.model}
            ) from e

        embeddings = response["embeddings"] if response and "embeddings" in response else None
        if not embeddings or len(embeddings) != len(texts):
            raise EmbeddingError(
                "Ollama returned an unexpected number of embeddings",
                context={"expected": len(texts), "received": len(embeddings or [])},
            )
        return [list(vector) for vector in embeddings]

    async def embed(self, text: str, **kwargs) -> list[float]:
        """
        Embed one text.

        Raises:
            ValidationError: If text is blank
            EmbeddingError: If the Ollama call fails
        """
        if not text or not text.strip():
            raise ValidationError("Text cannot be empty")
        return (await self._embed_inputs([text], **kwargs))[0]

    async def batch_embed(
        self, texts: list[str], batch_size: int = 64, **kwargs
    ) -> list[list[float]]:
        """
        Embed texts with one request per `batch_size` texts.

        Returns:
            Vectors in the same order as `texts`

        Raises:
            ValidationError: If any text is blank
            EmbeddingError: If an Ollama call fails
        """
        if any(not text or not text.strip() for text in texts):
            raise ValidationError("Texts cannot be empty")

        embeddings: list[list[float]] = []
        for start in range(0, len(texts), batch_size):
            embeddings.extend(await self._embed_inputs(texts[start : start + batch_size], **kwargs))
        return embeddings

    async def get_dimension(self) -> int:
        """Embed a sample text once and cache the vector length."""
        if self._dimension is None:
            self._dimension = len(await self.embed("dimension check"))
        return self._dimension

    async def close(self):
        """Nothing to release; the SDK's HTTP client is closed with the process."""
