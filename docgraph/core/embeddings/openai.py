"""
OpenAI embedder using official SDK.
"""

from openai import AsyncOpenAI

from docgraph.core.embeddings.base import Embedder
from docgraph.utils.exceptions import EmbeddingError, ValidationError
from docgraph.utils.logger import get_logger

logger = get_logger(__name__)


class OpenAIEmbedder(Embedder):
    """
    OpenAI embedder for generating text embeddings.

    The text-embedding-3 models accept a `dimensions` parameter, so the
    vector length can be pinned (e.g. 384) to match the rest of the index.
    """

    # Native dimensions for OpenAI embedding models
    _MODEL_DIMENSIONS = {
        "text-embedding-3-small": 1536,
        "text-embedding-3-large": 3072,
        "text-embedding-ada-002": 1536,
    }

    def __init__(
        self,
        api_key: str,
        model: str = "text-embedding-3-small",
        dimensions: int | None = None,
        base_url: str | None = None,
        timeout: float = 120.0,
    ):
        """
        Initialize OpenAI embedder.

        Args:
            api_key: OpenAI API key
            model: Embedding model name (e.g., "text-embedding-3-small")
            dimensions: Optional reduced output dimension (text-embedding-3 only)
            base_url: Optional custom base URL
            timeout: Request timeout in seconds
        """
        self.model = model
        self.dimensions = dimensions

        self.client = AsyncOpenAI(api_key=api_key, base_url=base_url, timeout=timeout)

    def _request_params(self, **kwargs) -> dict:
        params = {"model": self.model, **kwargs}
        if self.dimensions and "dimensions" not in params:
            params["dimensions"] = self.dimensions
        return params

    async def embed(self, text: str, **kwargs) -> list[float]:
        """
        Generate embedding for text using OpenAI.

        Raises:
            ValidationError: If text is invalid
            EmbeddingError: If OpenAI API call fails
        """
        if not text or not text.strip():
            raise ValidationError("Text cannot be empty")

        try:
            response = await self.client.embeddings.create(
                input=text, **self._request_params(**kwargs)
            )

            if not response.data:
                raise EmbeddingError("OpenAI returned empty embedding response")

            return response.data[0].embedding
        except (ValidationError, EmbeddingError):
            raise
        except Exception as e:
            logger.error(
                f"OpenAI embedding error: {e}",
                extra={"model": self.model, "error": str(e), "error_type": type(e).__name__},
            )
            raise EmbeddingError(f"OpenAI embedding error: {e}") from e

    async def batch_embed(
        self, texts: list[str], batch_size: int = 2048, **kwargs
    ) -> list[list[float]]:
        """
        Batch embed using OpenAI's native batch API (up to 2048 inputs per request).

        Args:
            texts: List of texts to embed
            batch_size: Number of texts per request
            **kwargs: Additional parameters

        Returns:
            List of embedding vectors, same order as `texts`
        """
        if not texts:
            return []

        try:
            embeddings = []
            for i in range(0, len(texts), batch_size):
                batch = texts[i : i + batch_size]
                response = await self.client.embeddings.create(
                    input=batch, **self._request_params(**kwargs)
                )
                if not response.data:
                    raise EmbeddingError("OpenAI returned empty batch embedding response")
                embeddings.extend(item.embedding for item in response.data)
            return embeddings
        except EmbeddingError:
            raise
        except Exception as e:
            logger.error(
                f"OpenAI batch embedding error: {e}",
                extra={"model": self.model, "num_texts": len(texts), "error": str(e)},
            )
            raise EmbeddingError(f"OpenAI batch embedding error: {e}") from e

    async def get_dimension(self) -> int:
        if self.dimensions:
            return self.dimensions
        if self.model in self._MODEL_DIMENSIONS:
            return self._MODEL_DIMENSIONS[self.model]
        return await super().get_dimension()

    async def close(self):
        """Close OpenAI client."""
        await self.client.close()
