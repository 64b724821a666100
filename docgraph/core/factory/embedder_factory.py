"""
Factory for creating embedder providers.
"""

from docgraph.config import EmbedderConfig
from docgraph.core.embeddings.base import Embedder
from docgraph.core.embeddings.hashing import HashEmbedder
from docgraph.core.embeddings.ollama import OllamaEmbedder
from docgraph.core.embeddings.openai import OpenAIEmbedder
from docgraph.utils.exceptions import ConfigurationError

OLLAMA_HOST = "http://localhost:11434"

# Reference dimensionality when nothing else pins it
DEFAULT_HASH_DIMENSION = 384


class EmbedderFactory:
    """Factory for creating embedder providers from configuration."""

    @staticmethod
    def create(config: EmbedderConfig) -> Embedder:
        """
        Create embedder from configuration.

        Args:
            config: Embedder configuration

        Returns:
            Embedder instance

        Raises:
            ConfigurationError: If provider is not supported or misconfigured
        """
        if config.provider == "ollama":
            return OllamaEmbedder(
                host=config.base_url or OLLAMA_HOST,
                model=config.model,
                timeout=config.timeout,
            )
        elif config.provider == "openai":
            if not config.api_key:
                raise ConfigurationError("OpenAI API key is required")
            return OpenAIEmbedder(
                api_key=config.api_key,
                model=config.model,
                dimensions=config.dimension,
                base_url=config.base_url,
                timeout=config.timeout,
            )
        elif config.provider == "hash":
            return HashEmbedder(dimension=config.dimension or DEFAULT_HASH_DIMENSION)
        else:
            raise ConfigurationError(f"Unsupported embedder provider: {config.provider}")

    @staticmethod
    async def get_dimension(embedder: Embedder, config: EmbedderConfig | None = None) -> int:
        """
        Get embedding dimension with fallback logic.

        Priority:
        1. From config if provided
        2. From the embedder itself

        Args:
            embedder: Embedder instance
            config: Optional embedder config with dimension hint

        Returns:
            Embedding dimension
        """
        if config and config.dimension:
            return config.dimension
        return await embedder.get_dimension()
