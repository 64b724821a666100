"""
Tests for factory classes.

Tests the creation of providers using factories.
"""

import pytest

from docgraph.config import EmbedderConfig, LLMConfig
from docgraph.core.embeddings.base import Embedder
from docgraph.core.embeddings.hashing import HashEmbedder
from docgraph.core.embeddings.ollama import OllamaEmbedder
from docgraph.core.embeddings.openai import OpenAIEmbedder
from docgraph.core.factory import EmbedderFactory, LLMFactory
from docgraph.core.factory.embedder_factory import DEFAULT_HASH_DIMENSION
from docgraph.core.llm.base import LLMProvider
from docgraph.core.llm.ollama import OllamaLLM
from docgraph.core.llm.openai import OpenAILLM
from docgraph.utils.exceptions import ConfigurationError


@pytest.mark.unit
class TestLLMFactory:
    """Test LLM factory."""

    def test_create_ollama_llm(self):
        """Test creating Ollama LLM provider."""
        config = LLMConfig(provider="ollama", model="llama3.1:8b", base_url="http://ollama:11434")

        llm = LLMFactory.create(config)

        assert isinstance(llm, OllamaLLM)
        assert isinstance(llm, LLMProvider)
        assert llm.model == "llama3.1:8b"
        assert llm.host == "http://ollama:11434"

    def test_ollama_defaults_to_local_host(self):
        llm = LLMFactory.create(LLMConfig(provider="ollama"))

        assert llm.host == "http://localhost:11434"

    def test_create_openai_llm(self):
        """Test creating OpenAI LLM provider."""
        config = LLMConfig(provider="openai", model="gpt-4o-mini", api_key="sk-test-key")

        llm = LLMFactory.create(config)

        assert isinstance(llm, OpenAILLM)
        assert llm.model == "gpt-4o-mini"
        assert "localhost" not in str(llm.client.base_url)

    def test_create_openai_compatible_llm(self):
        config = LLMConfig(
            provider="openai",
            model="llama-3.3-70b-versatile",
            api_key="gsk-test",
            base_url="https://api.groq.com/openai/v1",
        )

        llm = LLMFactory.create(config)

        assert "groq" in str(llm.client.base_url)

    def test_create_openai_without_api_key_raises_error(self):
        """Test that OpenAI without API key raises error."""
        config = LLMConfig(provider="openai", model="gpt-4o", api_key=None)

        with pytest.raises(ConfigurationError, match="API key is required"):
            LLMFactory.create(config)

    def test_unsupported_provider_raises_error(self):
        """Test that unsupported provider raises error."""
        with pytest.raises(ConfigurationError, match="Unsupported LLM provider"):
            LLMFactory.create(LLMConfig(provider="unsupported"))


@pytest.mark.unit
class TestEmbedderFactory:
    """Test Embedder factory."""

    def test_create_ollama_embedder(self):
        """Test creating Ollama embedder."""
        config = EmbedderConfig(provider="ollama", model="nomic-embed-text")

        embedder = EmbedderFactory.create(config)

        assert isinstance(embedder, OllamaEmbedder)
        assert isinstance(embedder, Embedder)
        assert embedder.model == "nomic-embed-text"
        assert embedder.host == "http://localhost:11434"

    def test_create_openai_embedder(self):
        """Test creating OpenAI embedder."""
        config = EmbedderConfig(
            provider="openai", model="text-embedding-3-small", api_key="sk-test-key", dimension=384
        )

        embedder = EmbedderFactory.create(config)

        assert isinstance(embedder, OpenAIEmbedder)
        assert embedder.model == "text-embedding-3-small"
        assert embedder.dimensions == 384

    def test_create_openai_without_api_key_raises_error(self):
        config = EmbedderConfig(provider="openai", api_key=None)

        with pytest.raises(ConfigurationError, match="API key is required"):
            EmbedderFactory.create(config)

    def test_create_hash_embedder(self):
        embedder = EmbedderFactory.create(EmbedderConfig(provider="hash", dimension=32))

        assert isinstance(embedder, HashEmbedder)
        assert embedder.dimension == 32

    def test_hash_embedder_default_dimension(self):
        embedder = EmbedderFactory.create(EmbedderConfig(provider="hash"))

        assert embedder.dimension == DEFAULT_HASH_DIMENSION

    def test_unsupported_provider_raises_error(self):
        """Test that unsupported provider raises error."""
        with pytest.raises(ConfigurationError, match="Unsupported embedder provider"):
            EmbedderFactory.create(EmbedderConfig(provider="unsupported"))


@pytest.mark.unit
@pytest.mark.asyncio
class TestEmbedderDimension:
    """Test dimension resolution."""

    async def test_dimension_from_config(self):
        config = EmbedderConfig(provider="hash", dimension=48)
        embedder = HashEmbedder(dimension=16)

        assert await EmbedderFactory.get_dimension(embedder, config) == 48

    async def test_dimension_from_embedder(self):
        embedder = HashEmbedder(dimension=16)

        assert await EmbedderFactory.get_dimension(embedder) == 16
