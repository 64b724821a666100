"""
Embedder abstraction layer for text embeddings.

Supported providers:
- Ollama (native SDK)
- OpenAI (official SDK)
- Hash (deterministic, offline)
"""
from docgraph.core.embeddings.base import Embedder
from docgraph.core.embeddings.hashing import HashEmbedder
from docgraph.core.embeddings.ollama import OllamaEmbedder
from docgraph.core.embeddings.openai import OpenAIEmbedder

__all__ = [
    "Embedder",
    "HashEmbedder",
    "OllamaEmbedder",
    "OpenAIEmbedder",
]
