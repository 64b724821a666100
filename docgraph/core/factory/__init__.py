"""
Factory modules for creating docgraph providers.

Provides modular factories for the LLM and the Embedder.
"""

from docgraph.core.factory.embedder_factory import EmbedderFactory
from docgraph.core.factory.llm_factory import LLMFactory

__all__ = [
    "LLMFactory",
    "EmbedderFactory",
]
