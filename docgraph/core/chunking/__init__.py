"""Text chunking."""

from docgraph.core.chunking.chunker import chunk_text

__all__ = ["chunk_text"]
