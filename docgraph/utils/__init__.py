"""Utility modules for docgraph."""

from docgraph.utils.exceptions import (
    ConfigurationError,
    DocGraphError,
    EmbeddingError,
    GraphConstructionError,
    LLMError,
    NotFoundError,
    RetrievalError,
    RetrievalInputError,
    StoreError,
    StoreUnavailableError,
    ValidationError,
)
from docgraph.utils.id_generator import (
    chunk_node_id,
    document_node_id,
    edge_id,
    generate_memory_id,
    image_node_id,
    page_node_id,
)
from docgraph.utils.logger import get_logger, setup_logging

__all__ = [
    # Logging
    "get_logger",
    "setup_logging",
    # ID Generators
    "generate_memory_id",
    "document_node_id",
    "page_node_id",
    "chunk_node_id",
    "image_node_id",
    "edge_id",
    # Exceptions
    "DocGraphError",
    "StoreError",
    "StoreUnavailableError",
    "ValidationError",
    "RetrievalError",
    "RetrievalInputError",
    "NotFoundError",
    "ConfigurationError",
    "EmbeddingError",
    "GraphConstructionError",
    "LLMError",
]
