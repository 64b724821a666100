"""
Custom exception hierarchy for docgraph.

Provides structured error types for ingestion and retrieval.
All exceptions inherit from DocGraphError for easy catching.
"""


class DocGraphError(Exception):
    """
    Base exception for all docgraph errors.
    All custom exceptions should inherit from this class.
    """

    def __init__(self, message: str, context: dict | None = None):
        """
        Initialize docgraph error.
        Args:
            message: Error message
            context: Optional context dictionary with additional error details
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}


class StoreError(DocGraphError):
    """
    Base exception for memory store operations.
    """

    pass


class StoreUnavailableError(StoreError):
    """
    Memory store read/write failure.
    Fatal for the operation that hit it; surfaced to the caller.
    """

    pass


class ValidationError(DocGraphError):
    """
    Validation errors.
    Raised when input validation fails or data is invalid.
    """

    pass


class RetrievalError(DocGraphError):
    """
    Retrieval failed.
    Raised when the primary pass (query embedding or similarity search) fails.
    No partial results accompany this error.
    """

    pass


class RetrievalInputError(RetrievalError, ValidationError):
    """
    Invalid retrieval request (e.g. empty query).
    Raised before any embedding call is made.
    """

    pass


class NotFoundError(DocGraphError):
    """
    Resource not found errors.
    """

    pass


class ConfigurationError(DocGraphError):
    """
    Configuration errors.
    Raised when configuration is invalid or missing required values.
    """

    pass


class EmbeddingError(DocGraphError):
    """
    Embedding generation errors.
    Raised when embedding generation fails.
    """

    pass


class GraphConstructionError(DocGraphError):
    """
    Graph construction errors.
    Well-formed input never raises this; malformed records degrade to empty content.
    """

    pass


class LLMError(DocGraphError):
    """
    LLM operation errors.
    Raised when LLM operations fail (API errors, timeouts, etc.).
    """

    pass
