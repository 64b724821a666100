"""
QueryEngine: the single entry point wiring ingestion, retrieval and answering.

Usage:
    engine = QueryEngine.from_config(Config.from_env())
    await engine.ingest("user-1", "report.pdf", pages)
    answer = await engine.query("user-1", "Why did revenue grow?", file_id="report.pdf")
"""

from collections.abc import Iterable, Sequence
from typing import Any

from docgraph.config import Config
from docgraph.core.embeddings.base import Embedder
from docgraph.core.factory.embedder_factory import EmbedderFactory
from docgraph.core.factory.llm_factory import LLMFactory
from docgraph.core.graph.registry import GraphRegistry
from docgraph.core.llm.base import LLMProvider
from docgraph.core.memory_store.base import MemoryStore
from docgraph.core.memory_store.in_memory import InMemoryMemoryStore
from docgraph.models.document import ImageInput, IngestionSummary, PageInput
from docgraph.models.memory import INTERACTION_TYPE, TYPE_KEY
from docgraph.models.retrieval import QueryAnswer
from docgraph.services.answer import AnswerGenerator, build_query_context
from docgraph.services.ingestion import DocumentIngestionService
from docgraph.services.retrieval import HybridRetriever
from docgraph.utils.logger import get_logger, setup_logging

logger = get_logger(__name__)


class QueryEngine:
    """
    Facade over ingestion, hybrid retrieval and answer generation.

    Construct once at startup; all collaborators are shared across requests.
    """

    def __init__(
        self,
        memory_store: MemoryStore,
        embedder: Embedder,
        llm: LLMProvider,
        config: Config | None = None,
    ):
        """
        Initialize query engine.

        Args:
            memory_store: Shared memory store
            embedder: Embedder for ingestion and queries
            llm: LLM provider for answers
            config: Configuration (defaults if not provided)
        """
        self.config = config or Config()
        self.memory_store = memory_store
        self.embedder = embedder
        self.llm = llm
        self.graph_registry = GraphRegistry()

        self.ingestion = DocumentIngestionService(
            memory_store, embedder, self.config, graph_registry=self.graph_registry
        )
        self.retriever = HybridRetriever(
            memory_store, embedder, self.config, graph_registry=self.graph_registry
        )
        self.answer_generator = AnswerGenerator(llm, self.config)

    @classmethod
    def from_config(cls, config: Config | None = None) -> "QueryEngine":
        """
        Build an engine with providers created from configuration.

        Also configures logging from `config.logging`; call once at startup.

        Args:
            config: Configuration (defaults if not provided)

        Returns:
            QueryEngine backed by an in-memory store

        Raises:
            ConfigurationError: If a provider is not supported
        """
        config = config or Config()
        setup_logging(
            level=config.logging.level,
            log_to_file=config.logging.log_to_file,
            log_dir=config.logging.log_dir,
            file_rotation=config.logging.file_rotation,
            file_retention=config.logging.file_retention,
            compression=config.logging.compression,
            serialize=config.logging.serialize,
        )
        return cls(
            memory_store=InMemoryMemoryStore(),
            embedder=EmbedderFactory.create(config.embedder),
            llm=LLMFactory.create(config.llm),
            config=config,
        )

    async def ingest(
        self,
        user_id: str | None,
        document_id: str,
        pages: Sequence[PageInput | dict[str, Any]],
        chunks: Sequence[str] | None = None,
        images: Iterable[ImageInput | dict[str, Any]] | None = None,
    ) -> IngestionSummary:
        """Ingest a document; a missing user_id falls back to the default user."""
        return await self.ingestion.ingest(
            user_id or self.config.default_user_id, document_id, pages, chunks, images
        )

    async def query(self, user_id: str | None, query: str, file_id: str | None = None) -> QueryAnswer:
        """
        Answer a query from the user's documents and profile.

        Args:
            user_id: Owner user ID (default user if None)
            query: Natural-language query
            file_id: Optional document id scoping graph expansion

        Returns:
            QueryAnswer with provenance

        Raises:
            RetrievalInputError: If the query is empty
            RetrievalError: If primary retrieval fails
            LLMError: If answer generation fails
        """
        user_id = user_id or self.config.default_user_id

        result = await self.retriever.retrieve(user_id, query, file_id=file_id)
        context = build_query_context(query, result.profile, result, self.config)
        answer = await self.answer_generator.generate(context)

        await self.memory_store.upsert(
            user_id,
            f"Query: {query}\nAnswer: {answer}",
            None,
            {TYPE_KEY: INTERACTION_TYPE},
        )

        logger.info(
            f"Answered query with {len(result.units)} context units",
            extra={
                "user_id": user_id,
                "file_id": file_id,
                "used_search_agent": result.used_search_agent,
            },
        )

        return QueryAnswer(
            answer=answer,
            provenance=result.provenance,
            context_units=len(result.units),
            used_search_agent=result.used_search_agent,
        )

    async def close(self):
        """Close providers and the memory store."""
        await self.embedder.close()
        await self.llm.close()
        await self.memory_store.close()
