"""
Process-local registry of built graphs, keyed by owner and document id.

Node ids derive from the document id alone, so two users ingesting the same
document id produce colliding ids. Each user's graph is kept under its own
key and is only ever handed back to that user.
"""

from docgraph.models.graph import Graph
from docgraph.utils.logger import get_logger

logger = get_logger(__name__)


class GraphRegistry:
    """Keeps the most recent graph per (user, document) for file-scoped retrieval."""

    def __init__(self):
        self._graphs: dict[tuple[str, str], Graph] = {}

    def register(self, user_id: str, document_id: str, graph: Graph) -> None:
        """
        Store (or replace) a user's graph for a document.

        Args:
            user_id: Owner of the processing run that built the graph
            document_id: Document identifier
            graph: Built graph
        """
        key = (user_id, document_id)
        replaced = key in self._graphs
        self._graphs[key] = graph
        logger.debug(
            f"Graph registered for {document_id}",
            extra={"user_id": user_id, "document_id": document_id, "replaced": replaced},
        )

    def get(self, user_id: str, document_id: str) -> Graph | None:
        """The user's graph for a document, or None (other users' graphs are never returned)."""
        return self._graphs.get((user_id, document_id))

    def remove(self, user_id: str, document_id: str) -> None:
        self._graphs.pop((user_id, document_id), None)

    def documents(self, user_id: str) -> list[str]:
        """Document ids with a registered graph for this user, in registration order."""
        return [document_id for owner, document_id in self._graphs if owner == user_id]

    def __contains__(self, key: tuple[str, str]) -> bool:
        return key in self._graphs

    def __len__(self) -> int:
        return len(self._graphs)
