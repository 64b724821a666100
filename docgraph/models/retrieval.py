"""
Retrieval result models.

SearchResult and EscalationDecision are transient; QueryContext is the
hand-off to the answer generator.
"""

from typing import Any

from pydantic import BaseModel, Field

from docgraph.models.graph import GraphNode, NodeType
from docgraph.models.memory import Memory, UserProfile


class SearchResult(BaseModel):
    """A unit found by the search-agent pass."""

    content: str
    metadata: dict[str, Any] = Field(default_factory=dict)
    relevance_score: float = 0.0
    source: str


class ProvenanceRecord(BaseModel):
    """Ties a retrieved unit back to its originating document/page."""

    source: str
    type: NodeType
    page_number: int | None = None


class EscalationDecision(BaseModel):
    """Outcome of the escalation policy, with the rules that fired."""

    escalate: bool
    reasons: list[str] = Field(default_factory=list)

    def __bool__(self) -> bool:
        return self.escalate


class RetrievalResult(BaseModel):
    """Ranked context units plus provenance for one query."""

    units: list[GraphNode] = Field(default_factory=list)
    provenance: list[ProvenanceRecord] = Field(default_factory=list)
    used_search_agent: bool = False
    escalation: EscalationDecision
    profile: UserProfile


class QueryContext(BaseModel):
    """Everything the answer generator receives."""

    query: str
    profile_memories: list[Memory] = Field(default_factory=list)
    units: list[GraphNode] = Field(default_factory=list)
    provenance: list[ProvenanceRecord] = Field(default_factory=list)


class QueryAnswer(BaseModel):
    """Answer returned to the caller of QueryEngine.query()."""

    answer: str
    provenance: list[ProvenanceRecord] = Field(default_factory=list)
    context_units: int = 0
    used_search_agent: bool = False
