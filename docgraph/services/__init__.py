"""
Services for docgraph.

High-level services:
- QueryEngine: Unified interface for ingestion and question answering
- DocumentIngestionService: Document → graph → embedded memories
- HybridRetriever: Primary vector search plus escalation-gated supplement
- SearchAgent: Secondary similarity search with key-term expansion
- EscalationPolicy: Heuristic gate for the search-agent pass
- AnswerGenerator: Cited answers from retrieved context
"""

from docgraph.services.answer import AnswerGenerator, build_prompt, build_query_context
from docgraph.services.escalation import EscalationPolicy, iter_key_terms, should_escalate
from docgraph.services.ingestion import DocumentIngestionService
from docgraph.services.query_engine import QueryEngine
from docgraph.services.retrieval import HybridRetriever, merge_units
from docgraph.services.search_agent import SearchAgent

__all__ = [
    "QueryEngine",
    "DocumentIngestionService",
    "HybridRetriever",
    "merge_units",
    "SearchAgent",
    "EscalationPolicy",
    "should_escalate",
    "iter_key_terms",
    "AnswerGenerator",
    "build_query_context",
    "build_prompt",
]
