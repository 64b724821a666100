"""
Escalation policy for the search-agent pass.

The policy is a heuristic gate: skipping escalation is never an error.
It is kept separate from the retrieval flow so it can be tuned or replaced
without touching orchestration code.
"""

from collections.abc import Iterator

from docgraph.config import EscalationConfig
from docgraph.models.retrieval import EscalationDecision

STOP_WORDS = frozenset(
    {
        "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for",
        "of", "with", "by", "from", "as", "is", "was", "are", "were", "be",
        "been", "being", "have", "has", "had", "do", "does", "did", "will",
        "would", "should", "could", "may", "might", "must", "can", "this",
        "that", "these", "those", "what", "which", "who", "whom", "whose",
        "where", "when", "why", "how", "about", "into", "through", "during",
        "before", "after", "above", "below", "up", "down", "out", "off",
        "over", "under", "again", "further", "then", "once",
    }
)  # fmt: skip


class EscalationPolicy:
    """
    Decides whether primary vector results should be supplemented.

    Escalates when any of these hold:
    - the query contains an interrogative term (case-insensitive substring)
    - the query has more than `max_query_tokens` whitespace-delimited tokens
    - fewer than `min_primary_units` primary units were found
    """

    def __init__(self, config: EscalationConfig | None = None):
        self.config = config or EscalationConfig()

    def evaluate(self, query: str, primary_count: int) -> EscalationDecision:
        """
        Evaluate the heuristic.

        Args:
            query: User query text
            primary_count: Number of units the primary pass produced

        Returns:
            Decision with one reason per rule that fired
        """
        reasons = []

        lowered = query.lower()
        matched = [word for word in self.config.question_words if word in lowered]
        if matched:
            reasons.append(f"question word: {matched[0]}")

        token_count = len(query.split())
        if token_count > self.config.max_query_tokens:
            reasons.append(f"complex query: {token_count} tokens")

        if primary_count < self.config.min_primary_units:
            reasons.append(f"sparse context: {primary_count} primary units")

        return EscalationDecision(escalate=bool(reasons), reasons=reasons)


def should_escalate(query: str, primary_count: int, config: EscalationConfig | None = None) -> bool:
    """Boolean shortcut for EscalationPolicy.evaluate()."""
    return EscalationPolicy(config).evaluate(query, primary_count).escalate


def iter_key_terms(query: str, limit: int = 5) -> Iterator[str]:
    """
    Lazily yield key terms from a query, in query order.

    Key terms are lower-cased tokens longer than 3 characters that are not
    stop words. At most `limit` terms are yielded; callers stop pulling as
    soon as they have enough results.

    Args:
        query: User query text
        limit: Maximum number of terms

    Yields:
        Key terms
    """
    yielded = 0
    for word in query.lower().split():
        if yielded >= limit:
            return
        if len(word) > 3 and word not in STOP_WORDS:
            yielded += 1
            yield word
