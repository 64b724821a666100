"""
Answer generation from retrieved context.

The prompt lists the query, a few profile memories, the retrieved units and
a numbered source list so the model can cite where each fact came from.
"""

from docgraph.config import Config
from docgraph.core.llm.base import LLMProvider
from docgraph.models.memory import UserProfile
from docgraph.models.retrieval import QueryContext, RetrievalResult
from docgraph.utils.exceptions import DocGraphError, LLMError
from docgraph.utils.logger import get_logger

logger = get_logger(__name__)

ANSWER_SYSTEM_PROMPT = (
    "You are a helpful assistant that answers questions based on the provided "
    "context from PDF documents. Always cite your sources using the provenance "
    "information provided."
)

NO_RESPONSE = "No response generated"


def build_query_context(
    query: str,
    profile: UserProfile,
    result: RetrievalResult,
    config: Config | None = None,
) -> QueryContext:
    """
    Assemble the answer context from a profile and a retrieval result.

    Args:
        query: User query
        profile: User profile (graph-derived memories are excluded)
        result: Retrieval result
        config: Configuration for the context caps

    Returns:
        QueryContext with bounded units and profile memories
    """
    retrieval_config = (config or Config()).retrieval
    return QueryContext(
        query=query,
        profile_memories=profile.context_memories(retrieval_config.max_profile_memories),
        units=result.units[: retrieval_config.max_context_units],
        provenance=result.provenance,
    )


def _truncate(content: str, max_chars: int) -> str:
    if len(content) > max_chars:
        return content[:max_chars] + "..."
    return content


def build_prompt(context: QueryContext, max_chars: int = 500) -> str:
    """
    Render the structured answer prompt.

    Args:
        context: Query context
        max_chars: Per-unit content limit; longer content is cut and marked "..."

    Returns:
        Prompt text
    """
    lines = [f"User Query: {context.query}", ""]

    if context.profile_memories:
        lines.append("User Profile Context:")
        for idx, memory in enumerate(context.profile_memories, start=1):
            lines.append(f"{idx}. {memory.content}")
        lines.append("")

    if context.units:
        lines.append("Relevant Document Context:")
        for unit in context.units:
            lines.append(f"[{unit.type.value}] {_truncate(unit.content, max_chars)}")
            if unit.metadata.page_number:
                lines.append(f"  (Page {unit.metadata.page_number})")
            lines.append("")

    if context.provenance:
        lines.append("Sources:")
        for idx, record in enumerate(context.provenance, start=1):
            page = f" (Page {record.page_number})" if record.page_number else ""
            lines.append(f"{idx}. {record.type.value}{page} - {record.source}")

    lines.append("")
    lines.append(
        "Please answer the user's query based on the context provided above. "
        "If the information is not available in the context, say so clearly."
    )
    return "\n".join(lines)


class AnswerGenerator:
    """
    Turns a QueryContext into a cited answer with an LLM.
    """

    def __init__(self, llm: LLMProvider, config: Config | None = None):
        """
        Initialize answer generator.

        Args:
            llm: LLM provider
            config: Configuration (sampling parameters, truncation limit)
        """
        self.llm = llm
        self.config = config or Config()

    async def generate(self, context: QueryContext) -> str:
        """
        Generate an answer for the given context.

        Args:
            context: Query context

        Returns:
            Answer text

        Raises:
            LLMError: If the LLM call fails
        """
        prompt = build_prompt(context, self.config.retrieval.content_char_limit)

        try:
            answer = await self.llm.complete(
                prompt,
                system_prompt=ANSWER_SYSTEM_PROMPT,
                max_tokens=self.config.llm.max_tokens,
                temperature=self.config.llm.temperature,
            )
        except LLMError:
            raise
        except DocGraphError as e:
            raise LLMError(f"Answer generation failed: {e}", context=e.context) from e
        except Exception as e:
            logger.error(
                f"Answer generation failed: {e!r}",
                extra={"error": repr(e), "error_type": type(e).__name__},
            )
            raise LLMError(f"Answer generation failed: {e}") from e

        return answer or NO_RESPONSE
