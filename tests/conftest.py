"""
Shared test fixtures for all test modules.

Everything here runs without external services: the hashing embedder gives
deterministic vectors and the fake LLM echoes a fixed answer.
"""

import pytest

from docgraph.config import Config
from docgraph.core.embeddings.base import Embedder
from docgraph.core.embeddings.hashing import HashEmbedder
from docgraph.core.llm.base import LLMProvider
from docgraph.core.memory_store.in_memory import InMemoryMemoryStore
from docgraph.models.document import ImageInput, PageInput


class RecordingEmbedder(Embedder):
    """Hash embedder that records every text it embeds."""

    def __init__(self, dimension: int = 64):
        self.inner = HashEmbedder(dimension=dimension)
        self.calls: list[str] = []

    async def embed(self, text: str, **kwargs) -> list[float]:
        self.calls.append(text)
        return await self.inner.embed(text)

    async def close(self):
        pass


class FailingEmbedder(Embedder):
    """Embedder whose every call fails."""

    def __init__(self):
        self.calls = 0

    async def embed(self, text: str, **kwargs) -> list[float]:
        self.calls += 1
        raise RuntimeError("embedding service down")

    async def close(self):
        pass


class FakeLLM(LLMProvider):
    """LLM returning a fixed answer and keeping the last prompt."""

    def __init__(self, answer: str = "The report says revenue grew."):
        self.answer = answer
        self.prompts: list[str] = []
        self.system_prompts: list[str | None] = []
        self.closed = False

    async def complete(self, prompt, system_prompt=None, max_tokens=2000, temperature=0.7, **kwargs):
        self.prompts.append(prompt)
        self.system_prompts.append(system_prompt)
        return self.answer

    async def close(self):
        self.closed = True


@pytest.fixture
def config():
    """Default configuration."""
    return Config()


@pytest.fixture
def memory_store():
    """Fresh in-memory store."""
    return InMemoryMemoryStore()


@pytest.fixture
def embedder():
    """Deterministic embedder recording its inputs."""
    return RecordingEmbedder()


@pytest.fixture
def failing_embedder():
    """Embedder that always raises."""
    return FailingEmbedder()


@pytest.fixture
def fake_llm():
    """LLM with a canned answer."""
    return FakeLLM()


@pytest.fixture
def sample_pages():
    """Two extracted pages; page 2 carries a chart with OCR text."""
    return [
        PageInput(page_number=1, text="Quarterly revenue growth exceeded expectations."),
        PageInput(
            page_number=2,
            text="Operating margins improved across regions.",
            images=[ImageInput(image_id="img1", ocr_text="Revenue chart 2024")],
        ),
    ]


@pytest.fixture
def sample_chunks():
    """Four chunks; chunks 0 and 2 land on page 1, chunks 1 and 3 on page 2."""
    return [
        "quarterly revenue growth exceeded analyst expectations strongly",
        "operating margins improved across regions this quarter",
        "revenue growth exceeded analyst forecasts again",
        "the revenue chart 2024 shows steady operating margins",
    ]
