"""
Document decomposition models.

These are the shapes handed over by the (external) PDF extraction step:
per-page text with the page's images, plus a flat list of text chunks.
"""

from pydantic import BaseModel, Field


class ImageInput(BaseModel):
    """An image extracted from a page, optionally with OCR text."""

    model_config = {"extra": "ignore"}

    image_id: str
    ocr_text: str | None = None
    page_number: int | None = None


class PageInput(BaseModel):
    """One extracted page."""

    model_config = {"extra": "ignore"}

    page_number: int
    text: str = ""
    images: list[ImageInput] = Field(default_factory=list)


class IngestionSummary(BaseModel):
    """Result of ingesting one document."""

    document_id: str
    total_pages: int = Field(default=0, ge=0)
    total_chunks: int = Field(default=0, ge=0)
    total_images: int = Field(default=0, ge=0)
    total_nodes: int = Field(default=0, ge=0)
    total_edges: int = Field(default=0, ge=0)
    stored_memories: int = Field(default=0, ge=0)
    processing_time_ms: float = Field(default=0.0, ge=0)
