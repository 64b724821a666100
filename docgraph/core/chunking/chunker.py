"""
Fixed-size text chunking with overlap.
"""

from docgraph.utils.exceptions import ValidationError


def chunk_text(text: str, chunk_size: int = 1000, overlap: int = 200) -> list[str]:
    """
    Split text into overlapping character windows.

    Each window starts `chunk_size - overlap` characters after the previous
    one. Windows are stripped and empty ones dropped.

    Args:
        text: Text to split
        chunk_size: Window length in characters
        overlap: Characters shared by consecutive windows

    Returns:
        List of chunk strings

    Raises:
        ValidationError: If chunk_size is not positive or overlap is out of range
    """
    if chunk_size <= 0:
        raise ValidationError("chunk_size must be positive")
    if overlap < 0 or overlap >= chunk_size:
        raise ValidationError("overlap must be in [0, chunk_size)")

    chunks = []
    start = 0
    while start < len(text):
        end = min(start + chunk_size, len(text))
        chunk = text[start:end].strip()
        if chunk:
            chunks.append(chunk)
        if end == len(text):
            break
        start = end - overlap
    return chunks
