"""
Text chunking utilities.
"""

from __future__ import annotations

from typing import List

from docbot.config import settings
from docbot.embeddings.client import MIN_EMBED_CHARS
from docbot.vector_store.document import Document

CHUNK_SIZE_CHARS = settings.chunk_size_chars
CHUNK_WORD_OVERLAP = settings.chunk_word_overlap
CHUNK_SEPARATOR = settings.chunk_separator


def _split_sentences(text: str, separator: str) -> List[str]:
    """Split on the separator, keeping it attached to the sentence it ends."""
    parts = text.split(separator)
    sentences = [p + separator for p in parts[:-1]]
    if parts[-1]:
        sentences.append(parts[-1])
    return [s.strip() for s in sentences if s.strip()]


def _hard_split(sentence: str, max_length: int) -> List[str]:
    pieces = [sentence[i : i + max_length] for i in range(0, len(sentence), max_length)]
    # A tail too short to embed rides along with the previous slice.
    if len(pieces) > 1 and len(pieces[-1]) < MIN_EMBED_CHARS:
        tail = pieces.pop()
        pieces[-1] += tail
    return pieces


def _overlap_tail(chunk: str, words: int) -> str:
    if words <= 0:
        return ""
    return " ".join(chunk.split()[-words:])


def split_text(
    text: str,
    max_length: int = CHUNK_SIZE_CHARS,
    separator: str = CHUNK_SEPARATOR,
    word_overlap: int = CHUNK_WORD_OVERLAP,
) -> List[str]:
    text = text.strip()
    if not text:
        return []
    if len(text) <= max_length:
        return [text]

    pieces: List[str] = []
    for sentence in _split_sentences(text, separator):
        if len(sentence) > max_length:
            pieces.extend(_hard_split(sentence, max_length))
        else:
            pieces.append(sentence)

    chunks: List[str] = []
    current = ""
    for piece in pieces:
        candidate = f"{current} {piece}" if current else piece
        if current and len(candidate) > max_length:
            chunks.append(current)
            tail = _overlap_tail(current, word_overlap)
            current = f"{tail} {piece}" if tail else piece
        else:
            current = candidate
    if current:
        if chunks and len(current) < MIN_EMBED_CHARS:
            chunks[-1] = f"{chunks[-1]} {current}"
        else:
            chunks.append(current)
    return chunks


def split_document(
    document: Document,
    max_length: int = CHUNK_SIZE_CHARS,
    separator: str = CHUNK_SEPARATOR,
    word_overlap: int = CHUNK_WORD_OVERLAP,
) -> List[Document]:
    chunks: List[Document] = []
    for chunk_index, text in enumerate(split_text(document.content, max_length, separator, word_overlap)):
        metadata = {**document.metadata, "chunk_index": chunk_index}
        chunks.append(
            Document(
                content=text,
                source_type=document.source_type,
                source_name=document.source_name,
                metadata=metadata,
            )
        )
    return chunks


__all__ = ["split_text", "split_document", "CHUNK_SIZE_CHARS", "CHUNK_WORD_OVERLAP", "CHUNK_SEPARATOR"]
