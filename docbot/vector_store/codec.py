"""
Line codec: one Document per line of the store file, as a JSON object.
"""

from __future__ import annotations

import json
from typing import Any, Dict

from docbot.vector_store.document import Document


def encode_document(document: Document) -> str:
    """
    Serialize a document to a single line (no trailing newline).

    ASCII-only JSON escapes every line terminator inside strings, so the
    result is always exactly one line. ``score`` is not persisted.
    """
    record: Dict[str, Any] = {
        "content": document.content,
        "embedding": [float(v) for v in document.embedding],
        "sourceType": document.source_type,
        "sourceName": document.source_name,
        "id": document.id,
        "metadata": document.metadata,
    }
    return json.dumps(record, ensure_ascii=True)


def decode_document(line: str) -> Document | None:
    """Parse one stored line; ``None`` marks a blank or malformed record."""
    if not line or not line.strip():
        return None
    try:
        record = json.loads(line)
    except (json.JSONDecodeError, ValueError):
        return None

    if not isinstance(record, dict) or not isinstance(record.get("content"), str):
        return None

    embedding = record.get("embedding") or []
    metadata = record.get("metadata") or {}
    if not isinstance(embedding, list) or not isinstance(metadata, dict):
        return None

    raw_id = record.get("id")
    return Document(
        content=record["content"],
        embedding=embedding,
        source_type=str(record.get("sourceType") or ""),
        source_name=str(record.get("sourceName") or ""),
        id="" if raw_id is None else str(raw_id),
        metadata=metadata,
    )


__all__ = ["encode_document", "decode_document"]
