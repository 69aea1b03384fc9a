"""
Document value type stored in and returned by the vector store.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List


def _new_id() -> str:
    return uuid.uuid4().hex


@dataclass
class Document:
    content: str
    embedding: List[float] = field(default_factory=list)
    source_type: str = "manual"
    source_name: str = "manual"
    id: str = field(default_factory=_new_id)
    metadata: Dict[str, Any] = field(default_factory=dict)
    # Only populated on search results, never persisted.
    score: float | None = None

    @property
    def source(self) -> tuple[str, str]:
        return (self.source_type, self.source_name)

    def add_metadata(self, key: str, value: Any) -> "Document":
        self.metadata[key] = value
        return self


__all__ = ["Document"]
