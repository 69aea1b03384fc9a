"""
Vector store interface.
"""

from __future__ import annotations

from typing import List, Protocol, Sequence

from docbot.vector_store.document import Document


class VectorStore(Protocol):
    def add_documents(self, documents: Sequence[Document]) -> None:
        ...

    def delete_by_source(self, source_type: str, source_name: str) -> int:
        ...

    def reindex_by_source(self, documents: Sequence[Document]) -> None:
        ...

    def similarity_search(self, query_embedding: Sequence[float], top_k: int | None = None) -> List[Document]:
        ...


__all__ = ["Document", "VectorStore"]
