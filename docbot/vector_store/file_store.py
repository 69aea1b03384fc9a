"""
File-backed VectorStore: append-only JSON lines with exhaustive cosine search.
"""

from __future__ import annotations

import heapq
import logging
from collections import Counter
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterator, List, Sequence, Tuple

from docbot.vector_store.base import VectorStore
from docbot.vector_store.codec import decode_document, encode_document
from docbot.vector_store.document import Document
from docbot.vector_store.errors import DimensionMismatchError, MissingEmbeddingError
from docbot.vector_store.line_store import LineStore
from docbot.vector_store.similarity import cosine_distance, similarity_from_distance

DEFAULT_STORE_NAME = "neuron"
DEFAULT_STORE_EXT = ".store"
DEFAULT_TOP_K = 4

logger = logging.getLogger(__name__)

SourceKey = Tuple[str, str]


@dataclass(frozen=True)
class FileVectorStoreConfig:
    directory: str | Path
    name: str = DEFAULT_STORE_NAME
    ext: str = DEFAULT_STORE_EXT
    top_k: int = DEFAULT_TOP_K

    @property
    def file_path(self) -> Path:
        return Path(self.directory) / f"{self.name}{self.ext}"

    @property
    def tmp_file_path(self) -> Path:
        return Path(self.directory) / f"{self.name}_tmp{self.ext}"


class FileVectorStore(VectorStore):
    def __init__(self, config: FileVectorStoreConfig) -> None:
        self.config = config
        self.lines = LineStore(config.file_path, config.tmp_file_path)

    @property
    def file_path(self) -> Path:
        return self.config.file_path

    # --- Writes ---
    def add_document(self, document: Document) -> None:
        self.add_documents([document])

    def add_documents(self, documents: Sequence[Document]) -> None:
        # Encode everything before touching the file so a bad document appends nothing.
        encoded = [encode_document(doc) for doc in documents]
        if not encoded:
            return
        self.lines.append(encoded)
        logger.info("Appended documents", extra={"count": len(encoded), "path": str(self.file_path)})

    def delete_by_source(self, source_type: str, source_name: str) -> int:
        removed = self._compact(drop={(source_type, source_name)}, additions=[])
        logger.info(
            "Deleted documents by source",
            extra={"source_type": source_type, "source_name": source_name, "removed": removed},
        )
        return removed

    def reindex_by_source(self, documents: Sequence[Document]) -> None:
        """
        Replace every source present in ``documents`` with exactly those documents.

        Stale records of the touched sources are dropped and the new ones
        appended in the same compaction pass, so an interruption leaves
        either the old file or the new one.
        """
        if not documents:
            return

        grouped: Dict[SourceKey, List[Document]] = {}
        for doc in documents:
            grouped.setdefault(doc.source, []).append(doc)

        additions = [encode_document(doc) for group in grouped.values() for doc in group]
        removed = self._compact(drop=set(grouped), additions=additions)
        logger.info(
            "Reindexed sources",
            extra={"sources": len(grouped), "removed": removed, "added": len(additions), "path": str(self.file_path)},
        )

    def _compact(self, drop: set[SourceKey], additions: List[str]) -> int:
        stats = {"removed": 0, "invalid": 0}

        def survivors() -> Iterator[str]:
            for line in self.lines.read_lines():
                doc = decode_document(line)
                if doc is None:
                    stats["invalid"] += 1
                    continue
                if doc.source in drop:
                    stats["removed"] += 1
                    continue
                yield line
            yield from additions

        self.lines.atomic_replace(survivors())
        if stats["invalid"]:
            logger.warning(
                "Dropped undecodable records during compaction",
                extra={"count": stats["invalid"], "path": str(self.file_path)},
            )
        return stats["removed"]

    # --- Reads ---
    def iter_documents(self) -> Iterator[Document]:
        for line in self.lines.read_lines():
            doc = decode_document(line)
            if doc is not None:
                yield doc

    def count(self) -> int:
        return sum(1 for _ in self.iter_documents())

    def sources(self) -> List[Tuple[SourceKey, int]]:
        counter: Counter = Counter(doc.source for doc in self.iter_documents())
        return list(counter.items())

    def similarity_search(self, query_embedding: Sequence[float], top_k: int | None = None) -> List[Document]:
        """
        Return the ``top_k`` stored documents closest to ``query_embedding``.

        Streams the whole file once and keeps at most ``top_k`` candidates.
        Results are ordered by ascending cosine distance, ties by file order,
        with ``score`` set to the similarity.
        """
        limit = self.config.top_k if top_k is None else top_k
        if limit <= 0:
            return []

        # Max-heap on (distance, position) via negation: the root is the worst kept candidate.
        heap: List[Tuple[float, int, Document]] = []
        for position, doc in enumerate(self.iter_documents()):
            if not doc.embedding:
                raise MissingEmbeddingError(content=doc.content, document_id=doc.id)
            try:
                distance = cosine_distance(query_embedding, doc.embedding)
            except DimensionMismatchError as exc:
                raise DimensionMismatchError(
                    expected=exc.expected,
                    actual=exc.actual,
                    detail=f"document {doc.id} in {self.file_path}",
                ) from exc

            doc.score = similarity_from_distance(distance)
            entry = (-distance, -position, doc)
            if len(heap) < limit:
                heapq.heappush(heap, entry)
            elif entry[:2] > heap[0][:2]:
                heapq.heapreplace(heap, entry)

        ranked = sorted(heap, key=lambda item: (-item[0], -item[1]))
        return [doc for _, _, doc in ranked]


__all__ = ["FileVectorStore", "FileVectorStoreConfig", "DEFAULT_STORE_NAME", "DEFAULT_STORE_EXT", "DEFAULT_TOP_K"]
