"""
Indexing pipeline: load documents, tag, chunk, embed, and reindex by source.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List

from openai import OpenAIError
from tqdm import tqdm

from docbot.config import settings
from docbot.embeddings.client import EmbeddingsClient
from docbot.indexing.chunker import split_document
from docbot.indexing.loader import DOCUMENTS_DIR, load_documents
from docbot.vector_store.base import VectorStore
from docbot.vector_store.document import Document

logger = logging.getLogger(__name__)


@dataclass
class ReindexSummary:
    documents: int
    chunks: int
    failed_embeddings: int
    elapsed_sec: float


def tag_documents(
    documents: List[Document],
    source_labels: Dict[str, str] | None = None,
    default_label: str | None = None,
) -> None:
    labels = settings.source_labels if source_labels is None else source_labels
    fallback = settings.default_source_label if default_label is None else default_label
    uploaded_at = datetime.now(timezone.utc).isoformat()
    for doc in documents:
        doc.add_metadata("source", labels.get(doc.source_name, fallback))
        doc.add_metadata("uploaded_at", uploaded_at)


def embed_documents(documents: List[Document], embeddings_client: EmbeddingsClient, embed_batch: int = 64) -> int:
    """
    Fill ``embedding`` on each document; returns how many were left without one.

    A failed batch is logged and skipped so the rest of the corpus is still
    indexed; its documents keep an empty embedding.
    """
    for i in tqdm(range(0, len(documents), embed_batch), desc="Embedding", unit="batch"):
        batch = documents[i : i + embed_batch]
        try:
            vectors = embeddings_client.embed_texts([d.content for d in batch])
        except OpenAIError:
            logger.exception("Embedding batch failed", extra={"offset": i, "count": len(batch)})
            continue
        for doc, vector in zip(batch, vectors):
            doc.embedding = vector

    failed = sum(1 for d in documents if not d.embedding)
    if failed:
        logger.warning("Documents without embedding", extra={"count": failed})
    return failed


def reindex_documents(
    vector_store: VectorStore,
    embeddings_client: EmbeddingsClient,
    documents_dir: str | Path = DOCUMENTS_DIR,
    embed_batch: int = 64,
) -> ReindexSummary:
    started = time.time()

    documents = load_documents(documents_dir)
    tag_documents(documents)

    chunks: List[Document] = []
    for doc in documents:
        chunks.extend(split_document(doc))
    logger.info("Loaded documents", extra={"documents": len(documents), "chunks": len(chunks)})

    failed = embed_documents(chunks, embeddings_client, embed_batch=embed_batch)
    vector_store.reindex_by_source(chunks)

    elapsed = time.time() - started
    logger.info(
        "Reindex completed",
        extra={"chunks_indexed": len(chunks), "failed_embeddings": failed, "elapsed_sec": round(elapsed, 2)},
    )
    return ReindexSummary(documents=len(documents), chunks=len(chunks), failed_embeddings=failed, elapsed_sec=elapsed)


class ReindexService:
    """Reindexes every source found in the knowledge-base directory."""

    def __init__(
        self,
        vector_store: VectorStore,
        embeddings_client: EmbeddingsClient,
        documents_dir: str | Path = DOCUMENTS_DIR,
        embed_batch: int = 64,
        logger_: logging.Logger | None = None,
    ) -> None:
        self.vector_store = vector_store
        self.embeddings_client = embeddings_client
        self.documents_dir = documents_dir
        self.embed_batch = embed_batch
        self.logger = logger_ or logging.getLogger(__name__)

    def run(self) -> ReindexSummary:
        summary = reindex_documents(
            self.vector_store,
            self.embeddings_client,
            documents_dir=self.documents_dir,
            embed_batch=self.embed_batch,
        )
        self.logger.info(
            "ReindexService completed",
            extra={"documents": summary.documents, "chunks": summary.chunks, "elapsed_sec": round(summary.elapsed_sec, 2)},
        )
        return summary


__all__ = ["reindex_documents", "embed_documents", "tag_documents", "ReindexService", "ReindexSummary"]
