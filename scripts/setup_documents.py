"""
Load the knowledge-base directory into the vector store, replacing each file's previous documents.

Example:
    python -m scripts.setup_documents --dir ./kb --embed-batch 32
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from docbot.config import settings, setup_logging
from docbot.embeddings.client import EmbeddingsClient
from docbot.indexing.pipeline import ReindexService
from docbot.vector_store import get_vector_store


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Reindex documents by source.")
    parser.add_argument("--dir", default=settings.documents_dir, help="Directory with PDF/TXT/MD files")
    parser.add_argument(
        "--embed-batch",
        type=int,
        default=64,
        help="Embedding request batch size.",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> None:
    setup_logging()
    logger = logging.getLogger(__name__)
    args = parse_args(argv)

    service = ReindexService(
        get_vector_store(),
        EmbeddingsClient(),
        documents_dir=args.dir,
        embed_batch=args.embed_batch,
        logger_=logger,
    )

    try:
        summary = service.run()
    except Exception:
        logger.exception("Reindex failed")
        sys.exit(1)

    print(
        f"Indexed {summary.chunks} chunks from {summary.documents} files "
        f"({summary.failed_embeddings} without embedding, {summary.elapsed_sec:.2f}s)"
    )


if __name__ == "__main__":
    main()
