"""
Utility script to inspect stored documents without embeddings.

Usage:
    python -m scripts.inspect_index --limit 5 --offset 0
"""

from __future__ import annotations

import argparse
import json
from itertools import islice
from typing import Sequence

from docbot.vector_store import get_vector_store

METADATA_ORDER = ["source", "path", "chunk_index", "uploaded_at"]


def main(argv: Sequence[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Inspect stored documents in the vector store file.")
    parser.add_argument("--limit", type=int, default=5, help="Number of documents to show")
    parser.add_argument("--offset", type=int, default=0, help="Offset for pagination")
    args = parser.parse_args(argv)

    store = get_vector_store()
    total = store.count()
    page = list(islice(store.iter_documents(), args.offset, args.offset + args.limit))

    print(f"Store file: {store.file_path}")
    print(f"Total documents: {total}")
    print(f"Showing {len(page)} documents (offset={args.offset}, limit={args.limit})")
    for idx, doc in enumerate(page, start=args.offset + 1):
        print(f"\n#{idx}: {doc.id} [{doc.source_type}:{doc.source_name}] dim={len(doc.embedding)}")
        meta = doc.metadata
        ordered_meta = {k: meta[k] for k in METADATA_ORDER if k in meta} | {
            k: v for k, v in meta.items() if k not in METADATA_ORDER
        }
        print("Metadata:", json.dumps(ordered_meta, ensure_ascii=False))
        snippet = doc.content[:400].replace("\n", " ")
        print("Text:", snippet + ("..." if len(doc.content) > 400 else ""))


if __name__ == "__main__":
    main()
