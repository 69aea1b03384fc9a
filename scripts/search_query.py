"""
Search the vector store by text query.

Example:
    python -m scripts.search_query --query "How do I calibrate the sensor?" --top-k 5
"""

from __future__ import annotations

import argparse
from typing import Sequence

from docbot.embeddings.client import EmbeddingsClient
from docbot.vector_store import get_vector_store


def main(argv: Sequence[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Search indexed documents by text query.")
    parser.add_argument("--query", "-q", required=True, help="Query text")
    parser.add_argument("--top-k", type=int, default=None, help="Number of results (default: TOP_K)")
    parser.add_argument("--snippet", type=int, default=300, help="Snippet length")
    args = parser.parse_args(argv)

    vs = get_vector_store()
    emb = EmbeddingsClient()

    q_vec = emb.embed_text(args.query)
    results = vs.similarity_search(q_vec, top_k=args.top_k)

    if not results:
        print("No results")
        return

    for idx, doc in enumerate(results, start=1):
        snippet = doc.content[: args.snippet].replace("\n", " ")
        print(f"\n#{idx} score={doc.score:.4f} id={doc.id} source={doc.source_type}:{doc.source_name}")
        print("metadata:", doc.metadata)
        print("text:", snippet + ("..." if len(doc.content) > args.snippet else ""))


if __name__ == "__main__":
    main()
