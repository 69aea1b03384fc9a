"""
List every (source type, source name) in the store with its document count.

Example:
    python -m scripts.list_sources
"""

from __future__ import annotations

import argparse
from typing import Sequence

from docbot.vector_store import get_vector_store


def main(argv: Sequence[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Show sources present in the store.")
    parser.parse_args(argv)

    store = get_vector_store()
    sources = store.sources()

    print(f"Store file: {store.file_path}")
    if not sources:
        print("Store is empty.")
        return

    print("Sources -> documents:")
    for (source_type, source_name), count in sources:
        print(f"  {source_type}:{source_name}: {count}")


if __name__ == "__main__":
    main()
