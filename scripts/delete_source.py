"""
Remove every document of one source from the store.

Example:
    python -m scripts.delete_source --type files --name manual.pdf
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from docbot.config import setup_logging
from docbot.vector_store import get_vector_store
from docbot.vector_store.errors import VectorStoreError


def main(argv: Sequence[str] | None = None) -> None:
    setup_logging()
    logger = logging.getLogger(__name__)

    parser = argparse.ArgumentParser(description="Delete documents by source.")
    parser.add_argument("--type", dest="source_type", default="files", help="Source type")
    parser.add_argument("--name", dest="source_name", required=True, help="Source name, e.g. a file name")
    args = parser.parse_args(argv)

    try:
        removed = get_vector_store().delete_by_source(args.source_type, args.source_name)
    except VectorStoreError:
        logger.exception("Delete failed")
        sys.exit(1)

    print(f"Removed {removed} documents from {args.source_type}:{args.source_name}")


if __name__ == "__main__":
    main()
