"""
Interactive chat with the indexed documents.

Example:
    python -m scripts.chat
"""

from __future__ import annotations

import argparse
import logging
from typing import Callable, Sequence

from docbot.config import setup_logging
from docbot.embeddings.client import EmbeddingsClient
from docbot.llm.client import LLMClient
from docbot.rag.pipeline import ChatSession, RAGService
from docbot.vector_store import get_vector_store

SEPARATOR = "-" * 50


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Chat with your document knowledge base.")
    parser.add_argument("--show-sources", action="store_true", help="Print retrieved sources after each answer")
    parser.add_argument("--max-turns", type=int, default=10, help="Conversation turns kept as context")
    return parser.parse_args(argv)


def run_loop(
    session: ChatSession,
    read: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
    show_sources: bool = False,
) -> None:
    logger = logging.getLogger(__name__)
    write("Chat with your knowledge base (type 'quit' to exit, 'reset' to clear history)")
    write(SEPARATOR)

    while True:
        try:
            text = read("You: ").strip()
        except EOFError:
            text = "quit"

        if text.lower() == "quit":
            write("Goodbye!")
            return
        if not text:
            continue
        if text.lower() == "reset":
            session.reset()
            write("History cleared.")
            continue

        try:
            response = session.ask(text)
        except Exception as exc:
            logger.debug("Chat turn failed", exc_info=True)
            write(f"Error: {exc}")
            continue

        write(f"Assistant: {response.answer}")
        if show_sources:
            for src in response.sources:
                write(f"  [{src.score:.3f}] {src.source_name} ({src.id})")
        write(SEPARATOR)


def main(argv: Sequence[str] | None = None) -> None:
    setup_logging()
    args = parse_args(argv)

    service = RAGService(
        vector_store=get_vector_store(),
        embeddings_client=EmbeddingsClient(),
        llm_client=LLMClient(),
    )
    run_loop(ChatSession(service, max_turns=args.max_turns), show_sources=args.show_sources)


if __name__ == "__main__":
    main()
