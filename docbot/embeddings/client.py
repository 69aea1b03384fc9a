"""
OpenAI embeddings client.
"""

from __future__ import annotations

import re
from typing import List, Sequence

from openai import OpenAI

from docbot.config import settings

DEFAULT_EMBEDDING_MODEL = settings.embedding_model_name
DEFAULT_EMBED_BATCH_SIZE = 64
MIN_EMBED_CHARS = 3

_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F\x7F-\x9F]")


def sanitize_text(text: str) -> str:
    text = _CONTROL_CHARS.sub("", text)
    return " ".join(text.split())


class EmbeddingsClient:
    def __init__(
        self,
        model: str = DEFAULT_EMBEDDING_MODEL,
        batch_size: int = DEFAULT_EMBED_BATCH_SIZE,
        client: OpenAI | None = None,
    ) -> None:
        self.model = model
        self.batch_size = batch_size
        api_key = settings.openai_api_key.get_secret_value() if settings.openai_api_key else None
        self.client = client or OpenAI(api_key=api_key)

    def embed_texts(self, texts: Sequence[str]) -> List[List[float]]:
        """
        Embed texts in batches, preserving order.

        Texts too short to carry meaning after sanitizing get an empty
        embedding and are not sent to the API.
        """
        if not texts:
            return []

        cleaned = [sanitize_text(t) for t in texts]
        embeddings: List[List[float]] = [[] for _ in cleaned]
        pending = [i for i, t in enumerate(cleaned) if len(t) >= MIN_EMBED_CHARS]

        for i in range(0, len(pending), self.batch_size):
            indices = pending[i : i + self.batch_size]
            batch = [cleaned[idx] for idx in indices]
            response = self.client.embeddings.create(model=self.model, input=batch)
            for idx, item in zip(indices, response.data):
                embeddings[idx] = list(item.embedding)
        return embeddings

    def embed_text(self, text: str) -> List[float]:
        vectors = self.embed_texts([text])
        return vectors[0] if vectors else []


__all__ = ["EmbeddingsClient", "DEFAULT_EMBEDDING_MODEL", "sanitize_text"]
