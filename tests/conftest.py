"""
Shared fixtures: a store in a temp directory and fakes for the OpenAI-backed clients.
"""

from typing import Dict, List
from unittest.mock import MagicMock

import pytest

from docbot.vector_store.document import Document
from docbot.vector_store.file_store import FileVectorStore, FileVectorStoreConfig


@pytest.fixture
def store_config(tmp_path):
    return FileVectorStoreConfig(directory=tmp_path, name="test", ext=".store", top_k=4)


@pytest.fixture
def store(store_config):
    return FileVectorStore(store_config)


@pytest.fixture
def make_doc():
    """Factory for documents with explicit ids and sources."""

    def _make(
        doc_id: str,
        embedding: List[float],
        source_name: str = "a.txt",
        source_type: str = "file",
        content: str | None = None,
        metadata: Dict | None = None,
    ) -> Document:
        return Document(
            id=doc_id,
            content=content or f"content {doc_id}",
            embedding=embedding,
            source_type=source_type,
            source_name=source_name,
            metadata=metadata or {},
        )

    return _make


class FakeEmbeddings:
    """Maps keywords to fixed 3-d vectors; unknown text gets the third axis."""

    KEYWORDS = {"alpha": [1.0, 0.0, 0.0], "beta": [0.0, 1.0, 0.0]}

    def __init__(self) -> None:
        self.calls: List[List[str]] = []

    def embed_texts(self, texts):
        self.calls.append(list(texts))
        return [self._vector(t) for t in texts]

    def embed_text(self, text):
        return self.embed_texts([text])[0]

    def _vector(self, text: str) -> List[float]:
        for word, vector in self.KEYWORDS.items():
            if word in text.lower():
                return list(vector)
        return [0.0, 0.0, 1.0]


@pytest.fixture
def fake_embeddings():
    return FakeEmbeddings()


@pytest.fixture
def fake_llm():
    llm = MagicMock()
    llm.chat.return_value = "Alpha is the first letter."
    return llm
