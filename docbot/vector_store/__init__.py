"""
Vector store abstractions and factories.
"""

from docbot.config import settings
from docbot.vector_store.base import VectorStore
from docbot.vector_store.document import Document
from docbot.vector_store.errors import (
    DimensionMismatchError,
    MissingEmbeddingError,
    StorageError,
    VectorStoreError,
)
from docbot.vector_store.file_store import FileVectorStore, FileVectorStoreConfig

DEFAULT_VECTOR_STORE_BACKEND = settings.vector_store_backend


def store_config_from_settings() -> FileVectorStoreConfig:
    return FileVectorStoreConfig(
        directory=settings.vector_store_path,
        name=settings.vector_store_name,
        ext=settings.vector_store_ext,
        top_k=settings.top_k,
    )


def get_vector_store() -> FileVectorStore:
    """
    Factory to obtain configured VectorStore instance.
    Currently supports only the file backend.
    """
    backend = DEFAULT_VECTOR_STORE_BACKEND.lower()
    if backend == "file":
        return FileVectorStore(store_config_from_settings())
    raise ValueError(f"Unsupported vector store backend: {backend}")


__all__ = [
    "DEFAULT_VECTOR_STORE_BACKEND",
    "get_vector_store",
    "store_config_from_settings",
    "Document",
    "VectorStore",
    "FileVectorStore",
    "FileVectorStoreConfig",
    "VectorStoreError",
    "StorageError",
    "MissingEmbeddingError",
    "DimensionMismatchError",
]
