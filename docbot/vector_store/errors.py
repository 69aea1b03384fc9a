"""
Errors raised by the file-backed vector store.
"""

from __future__ import annotations


class VectorStoreError(RuntimeError):
    """Base class for structural store failures."""


class StorageError(VectorStoreError):
    """Raised when the backing file cannot be written or replaced."""

    def __init__(self, message: str, path: str) -> None:
        super().__init__(f"{message}: {path}")
        self.path = path


class MissingEmbeddingError(VectorStoreError):
    """Raised when a stored record selected for comparison has no embedding."""

    def __init__(self, content: str, document_id: str) -> None:
        super().__init__(f"Document with the following content has no embedding (id={document_id}): {content}")
        self.content = content
        self.document_id = document_id


class DimensionMismatchError(VectorStoreError, ValueError):
    """Raised when two vectors of different length are compared."""

    def __init__(self, expected: int, actual: int, detail: str = "") -> None:
        message = f"Embedding dimension mismatch: expected {expected}, got {actual}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)
        self.expected = expected
        self.actual = actual


__all__ = ["VectorStoreError", "StorageError", "MissingEmbeddingError", "DimensionMismatchError"]
