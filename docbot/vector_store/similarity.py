"""
Cosine distance between embeddings.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from docbot.vector_store.errors import DimensionMismatchError


def cosine_distance(a: Sequence[float], b: Sequence[float]) -> float:
    """
    ``1 - cos(a, b)``; smaller is more similar.

    A zero vector on either side is maximally dissimilar (distance 1.0).
    """
    va = np.asarray(a, dtype=np.float64)
    vb = np.asarray(b, dtype=np.float64)
    if va.shape != vb.shape:
        raise DimensionMismatchError(expected=va.size, actual=vb.size)

    norm_a = np.linalg.norm(va)
    norm_b = np.linalg.norm(vb)
    if norm_a == 0.0 or norm_b == 0.0:
        return 1.0
    return float(1.0 - np.dot(va, vb) / (norm_a * norm_b))


def similarity_from_distance(distance: float) -> float:
    return 1.0 - distance


__all__ = ["cosine_distance", "similarity_from_distance"]
