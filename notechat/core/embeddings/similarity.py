"""
Vector similarity helpers.

Dependencies: numpy
System role: Dense scoring shared by storage search and tests
"""

from collections.abc import Sequence

import numpy as np

_EPS = 1e-10


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """
    Cosine similarity of two vectors.

    Raises:
        ValueError: When the vectors differ in length
    """
    if len(a) != len(b):
        raise ValueError(f"Vector dimensions differ: {len(a)} != {len(b)}")
    va = np.asarray(a, dtype=np.float64)
    vb = np.asarray(b, dtype=np.float64)
    denom = np.linalg.norm(va) * np.linalg.norm(vb)
    if denom == 0:
        return 0.0
    return float(np.dot(va, vb) / denom)


def cosine_similarities(query: Sequence[float], matrix: Sequence[Sequence[float]]) -> np.ndarray:
    """
    Cosine similarity of one query vector against every row of a matrix.

    Args:
        query: Query vector of dimension D
        matrix: N vectors of dimension D

    Returns:
        np.ndarray: N similarities in row order
    """
    if len(matrix) == 0:
        return np.zeros(0, dtype=np.float64)
    query_vec = np.asarray(query, dtype=np.float64)
    doc_vectors = np.asarray(matrix, dtype=np.float64)
    doc_norms = np.linalg.norm(doc_vectors, axis=1) + _EPS
    query_norm = np.linalg.norm(query_vec) + _EPS
    return (doc_vectors @ query_vec) / (doc_norms * query_norm)


def normalize(vector: Sequence[float]) -> list[float]:
    """Scale a vector to unit length; the zero vector is returned unchanged."""
    vec = np.asarray(vector, dtype=np.float64)
    norm = np.linalg.norm(vec)
    if norm == 0:
        return vec.tolist()
    return (vec / norm).tolist()
