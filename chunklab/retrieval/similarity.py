"""Vector similarity helpers."""

from typing import Optional, Sequence

import numpy as np


def cosine_similarity(vec_a: Optional[Sequence[float]], vec_b: Optional[Sequence[float]]) -> float:
    """
    Cosine similarity of two vectors.

    Returns 0.0 for missing, empty or mismatched vectors and for zero norms.
    """
    if vec_a is None or vec_b is None:
        return 0.0
    a = np.asarray(vec_a, dtype=np.float64)
    b = np.asarray(vec_b, dtype=np.float64)
    if a.ndim != 1 or a.size == 0 or a.shape != b.shape:
        return 0.0

    norm = np.linalg.norm(a) * np.linalg.norm(b)
    if norm == 0.0:
        return 0.0
    return float(np.dot(a, b) / norm)
