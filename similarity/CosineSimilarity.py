# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-22
# Description: CosineSimilarity
# -----------------------------------------------------------------------------
import math
from typing import List, Sequence

import numpy as np

from errors.VectorErrors import DimensionMismatch, InvalidVector


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """
    Cosine similarity of two equal-length vectors, in [-1, 1].

    Raises DimensionMismatch when the lengths differ and InvalidVector when
    either side holds NaN/inf. A zero-norm vector on either side yields 0.0
    rather than an error.
    """
    if len(a) != len(b):
        raise DimensionMismatch(len(a), len(b))

    va = np.asarray(a, dtype=np.float64)
    vb = np.asarray(b, dtype=np.float64)
    if not (np.isfinite(va).all() and np.isfinite(vb).all()):
        raise InvalidVector("Cannot score a vector with NaN or infinite components")

    # scale to max |x| == 1 so squares and products cannot overflow
    scale_a = float(np.max(np.abs(va))) if va.size else 0.0
    scale_b = float(np.max(np.abs(vb))) if vb.size else 0.0
    if scale_a == 0.0 or scale_b == 0.0:
        return 0.0
    va = va / scale_a
    vb = vb / scale_b

    norm_a = float(np.linalg.norm(va))
    norm_b = float(np.linalg.norm(vb))
    score = float(np.dot(va, vb)) / (norm_a * norm_b)
    if not math.isfinite(score):
        raise InvalidVector(f"Similarity score is not finite: {score}")
    # rounding can push |score| a hair past 1
    return max(-1.0, min(1.0, score))


def mean_vector(vectors: Sequence[Sequence[float]]) -> List[float]:
    """Elementwise arithmetic mean (the "profile vector" of a user's history)."""
    if not vectors:
        raise ValueError("mean_vector requires at least one vector")

    dim = len(vectors[0])
    for v in vectors[1:]:
        if len(v) != dim:
            raise DimensionMismatch(dim, len(v), "profile vector input")

    matrix = np.asarray(vectors, dtype=np.float64)
    return matrix.mean(axis=0).tolist()
