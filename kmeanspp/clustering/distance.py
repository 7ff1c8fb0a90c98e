"""Distance norms for k-means.

Each norm is a reduction over the last axis of a difference array, so
the same function serves a single pair of vectors, the (m x k)
point-to-centroid matrix of the assignment step, and the row-paired
distances behind WCSS. Norms are looked up by NormKind; the engine never
branches on the norm itself.
"""

from typing import Callable, Dict

import numpy as np

from ..config import NormKind
from ..errors import DimensionMismatch


def _sum_of_squares(diff: np.ndarray) -> np.ndarray:
    return np.sum(diff * diff, axis=-1)


def _sum_of_abs(diff: np.ndarray) -> np.ndarray:
    return np.sum(np.abs(diff), axis=-1)


_REDUCERS: Dict[NormKind, Callable[[np.ndarray], np.ndarray]] = {
    NormKind.SQUARED_EUCLIDEAN: _sum_of_squares,
    NormKind.MANHATTAN: _sum_of_abs,
}


def _as_vector_pair(x, y):
    x = np.asarray(x, dtype=np.float64).ravel()
    y = np.asarray(y, dtype=np.float64).ravel()
    if x.shape != y.shape:
        raise DimensionMismatch(
            f"Vector lengths differ: {x.shape[0]} != {y.shape[0]}"
        )
    return x, y


def squared_euclidean(x, y) -> float:
    """Squared L2 distance: sum_i (x_i - y_i)^2.

    The square root is never taken; the ordering it induces is the same
    as for Euclidean distance.
    """
    x, y = _as_vector_pair(x, y)
    return float(_sum_of_squares(x - y))


def manhattan(x, y) -> float:
    """L1 distance: sum_i |x_i - y_i|."""
    x, y = _as_vector_pair(x, y)
    return float(_sum_of_abs(x - y))


def distance(x, y, norm: NormKind = NormKind.SQUARED_EUCLIDEAN) -> float:
    """Distance between two vectors under the given norm.

    Args:
        x: First vector.
        y: Second vector, same length as ``x``.
        norm: Norm to apply.

    Returns:
        Non-negative distance.

    Raises:
        DimensionMismatch: If the vectors differ in length.
    """
    x, y = _as_vector_pair(x, y)
    return float(_REDUCERS[NormKind(norm)](x - y))


def distance_matrix(
    data: np.ndarray,
    centroids: np.ndarray,
    norm: NormKind = NormKind.SQUARED_EUCLIDEAN,
) -> np.ndarray:
    """Compute distances from all points to all centroids.

    Args:
        data: Data points (m x n).
        centroids: Centroids (k x n).
        norm: Norm to apply.

    Returns:
        Distance matrix (m x k).

    Raises:
        DimensionMismatch: If points and centroids differ in width.
    """
    data = np.asarray(data, dtype=np.float64)
    centroids = np.asarray(centroids, dtype=np.float64)
    if data.ndim != 2 or centroids.ndim != 2 or data.shape[1] != centroids.shape[1]:
        raise DimensionMismatch(
            f"Cannot compare points of shape {data.shape} "
            f"with centroids of shape {centroids.shape}"
        )

    # (m, 1, n) - (1, k, n) -> (m, k, n) -> (m, k)
    diff = data[:, np.newaxis, :] - centroids[np.newaxis, :, :]
    return _REDUCERS[NormKind(norm)](diff)


def paired_distances(
    a: np.ndarray,
    b: np.ndarray,
    norm: NormKind = NormKind.SQUARED_EUCLIDEAN,
) -> np.ndarray:
    """Distance between row i of ``a`` and row i of ``b`` for every i.

    Args:
        a: First matrix (m x n).
        b: Second matrix (m x n).
        norm: Norm to apply.

    Returns:
        Distances (m,).
    """
    a = np.asarray(a, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)
    if a.shape != b.shape:
        raise DimensionMismatch(f"Shapes differ: {a.shape} != {b.shape}")
    return _REDUCERS[NormKind(norm)](a - b)
