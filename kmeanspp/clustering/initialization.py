"""Initial centroid selection.

Two seeding strategies:
- Uniform sampling of k distinct indices without replacement.
- K-Means++ sampling, weighting each point by its squared distance to
  the nearest centroid chosen so far.
"""

import numpy as np

from ..config import NormKind
from .distance import distance_matrix


def uniform_sample(
    data: np.ndarray,
    k: int,
    rng: np.random.Generator,
) -> np.ndarray:
    """Choose k data points uniformly at random without replacement.

    Each draw picks an index into the shrinking pool ``[0, m - i)`` and
    swaps the chosen index to the pool's tail, so every unordered
    k-subset of indices is equally likely. ``data`` is not modified.

    Args:
        data: Data points (m x n).
        k: Number of centroids.
        rng: Random generator owned by the caller.

    Returns:
        Initial centroids (k x n), a fresh copy.
    """
    m = len(data)
    pool = np.arange(m)
    chosen = np.empty(k, dtype=np.intp)

    for i in range(k):
        tail = m - 1 - i
        j = int(rng.integers(m - i))
        chosen[i] = pool[j]
        pool[j], pool[tail] = pool[tail], pool[j]

    return data[chosen].astype(np.float64, copy=True)


def kmeans_plusplus(
    data: np.ndarray,
    k: int,
    rng: np.random.Generator,
) -> np.ndarray:
    """Initialize centroids with K-Means++ weighted sampling.

    The first centroid is uniform over all points. Every following one is
    drawn with probability proportional to D(x)^2, the squared Euclidean
    distance from x to its nearest already-chosen centroid. D(x)^2 is kept
    as a running minimum, so each step only folds in the distance to the
    centroid added last. Weights are always squared Euclidean, whatever
    norm the run uses for assignment.

    Args:
        data: Data points (m x n).
        k: Number of centroids.
        rng: Random generator owned by the caller.

    Returns:
        Initial centroids (k x n).
    """
    m = len(data)
    centroids = np.empty((k, data.shape[1]), dtype=np.float64)
    closest_sq = np.full(m, np.inf)

    centroids[0] = data[rng.integers(m)]

    for c in range(1, k):
        newest = distance_matrix(data, centroids[c - 1:c], NormKind.SQUARED_EUCLIDEAN)
        np.minimum(closest_sq, newest[:, 0], out=closest_sq)

        cumulative = np.cumsum(closest_sq)
        total = cumulative[-1]
        r = rng.random()

        if total > 0:
            # Smallest j with cumulative[j] / total >= r. Chosen points add
            # zero width to the cumulative sum and are effectively skipped.
            choose = int(np.searchsorted(cumulative / total, r, side="left"))
            choose = min(choose, m - 1)
        else:
            # Every point sits on a centroid
            choose = int(rng.integers(m))

        centroids[c] = data[choose]

    return centroids


def initialize_centroids(
    data: np.ndarray,
    k: int,
    rng: np.random.Generator,
    weighted: bool = True,
) -> np.ndarray:
    """Pick the initial centroid set.

    Args:
        data: Data points (m x n).
        k: Number of centroids.
        rng: Random generator.
        weighted: K-Means++ if True, uniform sampling otherwise.

    Returns:
        Initial centroids (k x n).
    """
    if weighted:
        return kmeans_plusplus(data, k, rng)
    return uniform_sample(data, k, rng)
