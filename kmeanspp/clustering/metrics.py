"""Clustering quality metrics for evaluation.

Provides metrics for:
- WCSS - the objective k-means minimizes
- Cluster sizes - member count per cluster
- Silhouette score - cluster separation quality
"""

import numpy as np

from ..config import NormKind
from .distance import distance_matrix
from .kmeans import compute_wcss


def wcss(
    data: np.ndarray,
    centroids: np.ndarray,
    labels: np.ndarray,
    norm: NormKind = NormKind.SQUARED_EUCLIDEAN,
) -> float:
    """Compute within-cluster sum of distances.

    WCSS = sum_i d(x_i, c_{y_i})

    Lower is better.

    Args:
        data: Data points (m x n).
        centroids: Cluster centroids (k x n).
        labels: Cluster assignments (m,).
        norm: Distance norm.

    Returns:
        Total distance of points to their centroids.
    """
    data = np.asarray(data, dtype=np.float64)
    centroids = np.asarray(centroids, dtype=np.float64)
    labels = np.asarray(labels)
    return compute_wcss(data, centroids, labels, norm)


def cluster_sizes(labels: np.ndarray, n_clusters: int) -> np.ndarray:
    """Count members of each cluster.

    Args:
        labels: Cluster assignments (m,).
        n_clusters: Number of clusters k.

    Returns:
        Member counts (k,).
    """
    return np.bincount(np.asarray(labels), minlength=n_clusters)


def silhouette_score(
    data: np.ndarray,
    labels: np.ndarray,
    norm: NormKind = NormKind.SQUARED_EUCLIDEAN,
) -> float:
    """Compute silhouette score for clustering quality.

    Measures how similar points are to their own cluster vs other clusters.
    Range: [-1, 1], higher is better. Pairwise distances use ``norm``;
    with the default squared Euclidean norm this is the squared-distance
    silhouette.

    Args:
        data: Data points (m x n).
        labels: Cluster assignments.
        norm: Distance norm.

    Returns:
        Mean silhouette coefficient.
    """
    data = np.asarray(data, dtype=np.float64)
    labels = np.asarray(labels)
    n_samples = len(data)
    clusters = np.unique(labels)

    if len(clusters) <= 1 or len(clusters) >= n_samples:
        return 0.0

    pairwise = distance_matrix(data, data, norm)
    silhouette_values = np.zeros(n_samples)

    for i in range(n_samples):
        same = labels == labels[i]
        same[i] = False

        # a(i) = mean distance to the rest of its own cluster
        a_i = pairwise[i, same].mean() if same.any() else 0.0

        # b(i) = min mean distance to another cluster
        b_i = min(
            pairwise[i, labels == c].mean()
            for c in clusters
            if c != labels[i]
        )

        if max(a_i, b_i) > 0:
            silhouette_values[i] = (b_i - a_i) / max(a_i, b_i)

    return float(np.mean(silhouette_values))
