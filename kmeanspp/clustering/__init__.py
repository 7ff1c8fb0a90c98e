"""Clustering module: distance norms, seeding, the k-means engine and metrics."""

from .distance import (
    distance,
    distance_matrix,
    manhattan,
    paired_distances,
    squared_euclidean,
)
from .initialization import (
    initialize_centroids,
    kmeans_plusplus,
    uniform_sample,
)
from .kmeans import (
    KMeans,
    KMeansResult,
    RunResult,
    assign_clusters,
    compute_wcss,
    kmeans_fit,
    run,
    should_stop,
    update_centroids,
)
from .metrics import (
    cluster_sizes,
    silhouette_score,
    wcss,
)

__all__ = [
    "distance",
    "distance_matrix",
    "manhattan",
    "paired_distances",
    "squared_euclidean",
    "initialize_centroids",
    "kmeans_plusplus",
    "uniform_sample",
    "KMeans",
    "KMeansResult",
    "RunResult",
    "assign_clusters",
    "compute_wcss",
    "kmeans_fit",
    "run",
    "should_stop",
    "update_centroids",
    "cluster_sizes",
    "silhouette_score",
    "wcss",
]
