"""Tests for clustering metrics.

Verifies WCSS, cluster sizes, silhouette score range and edge cases.
"""

import numpy as np
import pytest

from kmeanspp.config import NormKind
from kmeanspp.clustering.metrics import (
    cluster_sizes,
    silhouette_score,
    wcss,
)


class TestWCSS:
    """Tests for the wcss metric."""

    def test_perfect_clustering(self):
        """WCSS should be 0 when all points are at their centroids."""
        data = np.array([[1.0, 0.0], [0.0, 1.0]])
        centroids = np.array([[1.0, 0.0], [0.0, 1.0]])
        labels = np.array([0, 1])
        assert wcss(data, centroids, labels) == pytest.approx(0.0, abs=1e-10)

    def test_known_distance(self):
        """WCSS should match manual calculation."""
        data = np.array([[0.0], [2.0]])
        centroids = np.array([[1.0]])  # one cluster centroid at 1.0
        labels = np.array([0, 0])
        # 1^2 + 1^2
        assert wcss(data, centroids, labels) == pytest.approx(2.0)

    def test_manhattan(self):
        """Manhattan WCSS sums absolute differences."""
        data = np.array([[0.0, 0.0], [2.0, 2.0]])
        centroids = np.array([[1.0, 1.0]])
        labels = np.array([0, 0])
        assert wcss(data, centroids, labels, NormKind.MANHATTAN) == pytest.approx(4.0)

    def test_accepts_lists(self):
        assert wcss([[0.0], [4.0]], [[2.0]], [0, 0]) == pytest.approx(8.0)

    def test_positive(self):
        """WCSS should always be non-negative."""
        rng = np.random.default_rng(42)
        data = rng.normal(size=(50, 3))
        centroids = rng.normal(size=(3, 3))
        labels = rng.integers(0, 3, size=50)
        assert wcss(data, centroids, labels) >= 0


class TestClusterSizes:
    """Tests for cluster_sizes."""

    def test_counts(self):
        sizes = cluster_sizes(np.array([0, 2, 2, 0, 2]), 3)
        np.testing.assert_array_equal(sizes, [2, 0, 3])

    def test_sizes_sum_to_points(self):
        labels = np.random.default_rng(0).integers(0, 4, size=100)
        assert cluster_sizes(labels, 4).sum() == 100


class TestSilhouetteScore:
    """Tests for silhouette_score metric."""

    def test_range(self):
        """Silhouette score should be in [-1, 1]."""
        rng = np.random.default_rng(42)
        data = rng.normal(size=(30, 2))
        labels = rng.integers(0, 3, size=30)
        score = silhouette_score(data, labels)
        assert -1.0 <= score <= 1.0

    def test_well_separated_clusters(self):
        """Well-separated clusters should have silhouette near 1."""
        rng = np.random.default_rng(1)
        cluster_a = rng.normal(size=(20, 2)) + np.array([10, 10])
        cluster_b = rng.normal(size=(20, 2)) + np.array([-10, -10])
        data = np.vstack([cluster_a, cluster_b])
        labels = np.array([0] * 20 + [1] * 20)
        assert silhouette_score(data, labels) > 0.9
        assert silhouette_score(data, labels, NormKind.MANHATTAN) > 0.8

    def test_swapped_labels_negative(self):
        """Labels crossing the true groups give a negative score."""
        data = np.array([[0.0, 0.0], [0.1, 0.0], [10.0, 0.0], [10.1, 0.0]])
        labels = np.array([0, 1, 0, 1])
        assert silhouette_score(data, labels) < 0

    def test_single_cluster_returns_zero(self):
        """Single cluster should return 0."""
        data = np.random.default_rng(2).normal(size=(10, 2))
        labels = np.zeros(10, dtype=int)
        assert silhouette_score(data, labels) == 0.0

    def test_every_point_own_cluster_returns_zero(self):
        data = np.arange(8, dtype=float).reshape(4, 2)
        assert silhouette_score(data, np.arange(4)) == 0.0
