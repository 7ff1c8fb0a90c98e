"""Tests for uniform and K-Means++ centroid seeding."""

from collections import Counter
from itertools import combinations

import numpy as np
import pytest

from kmeanspp.clustering.initialization import (
    initialize_centroids,
    kmeans_plusplus,
    uniform_sample,
)


def _row_set(arr):
    return {tuple(row) for row in np.asarray(arr).tolist()}


class TestUniformSample:
    """Tests for sampling without replacement."""

    def test_returns_distinct_data_points(self):
        """k rows, all drawn from data, none repeated"""
        data = np.arange(40, dtype=float).reshape(20, 2)
        rng = np.random.default_rng(0)

        centroids = uniform_sample(data, 5, rng)

        assert centroids.shape == (5, 2)
        assert len(_row_set(centroids)) == 5
        assert _row_set(centroids) <= _row_set(data)

    def test_input_not_modified(self):
        """Sampling leaves the caller's matrix untouched"""
        data = np.arange(30, dtype=float).reshape(10, 3)
        before = data.copy()

        uniform_sample(data, 4, np.random.default_rng(1))

        np.testing.assert_array_equal(data, before)

    def test_result_is_a_copy(self):
        """Mutating the centroids does not touch data"""
        data = np.arange(10, dtype=float).reshape(5, 2)
        centroids = uniform_sample(data, 2, np.random.default_rng(2))
        centroids[:] = -1.0
        assert np.all(data >= 0)

    def test_all_points_when_k_equals_m(self):
        """Drawing every index yields a permutation of the data"""
        data = np.arange(12, dtype=float).reshape(6, 2)
        centroids = uniform_sample(data, 6, np.random.default_rng(3))
        assert _row_set(centroids) == _row_set(data)

    def test_subsets_roughly_uniform(self):
        """Each unordered 2-subset of 4 points is about equally likely"""
        data = np.arange(4, dtype=float).reshape(4, 1)
        rng = np.random.default_rng(4)
        n_draws = 3000

        counts = Counter(
            frozenset(uniform_sample(data, 2, rng)[:, 0].tolist())
            for _ in range(n_draws)
        )

        assert len(counts) == len(list(combinations(range(4), 2)))
        expected = n_draws / 6
        for count in counts.values():
            assert 0.8 * expected < count < 1.2 * expected


class TestKMeansPlusPlus:
    """Tests for weighted K-Means++ seeding."""

    def test_returns_distinct_data_points(self):
        """Chosen points carry zero weight and are not picked again"""
        rng = np.random.default_rng(5)
        data = rng.normal(size=(50, 3))

        centroids = kmeans_plusplus(data, 6, np.random.default_rng(6))

        assert centroids.shape == (6, 3)
        assert len(_row_set(centroids)) == 6
        assert _row_set(centroids) <= _row_set(data)

    def test_far_point_always_chosen(self):
        """With duplicates at the origin, the only other point gets all weight"""
        data = np.vstack([np.zeros((99, 2)), [[100.0, 100.0]]])

        for seed in range(20):
            centroids = kmeans_plusplus(data, 2, np.random.default_rng(seed))
            assert _row_set(centroids) == {(0.0, 0.0), (100.0, 100.0)}

    def test_prefers_distant_points(self):
        """Second centroid lands in the far group much more often than not"""
        near = np.array([[0.0, 0.0], [0.1, 0.0], [0.0, 0.1], [0.1, 0.1]])
        far = np.array([[10.0, 10.0]])
        data = np.vstack([near, far])

        far_hits = 0
        n_trials = 200
        for seed in range(n_trials):
            centroids = kmeans_plusplus(data, 2, np.random.default_rng(seed))
            if tuple(centroids[0]) != (10.0, 10.0) and tuple(centroids[1]) == (10.0, 10.0):
                far_hits += 1

        # First pick is near 80% of the time; then the far point holds
        # almost all of the weight.
        assert far_hits > 0.7 * n_trials

    def test_k_one(self):
        """A single centroid is one of the data points"""
        data = np.arange(8, dtype=float).reshape(4, 2)
        centroids = kmeans_plusplus(data, 1, np.random.default_rng(7))
        assert centroids.shape == (1, 2)
        assert _row_set(centroids) <= _row_set(data)

    def test_all_points_identical_falls_back(self):
        """Zero total weight still yields k centroids"""
        data = np.ones((5, 2))
        centroids = kmeans_plusplus(data, 3, np.random.default_rng(8))
        np.testing.assert_array_equal(centroids, np.ones((3, 2)))

    def test_reproducible_with_same_generator_seed(self):
        data = np.random.default_rng(9).normal(size=(30, 2))
        a = kmeans_plusplus(data, 4, np.random.default_rng(10))
        b = kmeans_plusplus(data, 4, np.random.default_rng(10))
        np.testing.assert_array_equal(a, b)


class TestInitializeCentroids:
    """Tests for the strategy switch."""

    def test_weighted_uses_plusplus(self):
        data = np.random.default_rng(11).normal(size=(20, 2))
        expected = kmeans_plusplus(data, 3, np.random.default_rng(12))
        actual = initialize_centroids(data, 3, np.random.default_rng(12), weighted=True)
        np.testing.assert_array_equal(actual, expected)

    def test_unweighted_uses_uniform(self):
        data = np.random.default_rng(13).normal(size=(20, 2))
        expected = uniform_sample(data, 3, np.random.default_rng(14))
        actual = initialize_centroids(data, 3, np.random.default_rng(14), weighted=False)
        np.testing.assert_array_equal(actual, expected)
