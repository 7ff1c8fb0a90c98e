"""Smoke tests for the plotting helpers."""

import numpy as np
import pytest

from kmeanspp.visualization.plot_utils import (
    plot_cluster_assignments,
    plot_restart_scores,
    plot_wcss_convergence,
)


@pytest.fixture
def clustered():
    rng = np.random.default_rng(0)
    points = rng.normal(size=(60, 3))
    labels = rng.integers(0, 3, size=60)
    centroids = np.array([points[labels == c].mean(axis=0) for c in range(3)])
    return points, labels, centroids


class TestPlots:
    """Each plot writes a non-empty PNG."""

    def test_cluster_assignments(self, tmp_path, clustered):
        points, labels, centroids = clustered
        out = tmp_path / "clusters.png"

        plot_cluster_assignments(points, labels, centroids, out_path=out, fit_score=12.5)

        assert out.exists()
        assert out.stat().st_size > 0

    def test_cluster_assignments_needs_two_columns(self, tmp_path):
        with pytest.raises(ValueError):
            plot_cluster_assignments(
                np.zeros((5, 1)), np.zeros(5, dtype=int), out_path=tmp_path / "x.png"
            )

    def test_wcss_convergence(self, tmp_path):
        out = tmp_path / "wcss.png"
        plot_wcss_convergence([10.0, 6.0, 5.5, 5.5], out_path=out)
        assert out.stat().st_size > 0

    def test_wcss_convergence_single_cycle(self, tmp_path):
        out = tmp_path / "wcss.png"
        plot_wcss_convergence([3.0], out_path=out)
        assert out.exists()

    def test_restart_scores(self, tmp_path):
        out = tmp_path / "restarts.png"
        plot_restart_scores([5.0, 4.0, 4.5], best_restart=1, out_path=out)
        assert out.stat().st_size > 0

    def test_cluster_assignments_other_dims(self, tmp_path, clustered):
        """Any two coordinates can be drawn"""
        points, labels, centroids = clustered
        out = tmp_path / "clusters_12.png"

        plot_cluster_assignments(points, labels, centroids, out_path=out, dims=(1, 2))

        assert out.stat().st_size > 0

    def test_cluster_assignments_centroid_without_members(self, tmp_path, clustered):
        """A centroid whose cluster has no points is still drawn"""
        points, labels, centroids = clustered
        extra = np.vstack([centroids, [[5.0, 5.0, 5.0]]])
        out = tmp_path / "clusters_extra.png"

        plot_cluster_assignments(points, labels, extra, out_path=out)

        assert out.exists()
