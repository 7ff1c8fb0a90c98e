"""Synthetic Gaussian blob generation.

Generates isotropic Gaussian clusters around given centers, with the
true centers and labels kept as ground truth for evaluation.
"""

import numpy as np
from dataclasses import dataclass
from typing import Optional, Sequence


# Vertices of the unit square
UNIT_SQUARE_CORNERS = np.array([
    [0.0, 0.0],
    [1.0, 0.0],
    [0.0, 1.0],
    [1.0, 1.0],
])


@dataclass
class BlobDataset:
    """Points sampled from Gaussian blobs with ground truth.

    Attributes:
        points: Sampled points (m x n).
        labels: Index of the blob each point was drawn from (m,).
        centers: True blob centers (k x n).
    """
    points: np.ndarray
    labels: np.ndarray
    centers: np.ndarray

    @property
    def n_points(self) -> int:
        return len(self.points)

    @property
    def n_clusters(self) -> int:
        return len(self.centers)


def generate_gaussian_blobs(
    centers: Sequence[Sequence[float]],
    n_per_cluster: int = 750,
    std: float = 0.1,
    seed: Optional[int] = 42,
    shuffle: bool = True,
) -> BlobDataset:
    """Sample points from isotropic Gaussian blobs.

    Args:
        centers: Blob centers (k x n).
        n_per_cluster: Points drawn around each center.
        std: Standard deviation of every coordinate.
        seed: Random seed.
        shuffle: Whether to shuffle rows (labels follow).

    Returns:
        BlobDataset with points, labels and centers.
    """
    centers = np.asarray(centers, dtype=np.float64)
    if centers.ndim != 2:
        raise ValueError(f"centers must be 2D (k, n), got shape {centers.shape}")
    if n_per_cluster < 1:
        raise ValueError(f"n_per_cluster must be >= 1, got {n_per_cluster}")

    rng = np.random.default_rng(seed)
    k, n = centers.shape

    points = np.concatenate([
        rng.normal(loc=center, scale=std, size=(n_per_cluster, n))
        for center in centers
    ])
    labels = np.repeat(np.arange(k), n_per_cluster)

    if shuffle:
        order = rng.permutation(len(points))
        points = points[order]
        labels = labels[order]

    return BlobDataset(points=points, labels=labels, centers=centers)


def unit_square_blobs(
    n_per_cluster: int = 750,
    std: float = 0.1,
    seed: Optional[int] = 42,
) -> BlobDataset:
    """Four Gaussian blobs centered on the vertices of the unit square."""
    return generate_gaussian_blobs(
        UNIT_SQUARE_CORNERS,
        n_per_cluster=n_per_cluster,
        std=std,
        seed=seed,
    )
