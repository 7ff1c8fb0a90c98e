"""Data module for matrix I/O and synthetic point generation."""

from .matrix_io import (
    load_matrix,
    write_matrix,
)
from .synthetic import (
    BlobDataset,
    generate_gaussian_blobs,
    unit_square_blobs,
)

__all__ = [
    "load_matrix",
    "write_matrix",
    "BlobDataset",
    "generate_gaussian_blobs",
    "unit_square_blobs",
]
