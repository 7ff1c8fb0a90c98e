"""kmeanspp: K-Means clustering with K-Means++ seeding and best-of-N restarts."""

from .config import KMeansConfig, KMeansOptions, NormKind, configure
from .errors import (
    DimensionMismatch,
    InvalidConfiguration,
    KMeansError,
    MalformedInput,
)
from .clustering.kmeans import KMeans, KMeansResult, RunResult, run

__version__ = "0.1.0"

__all__ = [
    "KMeansConfig",
    "KMeansOptions",
    "NormKind",
    "configure",
    "KMeans",
    "KMeansResult",
    "RunResult",
    "run",
    "KMeansError",
    "InvalidConfiguration",
    "DimensionMismatch",
    "MalformedInput",
]
