"""Configuration dataclasses for kmeanspp."""

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Dict, Optional, Union

import numpy as np

from .errors import InvalidConfiguration


def _is_integer(value) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool)


def _is_real(value) -> bool:
    return (
        isinstance(value, (int, float, np.integer, np.floating))
        and not isinstance(value, bool)
    )


class NormKind(str, Enum):
    """Distance norms supported by the clustering engine."""

    SQUARED_EUCLIDEAN = "squared_euclidean"
    MANHATTAN = "manhattan"


@dataclass(frozen=True)
class KMeansOptions:
    """Optional clustering parameters.

    Attributes:
        iterations: Number of independent restarts; the best one is kept.
        use_weighted_init: K-Means++ seeding if True, uniform sampling otherwise.
        epsilon: Relative WCSS improvement below which a run stops.
        use_epsilon_stop: Stop on relative improvement if True, on an
            exactly repeated WCSS otherwise.
        norm: Distance norm, a NormKind or its string value.
        max_cycles: Cap on assignment/update cycles per restart. None means
            unbounded.
    """
    iterations: int = 10
    use_weighted_init: bool = True
    epsilon: float = 0.001
    use_epsilon_stop: bool = True
    norm: Union[NormKind, str] = NormKind.SQUARED_EUCLIDEAN
    max_cycles: Optional[int] = 300

    def __post_init__(self):
        """Validate option types and ranges, and normalize the norm."""
        if not _is_integer(self.iterations) or self.iterations < 1:
            raise InvalidConfiguration(
                f"iterations must be an integer >= 1, got {self.iterations!r}"
            )
        if not _is_real(self.epsilon) or not self.epsilon >= 0.0:
            raise InvalidConfiguration(
                f"epsilon must be a real number >= 0.0, got {self.epsilon!r}"
            )
        if self.max_cycles is not None and (
            not _is_integer(self.max_cycles) or self.max_cycles < 1
        ):
            raise InvalidConfiguration(
                f"max_cycles must be None or an integer >= 1, got {self.max_cycles!r}"
            )
        try:
            norm = NormKind(self.norm)
        except ValueError:
            choices = [n.value for n in NormKind]
            raise InvalidConfiguration(
                f"Unknown norm {self.norm!r}. Choose from: {choices}"
            ) from None
        object.__setattr__(self, "norm", norm)


@dataclass(frozen=True)
class KMeansConfig:
    """Validated, immutable clustering configuration.

    Build with :func:`configure`; constructing it directly skips the
    point-set checks.

    Attributes:
        k: Number of clusters.
        points: Read-only (m x n) point matrix.
        iterations: Number of restarts.
        use_weighted_init: K-Means++ seeding if True.
        epsilon: Relative improvement threshold.
        use_epsilon_stop: Relative-improvement vs exact-equality stopping.
        norm: Distance norm used throughout a run.
        max_cycles: Per-restart cycle cap, or None.
    """
    k: int
    points: np.ndarray = field(repr=False, compare=False)
    iterations: int = 10
    use_weighted_init: bool = True
    epsilon: float = 0.001
    use_epsilon_stop: bool = True
    norm: NormKind = NormKind.SQUARED_EUCLIDEAN
    max_cycles: Optional[int] = 300

    @property
    def n_points(self) -> int:
        return self.points.shape[0]

    @property
    def n_dims(self) -> int:
        return self.points.shape[1]

    def to_dict(self) -> Dict[str, Any]:
        """Convert the scalar parameters to a dictionary (points excluded)."""
        d = {f.name: getattr(self, f.name) for f in fields(self) if f.name != "points"}
        d["norm"] = self.norm.value
        d["n_points"] = self.n_points
        d["n_dims"] = self.n_dims
        return d


def _as_point_matrix(points) -> np.ndarray:
    """Convert input to a read-only float matrix, rejecting bad shapes."""
    try:
        arr = np.array(points, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise InvalidConfiguration(
            f"points must be a rectangular numeric matrix: {exc}"
        ) from None

    if arr.ndim != 2:
        raise InvalidConfiguration(
            f"points must be 2D (m, n), got shape {arr.shape}"
        )
    if arr.shape[0] < 1 or arr.shape[1] < 1:
        raise InvalidConfiguration(
            f"points must hold at least one non-empty point, got shape {arr.shape}"
        )
    if not np.all(np.isfinite(arr)):
        raise InvalidConfiguration("points must contain only finite values")

    arr.setflags(write=False)
    return arr


def count_distinct_points(points: np.ndarray, limit: Optional[int] = None) -> int:
    """Count pairwise-distinct rows, stopping once ``limit`` are found.

    Rows are compared by full vector equality (so 0.0 and -0.0 match).
    """
    seen = set()
    for row in points:
        seen.add(tuple(row.tolist()))
        if limit is not None and len(seen) >= limit:
            break
    return len(seen)


def configure(
    k: int,
    points,
    options: Optional[KMeansOptions] = None,
) -> KMeansConfig:
    """Validate clustering parameters and build a configuration.

    Args:
        k: Number of clusters, 1 <= k < m.
        points: Point matrix (m x n), any array-like of numbers.
        options: Optional parameters. Defaults to ``KMeansOptions()``.

    Returns:
        Immutable KMeansConfig holding a read-only copy of the points.

    Raises:
        InvalidConfiguration: If any parameter violates its constraint.
    """
    options = options or KMeansOptions()
    data = _as_point_matrix(points)
    m = data.shape[0]

    if not _is_integer(k):
        raise InvalidConfiguration(f"k must be an integer, got {k!r}")
    if k < 1:
        raise InvalidConfiguration(f"k must be >= 1, got {k}")
    if k >= m:
        raise InvalidConfiguration(
            f"k must be < number of points ({m}), got {k}"
        )
    if count_distinct_points(data, limit=k) < k:
        raise InvalidConfiguration(
            f"Need at least {k} distinct points for k={k}"
        )

    return KMeansConfig(
        k=int(k),
        points=data,
        iterations=int(options.iterations),
        use_weighted_init=options.use_weighted_init,
        epsilon=float(options.epsilon),
        use_epsilon_stop=options.use_epsilon_stop,
        norm=options.norm,
        max_cycles=None if options.max_cycles is None else int(options.max_cycles),
    )
