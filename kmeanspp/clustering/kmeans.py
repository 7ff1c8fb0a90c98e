"""K-Means / K-Means++ clustering engine.

One restart runs Lloyd's iteration from a fresh seeding:

    assign -> update (repair empty clusters) -> WCSS -> stop?

until the convergence test fires. The multi-run driver repeats this
``config.iterations`` times with independent generators spawned from the
engine's own SeedSequence and keeps the restart with the lowest WCSS.
"""

import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from functools import reduce
from typing import List, Optional, Tuple, Union

import numpy as np

from ..config import KMeansConfig, KMeansOptions, NormKind, configure
from .distance import distance_matrix, paired_distances
from .initialization import initialize_centroids


SeedLike = Union[None, int, np.random.SeedSequence]


def _read_only(arr: np.ndarray) -> np.ndarray:
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True, eq=False)
class RunResult:
    """Outcome of a single restart.

    Attributes:
        centroids: Final cluster centroids (k x n).
        assignment: Cluster index for each point (m,).
        fit_score: Final WCSS.
        n_cycles: Cycles executed. May pass max_cycles by the cycles
            needed to refill a cluster emptied at the cap.
        converged: Whether the stopping criterion fired (False if the
            cycle cap ended the run).
        n_repairs: Empty clusters repaired over the run.
        wcss_history: WCSS after every cycle.
    """
    centroids: np.ndarray
    assignment: np.ndarray
    fit_score: float
    n_cycles: int
    converged: bool
    n_repairs: int
    wcss_history: Tuple[float, ...]


@dataclass(frozen=True, eq=False)
class KMeansResult:
    """Best result over all restarts.

    Attributes:
        centroids: Centroids of the winning restart (k x n).
        assignment: Cluster index for each point (m,).
        fit_score: WCSS of the winning restart.
        best_restart: Index of the winning restart.
        restart_scores: WCSS of every restart, in restart order.
        n_cycles: Cycles used by the winning restart.
        converged: Whether the winning restart converged.
        wcss_history: Per-cycle WCSS of the winning restart.
        runtime_seconds: Wall-clock time of the whole multi-run.
    """
    centroids: np.ndarray
    assignment: np.ndarray
    fit_score: float
    best_restart: int
    restart_scores: Tuple[float, ...]
    n_cycles: int
    converged: bool
    wcss_history: Tuple[float, ...]
    runtime_seconds: float

    @property
    def n_clusters(self) -> int:
        return len(self.centroids)


def assign_clusters(
    data: np.ndarray,
    centroids: np.ndarray,
    norm: NormKind = NormKind.SQUARED_EUCLIDEAN,
) -> np.ndarray:
    """Assign each point to its nearest centroid.

    Ties go to the lowest centroid index.

    Args:
        data: Data points (m x n).
        centroids: Centroids (k x n).
        norm: Distance norm.

    Returns:
        Cluster assignments (m,).
    """
    distances = distance_matrix(data, centroids, norm)
    return np.argmin(distances, axis=1)


def _repair_empty_clusters(
    data: np.ndarray,
    centroids: np.ndarray,
    empty: np.ndarray,
    rng: np.random.Generator,
) -> None:
    """Move each empty cluster's centroid onto an unused data point.

    Candidates are the points whose value matches no centroid of a
    non-empty cluster. Each pick removes every point equal to it from the
    candidate pool, so no two centroids end up at the same location.
    """
    in_use = np.ones(len(centroids), dtype=bool)
    in_use[empty] = False
    used = centroids[in_use]

    matches_used = (data[:, np.newaxis, :] == used[np.newaxis, :, :]).all(axis=2)
    candidates = np.flatnonzero(~matches_used.any(axis=1))

    for cluster in empty:
        if len(candidates) == 0:
            # Fewer distinct points than clusters; keep the stale centroid
            break
        pick = candidates[rng.integers(len(candidates))]
        centroids[cluster] = data[pick]
        candidates = candidates[~(data[candidates] == data[pick]).all(axis=1)]


def update_centroids(
    data: np.ndarray,
    assignment: np.ndarray,
    centroids: np.ndarray,
    rng: np.random.Generator,
) -> List[int]:
    """Update centroids in place as the mean of their assigned points.

    Args:
        data: Data points (m x n).
        assignment: Cluster assignments (m,).
        centroids: Centroids (k x n), overwritten.
        rng: Generator used to pick replacement points.

    Returns:
        Indices of clusters that were empty and got repaired.
    """
    k = len(centroids)
    empty = []

    for cluster in range(k):
        mask = assignment == cluster
        if np.any(mask):
            centroids[cluster] = data[mask].mean(axis=0)
        else:
            empty.append(cluster)

    if empty:
        _repair_empty_clusters(data, centroids, np.asarray(empty), rng)

    return empty


def compute_wcss(
    data: np.ndarray,
    centroids: np.ndarray,
    assignment: np.ndarray,
    norm: NormKind = NormKind.SQUARED_EUCLIDEAN,
) -> float:
    """Within-cluster sum of distances under the given norm.

    Args:
        data: Data points (m x n).
        centroids: Cluster centroids (k x n).
        assignment: Cluster assignments (m,).
        norm: Distance norm.

    Returns:
        Sum over points of distance to the assigned centroid.
    """
    return float(np.sum(paired_distances(data, centroids[assignment], norm)))


def should_stop(
    wcss_new: float,
    wcss_prev: float,
    epsilon: float,
    use_epsilon_stop: bool = True,
) -> bool:
    """Decide whether a restart has converged.

    With ``use_epsilon_stop`` the run stops once the relative improvement
    ``1 - wcss_new / wcss_prev`` drops below ``epsilon``; a cycle with no
    improvement at all always stops. Otherwise the run stops only when
    WCSS repeats exactly.

    Args:
        wcss_new: WCSS after the latest cycle.
        wcss_prev: WCSS after the previous cycle (inf before the first).
        epsilon: Relative improvement threshold.
        use_epsilon_stop: Relative improvement vs exact equality.

    Returns:
        True if iteration should stop.
    """
    if not use_epsilon_stop:
        return wcss_new == wcss_prev

    # Also covers wcss_prev == 0, where the ratio is undefined
    if wcss_new >= wcss_prev:
        return True

    return epsilon > 1.0 - (wcss_new / wcss_prev)


class KMeans:
    """Multi-restart K-Means / K-Means++ clustering.

    The engine owns its random source: a SeedSequence from which every
    restart spawns an independent generator. A fixed seed therefore
    reproduces the same result, whether restarts run sequentially or in
    a thread pool.
    """

    def __init__(
        self,
        config: KMeansConfig,
        seed: SeedLike = None,
        n_jobs: int = 1,
        verbose: bool = False,
    ):
        """Initialize the engine.

        Args:
            config: Validated configuration (see ``configure``).
            seed: Integer seed or SeedSequence. None draws fresh entropy.
            n_jobs: Worker threads for restarts. 1 runs them in order.
            verbose: Whether to print per-restart progress.
        """
        if n_jobs < 1:
            raise ValueError(f"n_jobs must be >= 1, got {n_jobs}")

        self.config = config
        self.n_jobs = n_jobs
        self.verbose = verbose
        if isinstance(seed, np.random.SeedSequence):
            self._seed_seq = seed
        else:
            self._seed_seq = np.random.SeedSequence(seed)

        self.result_: Optional[KMeansResult] = None

    def run_once(self, rng: np.random.Generator) -> RunResult:
        """Execute one restart to convergence.

        Args:
            rng: Generator for seeding and empty-cluster repair.

        Returns:
            RunResult for this restart.
        """
        cfg = self.config
        data = cfg.points

        centroids = initialize_centroids(
            data, cfg.k, rng, weighted=cfg.use_weighted_init
        )

        wcss = np.inf
        history: List[float] = []
        n_repairs = 0
        converged = False

        while True:
            assignment = assign_clusters(data, centroids, cfg.norm)
            repaired = update_centroids(data, assignment, centroids, rng)
            n_repairs += len(repaired)

            wcss_prev, wcss = wcss, compute_wcss(data, centroids, assignment, cfg.norm)
            history.append(wcss)

            # A repaired cluster has no members yet; run another cycle
            if not repaired and should_stop(
                wcss, wcss_prev, cfg.epsilon, cfg.use_epsilon_stop
            ):
                converged = True
                break

            # The cap only ends a run on a cycle where every cluster had members
            if (
                cfg.max_cycles is not None
                and len(history) >= cfg.max_cycles
                and not repaired
            ):
                break

        return RunResult(
            centroids=_read_only(centroids),
            assignment=_read_only(assignment),
            fit_score=wcss,
            n_cycles=len(history),
            converged=converged,
            n_repairs=n_repairs,
            wcss_history=tuple(history),
        )

    def _run_all(self, rngs: List[np.random.Generator]) -> List[RunResult]:
        if self.n_jobs == 1:
            return [self.run_once(rng) for rng in rngs]

        # Restarts share only read-only points and config
        with ThreadPoolExecutor(max_workers=self.n_jobs) as pool:
            return list(pool.map(self.run_once, rngs))

    def fit(self) -> KMeansResult:
        """Run all restarts and keep the one with the lowest WCSS.

        Returns:
            KMeansResult for the best restart.
        """
        start_time = time.time()
        n_restarts = self.config.iterations

        rngs = [np.random.default_rng(s) for s in self._seed_seq.spawn(n_restarts)]
        runs = self._run_all(rngs)

        if self.verbose:
            for i, run in enumerate(runs):
                print(
                    f"Restart {i + 1}/{n_restarts}: "
                    f"WCSS={run.fit_score:.6g}  "
                    f"cycles={run.n_cycles}  "
                    f"converged={run.converged}"
                )

        # Strictly lower WCSS wins; ties keep the earlier restart
        best_idx = reduce(
            lambda best, i: i if runs[i].fit_score < runs[best].fit_score else best,
            range(1, n_restarts),
            0,
        )
        best = runs[best_idx]
        elapsed = time.time() - start_time

        if self.verbose:
            print(
                f"Best restart: {best_idx + 1}  "
                f"WCSS={best.fit_score:.6g}  "
                f"took {elapsed:.3f}s"
            )

        self.result_ = KMeansResult(
            centroids=best.centroids,
            assignment=best.assignment,
            fit_score=best.fit_score,
            best_restart=best_idx,
            restart_scores=tuple(run.fit_score for run in runs),
            n_cycles=best.n_cycles,
            converged=best.converged,
            wcss_history=best.wcss_history,
            runtime_seconds=elapsed,
        )
        return self.result_

    def predict(self, data: np.ndarray) -> np.ndarray:
        """Predict cluster assignments for new data.

        Args:
            data: Data points (m x n).

        Returns:
            Cluster assignments.
        """
        if self.result_ is None:
            raise ValueError("Must call fit() first")

        return assign_clusters(data, self.result_.centroids, self.config.norm)


def run(
    config: KMeansConfig,
    seed: SeedLike = None,
    n_jobs: int = 1,
    verbose: bool = False,
) -> KMeansResult:
    """Cluster ``config.points`` and return the best of all restarts.

    Args:
        config: Validated configuration.
        seed: Integer seed or SeedSequence for reproducible runs.
        n_jobs: Worker threads for restarts.
        verbose: Print per-restart progress.

    Returns:
        KMeansResult.
    """
    return KMeans(config, seed=seed, n_jobs=n_jobs, verbose=verbose).fit()


def kmeans_fit(
    data: np.ndarray,
    k: int,
    seed: SeedLike = None,
    **options,
) -> Tuple[np.ndarray, np.ndarray, float]:
    """Convenience function for k-means clustering.

    Args:
        data: Data points (m x n).
        k: Number of clusters.
        seed: Random seed.
        **options: Fields of ``KMeansOptions``.

    Returns:
        Tuple of (centroids, assignment, fit_score).
    """
    config = configure(k, data, KMeansOptions(**options))
    result = run(config, seed=seed)
    return result.centroids, result.assignment, result.fit_score
