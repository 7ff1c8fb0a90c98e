#!/usr/bin/env python3
"""Cluster a CSV point matrix with K-Means / K-Means++.

Reads a headerless comma-separated matrix, runs the best-of-N
clustering, prints centroids, WCSS and timing, and optionally writes the
centroids, assignment, metrics and plots.

Usage:
    python experiments/generate_datasets.py
    python experiments/run_kmeans.py experiments/datasets/unit_square.csv \
        --rows 3000 --columns 2 -k 4 --iterations 50

    # Uniform seeding, L1 norm, exact-equality stopping
    python experiments/run_kmeans.py data.csv --rows 200 --columns 3 -k 5 \
        --uniform-init --norm manhattan --exact-stop
"""

import sys
from pathlib import Path

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import argparse
import json
import time
from datetime import datetime

from kmeanspp.config import KMeansOptions, NormKind, configure
from kmeanspp.clustering.kmeans import run
from kmeanspp.clustering.metrics import cluster_sizes, silhouette_score
from kmeanspp.data.matrix_io import load_matrix, write_matrix


def cluster_file(
    source: Path,
    rows: int,
    columns: int,
    k: int,
    options: KMeansOptions,
    seed: int = 42,
    n_jobs: int = 1,
    output_dir: Path = None,
    plot: bool = False,
) -> dict:
    """Load, cluster and report one matrix file.

    Returns:
        Dict of summary metrics.
    """
    points = load_matrix(source, rows, columns)
    config = configure(k, points, options)

    print("Configuration:")
    for key, value in config.to_dict().items():
        print(f"  {key}: {value}")
    print()

    start = time.time()
    result = run(config, seed=seed, n_jobs=n_jobs, verbose=True)
    elapsed = time.time() - start

    print(f"\nClustering took {elapsed:.3f} seconds\n")
    for centroid in result.centroids:
        print("(" + ", ".join(f"{v:.6f}" for v in centroid) + ")")
    print(f"\nThe within-cluster sum-of-squares (WCSS) = {result.fit_score}")

    sizes = cluster_sizes(result.assignment, config.k)
    metrics = {
        "source": str(source),
        "config": config.to_dict(),
        "seed": seed,
        "fit_score": result.fit_score,
        "best_restart": result.best_restart,
        "restart_scores": list(result.restart_scores),
        "n_cycles": result.n_cycles,
        "converged": result.converged,
        "cluster_sizes": sizes.tolist(),
        "runtime_seconds": elapsed,
        "timestamp": datetime.now().isoformat(),
    }

    # Silhouette is O(m^2); skip it for large inputs
    if rows <= 3000:
        metrics["silhouette"] = silhouette_score(points, result.assignment, config.norm)
        print(f"Silhouette score = {metrics['silhouette']:.4f}")

    if output_dir is not None:
        output_dir.mkdir(parents=True, exist_ok=True)
        write_matrix(output_dir / "centroids.csv", result.centroids)
        write_matrix(output_dir / "assignment.csv", result.assignment.reshape(-1, 1))
        with open(output_dir / "metrics.json", "w") as f:
            json.dump(metrics, f, indent=2)

        if plot:
            from kmeanspp.visualization import (
                plot_cluster_assignments,
                plot_restart_scores,
                plot_wcss_convergence,
            )
            if columns >= 2:
                plot_cluster_assignments(
                    points, result.assignment, result.centroids,
                    out_path=output_dir / "cluster_assignments.png",
                    fit_score=result.fit_score,
                )
            plot_wcss_convergence(
                result.wcss_history, out_path=output_dir / "wcss_convergence.png"
            )
            plot_restart_scores(
                result.restart_scores, result.best_restart,
                out_path=output_dir / "restart_scores.png",
            )

        print(f"\n  Saved to: {output_dir}")

    return metrics


def main():
    parser = argparse.ArgumentParser(description="kmeanspp clustering runner")
    parser.add_argument("source", type=str, help="Headerless CSV point matrix")
    parser.add_argument("--rows", type=int, required=True, help="Number of points")
    parser.add_argument("--columns", type=int, required=True, help="Point dimension")
    parser.add_argument("-k", "--n-clusters", type=int, required=True,
                        help="Number of clusters")
    parser.add_argument("--iterations", type=int, default=10,
                        help="Independent restarts (best one is kept)")
    parser.add_argument("--uniform-init", action="store_true",
                        help="Seed with uniform sampling instead of K-Means++")
    parser.add_argument("--epsilon", type=float, default=0.001,
                        help="Relative WCSS improvement threshold")
    parser.add_argument("--exact-stop", action="store_true",
                        help="Stop only when WCSS repeats exactly")
    parser.add_argument("--norm", type=str, default=NormKind.SQUARED_EUCLIDEAN.value,
                        choices=[n.value for n in NormKind], help="Distance norm")
    parser.add_argument("--max-cycles", type=int, default=300,
                        help="Cycle cap per restart (0 = unbounded)")
    parser.add_argument("--seed", type=int, default=42, help="Random seed")
    parser.add_argument("--jobs", type=int, default=1,
                        help="Worker threads for restarts")
    parser.add_argument("--output-dir", type=str, default=None,
                        help="Write centroids, assignment and metrics here")
    parser.add_argument("--plot", action="store_true",
                        help="Also save plots (requires --output-dir)")

    args = parser.parse_args()

    if args.plot and not args.output_dir:
        parser.error("--plot requires --output-dir")

    try:
        options = KMeansOptions(
            iterations=args.iterations,
            use_weighted_init=not args.uniform_init,
            epsilon=args.epsilon,
            use_epsilon_stop=not args.exact_stop,
            norm=args.norm,
            max_cycles=args.max_cycles or None,
        )
        cluster_file(
            Path(args.source),
            rows=args.rows,
            columns=args.columns,
            k=args.n_clusters,
            options=options,
            seed=args.seed,
            n_jobs=args.jobs,
            output_dir=Path(args.output_dir) if args.output_dir else None,
            plot=args.plot,
        )
    except (ValueError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
