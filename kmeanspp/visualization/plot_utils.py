"""
Plotting utilities for kmeanspp results.

Every figure is saved at 150 DPI with bbox_inches='tight' and closed
afterwards, so the helpers are safe to call in a loop.
"""

from pathlib import Path
from typing import Optional, Sequence, Tuple, Union

import numpy as np
import matplotlib
matplotlib.use("Agg")  # non-interactive backend
import matplotlib.pyplot as plt


PathLike = Union[str, Path]

# ── Style config ──────────────────────────────────────────────────────
STYLE_CONFIG = {
    "figure.dpi": 150,
    "figure.facecolor": "white",
    "axes.grid": True,
    "grid.alpha": 0.3,
    "axes.titlesize": 14,
    "axes.labelsize": 12,
    "legend.fontsize": 9,
}

COLORS = {
    "trace": "#4363d8",   # blue
    "best": "#e6194B",    # red
    "other": "#aaaaaa",   # grey
}

CLUSTER_CMAP = "tab10"


def _apply_style():
    plt.rcParams.update(STYLE_CONFIG)


def _summary_box(ax: plt.Axes, rows: Sequence[Tuple[str, str]]):
    """Write aligned ``label: value`` rows in the top-right corner."""
    width = max(len(label) for label, _ in rows)
    text = "\n".join(f"{label:<{width}} : {value}" for label, value in rows)
    ax.text(
        0.98, 0.98, text, transform=ax.transAxes,
        ha="right", va="top", fontsize=8, family="monospace",
        bbox=dict(boxstyle="round,pad=0.4", facecolor="white",
                  edgecolor="#cccccc", alpha=0.85),
    )


def _save(fig: plt.Figure, out_path: PathLike):
    fig.tight_layout()
    fig.savefig(str(out_path), dpi=150, bbox_inches="tight")
    plt.close(fig)


def plot_cluster_assignments(
    points: np.ndarray,
    labels: np.ndarray,
    centroids: Optional[np.ndarray] = None,
    out_path: PathLike = "cluster_assignments.png",
    title: str = "Cluster Assignments",
    fit_score: Optional[float] = None,
    dims: Tuple[int, int] = (0, 1),
):
    """Scatter plot of points coloured by cluster.

    Cluster c is drawn in colour c of the ``tab10`` cycle, and its
    centroid (if given) as a numbered marker of the same colour.

    Args:
        points: (m, n) array with n >= 2.
        labels: (m,) integer cluster labels.
        centroids: (k, n) cluster centroids (optional).
        out_path: Output file path.
        title: Plot title.
        fit_score: WCSS shown in the summary box (optional).
        dims: The two coordinates to draw.
    """
    points = np.asarray(points)
    labels = np.asarray(labels)
    if points.ndim != 2 or points.shape[1] < 2:
        raise ValueError(f"Need at least 2D points to plot, got shape {points.shape}")

    x, y = dims
    cmap = plt.get_cmap(CLUSTER_CMAP)
    n_clusters = int(labels.max()) + 1 if len(labels) else 0
    if centroids is not None:
        centroids = np.asarray(centroids)
        n_clusters = max(n_clusters, len(centroids))
    sizes = np.bincount(labels, minlength=n_clusters)

    _apply_style()
    fig, ax = plt.subplots(figsize=(9, 8))

    for c in range(n_clusters):
        if sizes[c] == 0:
            continue
        member = points[labels == c]
        ax.scatter(member[:, x], member[:, y], s=6, alpha=0.45,
                   color=cmap(c % cmap.N), label=f"cluster {c} (n={sizes[c]})")

    if centroids is not None:
        for c, centroid in enumerate(centroids):
            ax.scatter(centroid[x], centroid[y], s=160, marker="o",
                       color=cmap(c % cmap.N), edgecolors="black",
                       linewidths=1.2, zorder=10)
            ax.annotate(str(c), (centroid[x], centroid[y]), ha="center",
                        va="center", fontsize=7, color="white",
                        weight="bold", zorder=11)

    rows = [("k", str(n_clusters)), ("points", str(len(points)))]
    if fit_score is not None:
        rows.append(("WCSS", f"{fit_score:.4f}"))
    _summary_box(ax, rows)

    ax.set_xlabel(f"x[{x}]")
    ax.set_ylabel(f"x[{y}]")
    ax.legend(loc="lower left", markerscale=3, ncol=1 + n_clusters // 10)
    ax.set_title(title)
    _save(fig, out_path)


def plot_wcss_convergence(
    wcss_history: Sequence[float],
    out_path: PathLike = "wcss_convergence.png",
    title: str = "WCSS Convergence",
):
    """Plot WCSS after each assignment/update cycle of one restart."""
    _apply_style()
    fig, ax = plt.subplots(figsize=(10, 6))

    cycles = np.arange(1, len(wcss_history) + 1)
    ax.plot(cycles, wcss_history, "o-", color=COLORS["trace"], label="WCSS")

    if len(wcss_history) > 1:
        first, last = wcss_history[0], wcss_history[-1]
        drop = (first - last) / first * 100 if first else 0.0
        _summary_box(ax, [
            ("cycles", str(len(wcss_history))),
            ("final", f"{last:.4f}"),
            ("drop", f"{drop:.1f}%"),
        ])

    ax.set_xlabel("Cycle")
    ax.set_ylabel("WCSS (lower is better)")
    ax.legend()
    ax.set_title(title)
    _save(fig, out_path)


def plot_restart_scores(
    restart_scores: Sequence[float],
    best_restart: int,
    out_path: PathLike = "restart_scores.png",
    title: str = "WCSS per Restart",
):
    """Bar chart of each restart's final WCSS, best restart highlighted."""
    _apply_style()
    fig, ax = plt.subplots(figsize=(12, 6))

    x = np.arange(1, len(restart_scores) + 1)
    colors = [COLORS["other"]] * len(restart_scores)
    colors[best_restart] = COLORS["best"]
    ax.bar(x, restart_scores, color=colors, alpha=0.85)

    _summary_box(ax, [
        ("best", f"restart {best_restart + 1}"),
        ("WCSS", f"{restart_scores[best_restart]:.4f}"),
        ("worst", f"{max(restart_scores):.4f}"),
    ])

    ax.set_xlabel("Restart")
    ax.set_ylabel("Final WCSS")
    ax.set_title(title)
    _save(fig, out_path)
