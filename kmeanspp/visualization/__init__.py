"""
Visualization module for kmeanspp.

Provides plotting utilities for:
- Cluster assignment scatter plots
- WCSS convergence of a restart
- Final WCSS of every restart
"""

from .plot_utils import (
    plot_cluster_assignments,
    plot_wcss_convergence,
    plot_restart_scores,
    STYLE_CONFIG,
)

__all__ = [
    "plot_cluster_assignments",
    "plot_wcss_convergence",
    "plot_restart_scores",
    "STYLE_CONFIG",
]
