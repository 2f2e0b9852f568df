"""Reporting and visualization utilities for clustering results."""

from .plot_clusters import plot_clusters_2d
from .report import format_result, print_result

__all__ = [
    'plot_clusters_2d',
    'format_result',
    'print_result'
]
