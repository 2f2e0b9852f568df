"""
Cluster visualization utilities.

Scatter plots of 2D clustering results with their centroids.
"""

from typing import Optional, List
import torch
from torch import Tensor
import matplotlib.pyplot as plt
import numpy as np

from ..base.data_structures import KMeansResult


def _to_numpy(x: Tensor) -> np.ndarray:
    # bfloat16 has no numpy counterpart
    return x.detach().to(torch.float64).cpu().numpy()


def plot_clusters_2d(result: KMeansResult,
                     ax: Optional[plt.Axes] = None,
                     colors: Optional[List[str]] = None,
                     alpha: float = 0.7,
                     center_marker: str = 'X',
                     center_size: int = 200,
                     point_size: int = 50,
                     show_legend: bool = True,
                     title: Optional[str] = None) -> plt.Axes:
    """Plot a 2D clustering result.

    Args:
        result: Clustering result over (n, 2) points
        ax: Matplotlib axes (created if None)
        colors: List of colors for clusters
        alpha: Point transparency
        center_marker: Marker for centroids
        center_size: Size of centroid markers
        point_size: Size of data points
        show_legend: Whether to show legend
        title: Plot title

    Returns:
        Matplotlib axes
    """
    if result.points.shape[1] != 2:
        raise ValueError(f"Expected 2D points, got dimension {result.points.shape[1]}")

    if ax is None:
        fig, ax = plt.subplots(figsize=(8, 6))

    n_clusters = result.n_clusters

    if colors is None:
        cmap = plt.get_cmap('tab10' if n_clusters <= 10 else 'tab20')
        colors = [cmap(i / n_clusters) for i in range(n_clusters)]

    for index, (centroid, members) in enumerate(result.clusters):
        members_np = _to_numpy(members.to_tensor())
        if len(members_np) == 0:
            continue
        ax.scatter(members_np[:, 0], members_np[:, 1],
                   c=[colors[index % len(colors)]],
                   s=point_size,
                   alpha=alpha,
                   edgecolors='black',
                   linewidth=0.5,
                   label=f'Cluster {index + 1}')

    centers_np = _to_numpy(result.centroids)
    ax.scatter(centers_np[:, 0], centers_np[:, 1],
               c='black',
               marker=center_marker,
               s=center_size,
               edgecolors='white',
               linewidth=2,
               label='Centroids',
               zorder=10)

    ax.set_xlabel('Feature 1')
    ax.set_ylabel('Feature 2')

    if title:
        ax.set_title(title)

    if show_legend:
        ax.legend()

    return ax
