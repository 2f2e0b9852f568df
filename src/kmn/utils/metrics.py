"""
Clustering quality metrics.
"""

import torch
from torch import Tensor

from .validation import promoted_dtype


def inertia(points: Tensor, centroids: Tensor, assignments: Tensor) -> float:
    """Within-cluster sum of squared distances.

    Args:
        points: (n, d) data points
        centroids: (K, d) centroids, row i belongs to identifier i+1
        assignments: (n,) identifiers in [1, K]

    Returns:
        Sum over points of the squared distance to their assigned centroid
    """
    dtype = promoted_dtype(torch.promote_types(points.dtype, centroids.dtype))
    assigned = centroids.to(dtype)[assignments.long() - 1]
    diff = points.to(dtype) - assigned
    return torch.sum(diff * diff).item()
