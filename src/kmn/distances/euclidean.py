"""
Euclidean distance for k-means.

Distances are always accumulated in a floating type, so that integer points
cannot overflow or truncate and the result does not depend on argument order.
"""

from typing import Sequence, Union
import torch
from torch import Tensor

from ..base.interfaces import DistanceMetric
from ..utils.validation import promoted_dtype

PointLike = Union[Tensor, Sequence[float]]


def _as_vector(p: PointLike) -> Tensor:
    return p if isinstance(p, Tensor) else torch.tensor(p)


def squared_distance(p: PointLike, q: PointLike) -> Tensor:
    """Squared Euclidean distance ||p - q||².

    Args:
        p: (d,) point
        q: (d,) point

    Returns:
        0-d tensor in the promoted floating type of both arguments
    """
    p = _as_vector(p)
    q = _as_vector(q)
    if p.shape != q.shape:
        raise ValueError(f"Shape mismatch: {tuple(p.shape)} vs {tuple(q.shape)}")

    dtype = promoted_dtype(torch.promote_types(p.dtype, q.dtype))
    diff = p.to(dtype) - q.to(device=p.device, dtype=dtype)
    return torch.sum(diff * diff)


def nearer(reference: PointLike, a: PointLike, b: PointLike) -> bool:
    """True if ``a`` is strictly closer to ``reference`` than ``b`` is."""
    return bool(squared_distance(a, reference) < squared_distance(b, reference))


class EuclideanDistance(DistanceMetric):
    """Squared Euclidean distance metric.

    Computes ||x - μ||² where μ is the centroid, in the centroid's element type.
    """

    def __init__(self, squared: bool = True):
        """
        Args:
            squared: If True, return squared distances (default).
                    If False, return actual Euclidean distances.
        """
        self.squared = squared

    def compute(self, points: Tensor, centroid: Tensor, **kwargs) -> Tensor:
        """Compute distances from points to one centroid.

        Args:
            points: (n, d) tensor of points
            centroid: (d,) centroid

        Returns:
            (n,) tensor of distances
        """
        diff = points.to(centroid.dtype) - centroid.unsqueeze(0)
        squared_distances = torch.sum(diff * diff, dim=1)

        if self.squared:
            return squared_distances
        else:
            return torch.sqrt(squared_distances)

    def pairwise(self, points: Tensor, centroids: Tensor, **kwargs) -> Tensor:
        """Compute distances from every point to every centroid.

        Args:
            points: (n, d) tensor of points
            centroids: (K, d) tensor of centroids

        Returns:
            (n, K) tensor of distances
        """
        if points.shape[1] != centroids.shape[1]:
            raise ValueError(f"Expected dimension {centroids.shape[1]}, got {points.shape[1]}")

        diff = points.to(centroids.dtype).unsqueeze(1) - centroids.unsqueeze(0)
        squared_distances = torch.sum(diff * diff, dim=2)

        if self.squared:
            return squared_distances
        else:
            return torch.sqrt(squared_distances)
