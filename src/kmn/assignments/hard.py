"""
Nearest-centroid assignment.

Assigns each point the identifier of its nearest centroid.
"""

from typing import Optional
import torch
from torch import Tensor

from ..base.interfaces import AssignmentStrategy, DistanceMetric
from ..base.data_structures import IndexedCentroids, AssignmentBuffer
from ..distances.euclidean import EuclideanDistance


class NearestCentroidAssignment(AssignmentStrategy):
    """Hard assignment to the nearest centroid.

    When several centroids are equally close, the one stored first wins.
    """

    def __init__(self, metric: Optional[DistanceMetric] = None):
        self.metric = metric if metric is not None else EuclideanDistance()

    def compute_assignments(self, points: Tensor,
                            centroids: IndexedCentroids,
                            **kwargs) -> Tensor:
        """Assign each point to its nearest centroid.

        Args:
            points: (n, d) data points
            centroids: Current indexed centroids

        Returns:
            (n,) int64 tensor of cluster identifiers
        """
        distances = self.metric.pairwise(points, centroids.centroids)

        # argmin returns the first index among equal minima
        nearest = torch.argmin(distances, dim=1)

        return centroids.ids[nearest]

    def assign(self, points: Tensor, out: AssignmentBuffer,
               centroids: IndexedCentroids) -> Tensor:
        """Compute assignments and write them into ``out``."""
        assignments = self.compute_assignments(points, centroids)
        out.write(assignments)
        return assignments
