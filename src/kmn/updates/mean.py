"""
Mean update strategy for centroid-based clustering.
"""

from typing import List
import torch
from torch import Tensor
import warnings

from ..base.interfaces import ParameterUpdater
from ..base.data_structures import IndexedCentroids
from ..base.errors import EmptyClusterError, EmptyClusterWarning

EMPTY_CLUSTER_POLICIES = ('keep', 'raise')


class MeanUpdater(ParameterUpdater):
    """Replaces each centroid by the mean of its assigned points.

    Clusters with no assigned points have no mean. With ``empty_cluster='keep'``
    the previous centroid is kept and an ``EmptyClusterWarning`` is emitted
    the first time each cluster is found empty by this updater;
    with ``empty_cluster='raise'`` an ``EmptyClusterError`` is raised.
    """

    def __init__(self, empty_cluster: str = 'keep'):
        if empty_cluster not in EMPTY_CLUSTER_POLICIES:
            raise ValueError(f"empty_cluster must be one of {EMPTY_CLUSTER_POLICIES}, "
                             f"got {empty_cluster!r}")
        self.empty_cluster = empty_cluster
        self._warned = set()

    def update(self, points: Tensor, assignments: Tensor,
               centroids: IndexedCentroids, **kwargs) -> List[int]:
        """Update centroid means in place.

        Args:
            points: (n, d) all data points
            assignments: (n,) cluster identifiers
            centroids: Indexed centroids to update
            **kwargs: Ignored

        Returns:
            Identifiers of the empty clusters
        """
        empty = []

        for row, cluster_id in enumerate(centroids.ids.tolist()):
            mask = assignments == cluster_id
            count = int(mask.sum())

            if count == 0:
                if self.empty_cluster == 'raise':
                    raise EmptyClusterError(cluster_id)
                if cluster_id not in self._warned:
                    warnings.warn(f"Cluster {cluster_id} has no assigned points; "
                                  f"keeping its previous centroid", EmptyClusterWarning)
                    self._warned.add(cluster_id)
                empty.append(cluster_id)
                continue

            total = points[mask].to(centroids.dtype).sum(dim=0)
            centroids.centroids[row] = total / count

        return empty
