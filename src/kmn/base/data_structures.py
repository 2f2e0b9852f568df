"""
Core data structures for the k-means engine.

This module provides the indexed centroid store the steps operate on, the
wrapper around the caller's assignment array, and the result object with
its lazily evaluated per-cluster views.
"""

from typing import Iterator, NamedTuple, Tuple, Union, List, Optional
import torch
from torch import Tensor
from dataclasses import dataclass
import numpy as np


@dataclass
class IndexedCentroids:
    """Centroids paired with their cluster identifiers.

    Row ``i`` of ``centroids`` belongs to cluster ``ids[i]``. Identifiers are
    fixed at creation; the update step only overwrites centroid rows.
    """

    ids: Tensor        # (K,) int64 identifiers 1..K
    centroids: Tensor  # (K, d) centroids in the promoted element type

    def __post_init__(self):
        """Validate shapes."""
        assert self.ids.dim() == 1
        assert self.centroids.dim() == 2
        assert self.ids.shape[0] == self.centroids.shape[0]

    @property
    def n_clusters(self) -> int:
        return self.ids.shape[0]

    @property
    def dimension(self) -> int:
        return self.centroids.shape[1]

    @property
    def dtype(self) -> torch.dtype:
        return self.centroids.dtype

    def __iter__(self) -> Iterator[Tuple[int, Tensor]]:
        for cluster_id, centroid in zip(self.ids.tolist(), self.centroids):
            yield cluster_id, centroid

    def centroid_for(self, cluster_id: int) -> Tensor:
        """Get the centroid row of a cluster identifier."""
        rows = torch.nonzero(self.ids == cluster_id).flatten()
        if len(rows) == 0:
            raise KeyError(cluster_id)
        return self.centroids[rows[0]]

    def ordered(self) -> Tensor:
        """Copy of the centroids sorted by identifier (row i is id i+1)."""
        order = torch.argsort(self.ids)
        return self.centroids[order].clone()


class AssignmentBuffer:
    """In-place access to a caller-owned assignment array.

    Supports torch tensors, numpy arrays and Python lists. Reads always
    return an int64 tensor; writes go into the caller's object.
    """

    def __init__(self, target: Union[Tensor, np.ndarray, List[int]]):
        if not isinstance(target, (Tensor, np.ndarray, list)):
            raise TypeError(f"Assignment array must be a tensor, ndarray or list, "
                            f"got {type(target)}")
        self.target = target

    def __len__(self) -> int:
        return len(self.target)

    def read(self, device: Optional[torch.device] = None) -> Tensor:
        """Current assignments as an (n,) int64 tensor."""
        if isinstance(self.target, Tensor):
            values = self.target
        elif isinstance(self.target, np.ndarray):
            values = torch.from_numpy(self.target.astype(np.int64, copy=False))
        else:
            values = torch.tensor(self.target, dtype=torch.long)
        return values.to(dtype=torch.long, device=device)

    def write(self, values: Tensor) -> None:
        """Overwrite every slot with ``values``."""
        if isinstance(self.target, Tensor):
            self.target.copy_(values)
        elif isinstance(self.target, np.ndarray):
            self.target[...] = values.cpu().numpy()
        else:
            self.target[:] = values.tolist()


def count_cluster_sizes(assignments: Tensor, n_clusters: int) -> Tensor:
    """Count points per cluster identifier.

    Args:
        assignments: (n,) tensor of identifiers in [1, n_clusters]
        n_clusters: Number of clusters K

    Returns:
        (K,) int64 tensor, entry i counts identifier i+1
    """
    counts = torch.bincount(assignments.long(), minlength=n_clusters + 1)
    return counts[1:n_clusters + 1]


class Cluster(NamedTuple):
    """One cluster of a result: its centroid and a view of its members."""
    centroid: Tensor
    members: 'ClusterMembers'


class ClusterMembers:
    """Lazy view of the points assigned to one cluster.

    Membership is recomputed from the assignment array on every traversal;
    members come out in input order.
    """

    def __init__(self, points: Tensor, assignments: AssignmentBuffer, cluster_id: int):
        self.points = points
        self.assignments = assignments
        self.cluster_id = cluster_id

    def _mask(self) -> Tensor:
        return self.assignments.read(self.points.device) == self.cluster_id

    def indices(self) -> Iterator[int]:
        """Row indices of the member points."""
        for idx in torch.nonzero(self._mask()).flatten().tolist():
            yield idx

    def __iter__(self) -> Iterator[Tensor]:
        for idx in self.indices():
            yield self.points[idx]

    def __len__(self) -> int:
        return int(self._mask().sum())

    def to_tensor(self) -> Tensor:
        """Materialize the members as an (m, d) tensor."""
        return self.points[self._mask()]

    def __repr__(self) -> str:
        return f"ClusterMembers(cluster_id={self.cluster_id})"


class ClusterView:
    """Ordered view of the K clusters of a result, indexed 0..K-1."""

    def __init__(self, result: 'KMeansResult'):
        self._result = result

    def __len__(self) -> int:
        return self._result.n_clusters

    def __getitem__(self, index: int) -> Cluster:
        n_clusters = len(self)
        if index < 0:
            index += n_clusters
        if not 0 <= index < n_clusters:
            raise IndexError(f"Cluster index out of range for {n_clusters} clusters")
        result = self._result
        return Cluster(
            centroid=result.centroids[index],
            members=ClusterMembers(result.points, result.assignments, index + 1)
        )

    def __iter__(self) -> Iterator[Cluster]:
        for index in range(len(self)):
            yield self[index]


@dataclass
class KMeansResult:
    """Final centroids and cluster sizes plus a grouping view.

    The points and the assignment array are borrowed from the caller, not
    copied; the result reflects them as they are when it is traversed.
    """

    centroids: Tensor       # (K, d) row i is the centroid of identifier i+1
    cluster_sizes: Tensor   # (K,) int64 counts
    points: Tensor          # (n, d) borrowed input points
    assignments: AssignmentBuffer

    @property
    def n_clusters(self) -> int:
        return self.centroids.shape[0]

    @property
    def clusters(self) -> ClusterView:
        return ClusterView(self)

    @property
    def labels(self) -> Tensor:
        """Current assignments as an int64 tensor."""
        return self.assignments.read()

    def __iter__(self) -> Iterator[Cluster]:
        return iter(self.clusters)

    def __len__(self) -> int:
        return self.n_clusters
