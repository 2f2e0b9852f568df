"""
Sample-based centroid initialization.

Selects k distinct points from the dataset as the initial centroids and
labels them 1..k in the order the sampler produced them.
"""

from typing import Optional, Sequence, Union
import torch
from torch import Tensor

from ..base.interfaces import InitializationStrategy, Sampler
from ..base.data_structures import IndexedCentroids
from ..utils.validation import promoted_dtype


class RandomSampler(Sampler):
    """Uniform sampling without replacement via ``torch.randperm``."""

    def __init__(self, random_state: Optional[int] = None):
        """
        Args:
            random_state: Seed for a private generator. If None, the global
                torch RNG is used.
        """
        self.random_state = random_state
        self._generator = None
        if random_state is not None:
            self._generator = torch.Generator()
            self._generator.manual_seed(random_state)

    def sample(self, n_points: int, k: int) -> Tensor:
        if k > n_points:
            raise ValueError(f"Cannot sample {k} points from {n_points}")
        return torch.randperm(n_points, generator=self._generator)[:k]


class IndexSampler(Sampler):
    """Always returns the same indices. Useful for reproducible starts."""

    def __init__(self, indices: Union[Tensor, Sequence[int]]):
        self.indices = torch.as_tensor(indices, dtype=torch.long).flatten()
        if len(torch.unique(self.indices)) != len(self.indices):
            raise ValueError("Sampled indices must be distinct")

    def sample(self, n_points: int, k: int) -> Tensor:
        if len(self.indices) != k:
            raise ValueError(f"Sampler holds {len(self.indices)} indices, "
                             f"but {k} were requested")
        if (self.indices < 0).any() or (self.indices >= n_points).any():
            raise ValueError(f"Sampled indices must lie in [0, {n_points})")
        return self.indices.clone()


class SampleInit(InitializationStrategy):
    """Initialize centroids with a sample of the input points."""

    def __init__(self, sampler: Optional[Sampler] = None):
        self.sampler = sampler if sampler is not None else RandomSampler()

    def initialize(self, points: Tensor, n_clusters: int,
                   **kwargs) -> IndexedCentroids:
        """Initialize centroids from sampled points.

        Args:
            points: (n, d) data points
            n_clusters: Number of clusters

        Returns:
            IndexedCentroids with ids 1..n_clusters in sampling order
        """
        n_points = points.shape[0]

        if n_clusters > n_points:
            raise ValueError(f"Cannot create {n_clusters} clusters from {n_points} points")

        indices = self.sampler.sample(n_points, n_clusters).to(points.device)

        # Index selection copies, so updates never write through to the points
        centroids = points[indices].to(promoted_dtype(points.dtype))
        ids = torch.arange(1, n_clusters + 1, device=points.device)

        return IndexedCentroids(ids=ids, centroids=centroids)
