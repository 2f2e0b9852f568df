"""
Core interfaces for the k-means engine.

This module defines the abstract base classes each step of the engine
implements, so that samplers, assignment and update strategies can be
swapped independently.
"""

from abc import ABC, abstractmethod
from typing import Dict, Any, List, TYPE_CHECKING
from torch import Tensor

if TYPE_CHECKING:
    from .data_structures import IndexedCentroids


class Sampler(ABC):
    """Draws k distinct point indices without replacement."""

    @abstractmethod
    def sample(self, n_points: int, k: int) -> Tensor:
        """Sample point indices.

        Args:
            n_points: Size of the point collection
            k: Number of indices to draw

        Returns:
            (k,) int64 tensor of distinct indices in [0, n_points), in
            sampling order
        """
        pass


class DistanceMetric(ABC):
    """Abstract base class for point-to-centroid distances."""

    @abstractmethod
    def compute(self, points: Tensor, centroid: Tensor, **kwargs) -> Tensor:
        """Compute distances from points to one centroid.

        Args:
            points: (n, d) tensor of points
            centroid: (d,) centroid

        Returns:
            (n,) tensor of distances
        """
        pass

    @abstractmethod
    def pairwise(self, points: Tensor, centroids: Tensor, **kwargs) -> Tensor:
        """Compute the (n, k) matrix of distances from points to centroids."""
        pass


class InitializationStrategy(ABC):
    """Abstract base class for centroid initialization."""

    @abstractmethod
    def initialize(self, points: Tensor, n_clusters: int,
                   **kwargs) -> 'IndexedCentroids':
        """Create the initial indexed centroids.

        Args:
            points: (n, d) tensor of data points
            n_clusters: Number of clusters to initialize

        Returns:
            IndexedCentroids with identifiers 1..n_clusters
        """
        pass


class AssignmentStrategy(ABC):
    """Abstract base class for point-to-cluster assignment."""

    @abstractmethod
    def compute_assignments(self, points: Tensor,
                            centroids: 'IndexedCentroids',
                            **kwargs) -> Tensor:
        """Compute the cluster identifier of every point.

        Args:
            points: (n, d) tensor of data points
            centroids: Current indexed centroids

        Returns:
            (n,) int64 tensor of cluster identifiers
        """
        pass


class ParameterUpdater(ABC):
    """Abstract base class for centroid update strategies."""

    @abstractmethod
    def update(self, points: Tensor, assignments: Tensor,
               centroids: 'IndexedCentroids', **kwargs) -> List[int]:
        """Recompute centroids in place from the current assignments.

        Args:
            points: (n, d) tensor of all data points
            assignments: (n,) tensor of cluster identifiers
            centroids: Indexed centroids, mutated in place

        Returns:
            Identifiers of clusters that had no points
        """
        pass


class ConvergenceCriterion(ABC):
    """Abstract base class for convergence checking."""

    def __init__(self):
        self.history = []

    @abstractmethod
    def check(self, current_state: Dict[str, Any]) -> bool:
        """Check if the algorithm has converged.

        Args:
            current_state: Dictionary containing current algorithm state

        Returns:
            True if converged, False otherwise
        """
        pass

    def reset(self):
        """Reset convergence history."""
        self.history = []
