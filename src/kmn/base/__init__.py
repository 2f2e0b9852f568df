"""Base classes, interfaces and data structures for the k-means engine."""

from .interfaces import (
    Sampler,
    DistanceMetric,
    InitializationStrategy,
    AssignmentStrategy,
    ParameterUpdater,
    ConvergenceCriterion
)

from .data_structures import (
    IndexedCentroids,
    AssignmentBuffer,
    KMeansResult,
    Cluster,
    ClusterMembers,
    ClusterView,
    count_cluster_sizes
)

from .errors import EmptyClusterError, EmptyClusterWarning

from .clustering_base import BaseClusteringAlgorithm

__all__ = [
    # Interfaces
    'Sampler',
    'DistanceMetric',
    'InitializationStrategy',
    'AssignmentStrategy',
    'ParameterUpdater',
    'ConvergenceCriterion',

    # Data structures
    'IndexedCentroids',
    'AssignmentBuffer',
    'KMeansResult',
    'Cluster',
    'ClusterMembers',
    'ClusterView',
    'count_cluster_sizes',

    # Errors
    'EmptyClusterError',
    'EmptyClusterWarning',

    # Base algorithm
    'BaseClusteringAlgorithm'
]
