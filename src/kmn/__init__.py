"""
kmn: k-means clustering of fixed-dimension points.

Points are an (N, D) tensor (numpy arrays and nested sequences are accepted).
Centroids of integer points are promoted to double precision. Each point is
assigned a cluster identifier in 1..k, written into a caller-owned array.

Example usage:
    >>> import torch
    >>> from kmn import cluster, IndexSampler
    >>>
    >>> points = torch.tensor([[0, 0], [0, 1], [10, 10], [10, 11]])
    >>> labels = torch.zeros(4, dtype=torch.long)
    >>>
    >>> result = cluster(points, labels, k=2, n=1, sampler=IndexSampler([0, 2]))
    >>> labels
    tensor([1, 1, 2, 2])
    >>> for centroid, members in result:
    ...     print(centroid.tolist(), len(members))
    [0.0, 0.5] 2
    [10.0, 10.5] 2
"""

__version__ = '0.1.0'

from .algorithms.kmeans import KMeans, cluster

from .base import (
    KMeansResult,
    Cluster,
    EmptyClusterError,
    EmptyClusterWarning
)

from .distances import squared_distance, nearer

from .initialization import RandomSampler, IndexSampler

from .utils import ClusterFailure, check_cluster_request, promoted_dtype

from .visualization import format_result, print_result, plot_clusters_2d

__all__ = [
    # Algorithms
    'cluster',
    'KMeans',

    # Results
    'KMeansResult',
    'Cluster',

    # Preconditions and errors
    'ClusterFailure',
    'check_cluster_request',
    'EmptyClusterError',
    'EmptyClusterWarning',

    # Building blocks
    'squared_distance',
    'nearer',
    'promoted_dtype',
    'RandomSampler',
    'IndexSampler',

    # Reporting
    'format_result',
    'print_result',
    'plot_clusters_2d',

    # Version
    '__version__'
]
