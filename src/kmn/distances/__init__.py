"""Distance functions for the k-means engine."""

from .euclidean import EuclideanDistance, squared_distance, nearer

__all__ = [
    'EuclideanDistance',
    'squared_distance',
    'nearer'
]
