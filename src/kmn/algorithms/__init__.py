"""Clustering drivers and estimators."""

from .kmeans import KMeans, cluster, MODES

__all__ = [
    'KMeans',
    'cluster',
    'MODES'
]
