"""Centroid update strategies for the k-means engine."""

from .mean import MeanUpdater, EMPTY_CLUSTER_POLICIES

__all__ = [
    'MeanUpdater',
    'EMPTY_CLUSTER_POLICIES'
]
