"""Initialization strategies for the k-means engine."""

from .random import RandomSampler, IndexSampler, SampleInit

__all__ = [
    'RandomSampler',
    'IndexSampler',
    'SampleInit'
]
