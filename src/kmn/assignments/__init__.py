"""Assignment strategies for the k-means engine."""

from .hard import NearestCentroidAssignment

__all__ = [
    'NearestCentroidAssignment'
]
