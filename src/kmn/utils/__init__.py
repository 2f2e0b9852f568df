"""Utility functions for the k-means engine."""

from .validation import (
    ClusterFailure,
    promoted_dtype,
    as_points,
    check_cluster_request,
    check_n_iterations
)

from .convergence import ChangeInAssignments

from .metrics import inertia

__all__ = [
    # Validation
    'ClusterFailure',
    'promoted_dtype',
    'as_points',
    'check_cluster_request',
    'check_n_iterations',

    # Convergence criteria
    'ChangeInAssignments',

    # Metrics
    'inertia'
]
