"""
Input validation and precondition checks.

Converts caller data into point tensors without changing the element type,
maps element types to centroid types, and checks the preconditions of a
clustering request. Precondition failures are returned as values so that a
rejected request never touches the caller's output array.
"""

from enum import Enum
from typing import Optional, Sequence, Union
import torch
from torch import Tensor
import numpy as np


# Element type -> centroid element type. Integer and bool points get
# double precision centroids; floating points keep their own type.
_CENTROID_DTYPES = {
    torch.bool: torch.float64,
    torch.uint8: torch.float64,
    torch.int8: torch.float64,
    torch.int16: torch.float64,
    torch.int32: torch.float64,
    torch.int64: torch.float64,
    torch.uint16: torch.float64,
    torch.uint32: torch.float64,
    torch.uint64: torch.float64,
    torch.float16: torch.float16,
    torch.bfloat16: torch.bfloat16,
    torch.float32: torch.float32,
    torch.float64: torch.float64,
}

# Wide unsigned types have almost no eager kernels (indexing, comparison),
# so their points are stored in a type that holds every value exactly, or
# in the centroid type when nothing narrower does.
_STORAGE_DTYPES = {
    torch.uint16: torch.int64,
    torch.uint32: torch.int64,
    torch.uint64: torch.float64,
}

_INDEX_MAX = torch.iinfo(torch.int64).max


class ClusterFailure(Enum):
    """Reasons a clustering request is rejected before any work is done."""

    INVALID_CLUSTER_COUNT = 'k must be at least 2'
    INSUFFICIENT_POINTS = 'fewer points than clusters, or too many points to index'
    SIZE_MISMATCH = 'assignment array length differs from the number of points'


def promoted_dtype(dtype: torch.dtype) -> torch.dtype:
    """Centroid element type for points of element type ``dtype``.

    Args:
        dtype: Element type of the input points

    Returns:
        ``torch.float64`` for integer types, ``dtype`` itself for floating types

    Raises:
        TypeError: For element types that cannot hold a mean (complex, etc.)
    """
    try:
        return _CENTROID_DTYPES[dtype]
    except KeyError:
        raise TypeError(f"Unsupported point element type: {dtype}") from None


def as_points(points: Union[Tensor, np.ndarray, Sequence]) -> Tensor:
    """Convert a point collection to an (n, d) tensor.

    The element type is preserved and tensors/arrays are not copied, so the
    caller's points are shared rather than duplicated. Nested sequences go
    through numpy, so Python floats stay double precision. Arrays with
    negative strides and ``uint16``/``uint32``/``uint64`` points are copied
    (the latter widened losslessly where possible). A 1-D collection is
    treated as n points of dimension 1.

    Args:
        points: Tensor, numpy array, or nested sequence of coordinates

    Returns:
        (n, d) tensor view of the points

    Raises:
        TypeError: If the input cannot be converted
        ValueError: If the input has more than 2 dimensions
    """
    if isinstance(points, Tensor):
        X = points
    elif isinstance(points, (np.ndarray, list, tuple)):
        A = np.asarray(points)
        if any(s < 0 for s in A.strides):
            A = np.ascontiguousarray(A)
        X = torch.from_numpy(A)
    else:
        raise TypeError(f"Cannot convert {type(points)} to a point tensor")

    if X.dim() == 1:
        X = X.unsqueeze(1)
    elif X.dim() != 2:
        raise ValueError(f"Expected 2D point collection, got {X.dim()}D")

    promoted_dtype(X.dtype)
    if X.dtype in _STORAGE_DTYPES:
        X = X.to(_STORAGE_DTYPES[X.dtype])
    return X


def check_cluster_request(points: Union[Tensor, np.ndarray, Sequence],
                          assignment_out: Sequence,
                          k: int) -> Optional[ClusterFailure]:
    """Check the preconditions of a clustering request.

    Args:
        points: Point collection
        assignment_out: Caller-owned output array, one slot per point
        k: Requested number of clusters

    Returns:
        None if the request is valid, otherwise the first failing check
    """
    if k < 2:
        return ClusterFailure.INVALID_CLUSTER_COUNT

    n_points = len(points)
    if not 0 <= n_points <= _INDEX_MAX:
        return ClusterFailure.INSUFFICIENT_POINTS
    if n_points < k:
        return ClusterFailure.INSUFFICIENT_POINTS
    if n_points != len(assignment_out):
        return ClusterFailure.SIZE_MISMATCH

    return None


def check_n_iterations(n: int) -> int:
    """Validate an iteration budget."""
    if n < 0:
        raise ValueError(f"Number of iterations must be non-negative, got {n}")
    return int(n)
