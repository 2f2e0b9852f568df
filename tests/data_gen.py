# tests/data_gen.py
"""
Tiny synthetic-data generators reused across the kmn test suite.

    >>> X, y, centers = make_blobs(n_per=50, centers=[[0, 0], [5, 5]], seed=0)
    >>> X.shape, y.shape, centers.shape
    ((100, 2), (100,), (2, 2))
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple
import numpy as np

NDArray = np.ndarray


def make_blobs(
    n_per: int = 100,
    centers: Sequence[Sequence[float]] = ((0.0, 0.0), (3.0, 3.0)),
    scale: float = 0.3,
    seed: Optional[int] = None,
) -> Tuple[NDArray, NDArray, NDArray]:
    """
    Isotropic Gaussian blobs, one per center, stacked in center order.

    Parameters
    ----------
    n_per : int, default=100
        Number of points per blob.
    centers : sequence of (d,) points
        Blob centers.
    scale : float, default=0.3
        Standard deviation of each blob.
    seed : int or None, default=None
        RNG seed for reproducibility.

    Returns
    -------
    X : (len(centers)*n_per, d) ndarray, float32
    y : (len(centers)*n_per,) ndarray, int64
        Index of the generating blob, [0]*n_per + [1]*n_per + ...
    C : (len(centers), d) ndarray, float32
    """
    rng = np.random.default_rng(seed)
    C = np.asarray(centers, dtype=np.float32)
    k, d = C.shape

    X = np.vstack([c + rng.normal(scale=scale, size=(n_per, d)) for c in C]).astype(np.float32)
    y = np.repeat(np.arange(k, dtype=np.int64), n_per)

    return X, y, C


def make_integer_grid_blobs(
    n_per: int = 20,
    offsets: Sequence[int] = (0, 100),
    d: int = 2,
    seed: Optional[int] = None,
) -> Tuple[NDArray, NDArray]:
    """
    Integer-valued blobs: small random integer jitter around each offset.

    Returns
    -------
    X : (len(offsets)*n_per, d) ndarray, int64
    y : (len(offsets)*n_per,) ndarray, int64
    """
    rng = np.random.default_rng(seed)
    parts = [off + rng.integers(-3, 4, size=(n_per, d)) for off in offsets]
    X = np.vstack(parts).astype(np.int64)
    y = np.repeat(np.arange(len(offsets), dtype=np.int64), n_per)
    return X, y
