# tests/utils.py
"""
Small, reusable helpers used across the kmn test suite.

Functions:
- to_numpy(x): tensor or array to numpy.
- perm_invariant_accuracy(y_pred, y_true): best accuracy over relabelings of y_pred.
- time_block(label, meta=None): context manager that prints wall-clock time with optional metadata.
- print_timing(label, seconds, **meta): convenience printer for timings (used by time_block).
"""

from __future__ import annotations

import itertools
import json
import time
from contextlib import contextmanager
from typing import Any, Dict

import numpy as np
import torch


def to_numpy(x: Any) -> np.ndarray:
    if isinstance(x, torch.Tensor):
        return x.detach().cpu().numpy()
    return np.asarray(x)


def perm_invariant_accuracy(y_pred: Any, y_true: Any) -> float:
    """
    Best accuracy of y_pred against y_true over all relabelings of y_pred.

    Labels may use any integer values (e.g. cluster ids 1..k against
    ground-truth 0..k-1). Brute force over permutations; keep k small.
    """
    y_pred = to_numpy(y_pred)
    y_true = to_numpy(y_true)
    if y_pred.shape != y_true.shape:
        raise ValueError(f"Shape mismatch: {y_pred.shape} vs {y_true.shape}")

    pred_labels = np.unique(y_pred)
    true_labels = np.unique(y_true)
    if len(pred_labels) > len(true_labels):
        true_labels = np.concatenate([true_labels, -1 - np.arange(len(pred_labels) - len(true_labels))])

    best = 0.0
    for perm in itertools.permutations(true_labels, len(pred_labels)):
        mapping = dict(zip(pred_labels.tolist(), perm))
        mapped = np.array([mapping[v] for v in y_pred.tolist()])
        best = max(best, float(np.mean(mapped == y_true)))
    return best


@contextmanager
def time_block(label: str, meta: Dict[str, Any] | None = None):
    """
    Context manager to time a block and print a single-line summary.

    Output
    ------
    [timing] fit {"n":400,"d":3,"K":2} 0.123s
    """
    t0 = time.perf_counter()
    try:
        yield
    finally:
        dt = time.perf_counter() - t0
        print_timing(label, dt, **(meta or {}))


def print_timing(label: str, seconds: float, **meta: Any) -> None:
    """Print timing in a compact, machine-readable single line."""
    meta_str = ""
    if meta:
        meta_str = " " + json.dumps(meta, separators=(",", ":"))
    print(f"[timing] {label}{meta_str} {seconds:.3f}s")
