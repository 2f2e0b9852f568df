"""
Squared Euclidean distance and the nearer-than comparator.
"""

from __future__ import annotations

import numpy as np
import pytest
import torch

from kmn.distances import squared_distance, nearer, EuclideanDistance


def test_squared_distance_known_value():
    d = squared_distance(torch.tensor([0, 0]), torch.tensor([3, 4]))
    assert d.item() == 25.0
    assert d.dtype == torch.float64


def test_squared_distance_non_negative_and_zero_on_self(rng):
    for _ in range(20):
        p = torch.from_numpy(rng.normal(size=5))
        q = torch.from_numpy(rng.normal(size=5))
        assert squared_distance(p, q).item() >= 0.0
        assert squared_distance(p, p).item() == 0.0


def test_squared_distance_is_symmetric_across_element_types():
    p = torch.tensor([1, 2, 3], dtype=torch.int32)
    q = torch.tensor([0.5, 2.5, -1.0], dtype=torch.float32)
    assert squared_distance(p, q).item() == squared_distance(q, p).item()
    assert squared_distance(p, q).dtype.is_floating_point


def test_squared_distance_does_not_overflow_small_integers():
    p = torch.tensor([0], dtype=torch.int8)
    q = torch.tensor([100], dtype=torch.int8)
    assert squared_distance(p, q).item() == 10000.0


def test_squared_distance_accepts_sequences():
    assert squared_distance((1, 1), [4, 5]).item() == 25.0


def test_squared_distance_shape_mismatch():
    with pytest.raises(ValueError):
        squared_distance(torch.zeros(2), torch.zeros(3))


def test_nearer_orders_by_distance_to_reference():
    ref = torch.tensor([0.0, 0.0])
    a = torch.tensor([1.0, 0.0])
    b = torch.tensor([2.0, 0.0])
    assert nearer(ref, a, b) is True
    assert nearer(ref, b, a) is False
    # Strict comparison: equal distances are not nearer
    assert nearer(ref, a, torch.tensor([0.0, -1.0])) is False


def test_euclidean_pairwise_matches_scalar_distance(rng):
    X = torch.from_numpy(rng.normal(size=(7, 3)))
    C = torch.from_numpy(rng.normal(size=(4, 3)))
    D = EuclideanDistance().pairwise(X, C)
    assert D.shape == (7, 4)
    for i in range(7):
        for j in range(4):
            assert np.isclose(D[i, j].item(), squared_distance(X[i], C[j]).item())


def test_euclidean_compute_and_unsquared():
    X = torch.tensor([[3.0, 4.0], [0.0, 0.0]])
    c = torch.zeros(2)
    assert EuclideanDistance().compute(X, c).tolist() == [25.0, 0.0]
    assert EuclideanDistance(squared=False).compute(X, c).tolist() == [5.0, 0.0]
