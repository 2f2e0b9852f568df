"""
K-means clustering.

``cluster`` is the single-pass driver: sample k centroids, assign every point
to its nearest centroid once, then recompute the centroid means n times
without re-assigning. ``KMeans`` wraps it in an estimator and adds the
canonical alternating mode.
"""

from typing import Optional, Union, Sequence, List
import torch
from torch import Tensor
import numpy as np
import time
import warnings

from ..base.clustering_base import BaseClusteringAlgorithm
from ..base.interfaces import Sampler
from ..base.data_structures import (
    IndexedCentroids, AssignmentBuffer, KMeansResult, count_cluster_sizes
)
from ..assignments.hard import NearestCentroidAssignment
from ..initialization.random import RandomSampler, SampleInit
from ..updates.mean import MeanUpdater
from ..utils.convergence import ChangeInAssignments
from ..utils.metrics import inertia
from ..utils.validation import as_points, check_cluster_request, check_n_iterations

MODES = ('single_pass', 'alternating')


def _build_result(points: Tensor, out: AssignmentBuffer,
                  centroids: IndexedCentroids) -> KMeansResult:
    """Assemble the result from the final centroids and the written assignments."""
    assignments = out.read(points.device)
    return KMeansResult(
        centroids=centroids.ordered(),
        cluster_sizes=count_cluster_sizes(assignments, centroids.n_clusters),
        points=points,
        assignments=out
    )


def cluster(points: Union[Tensor, np.ndarray, Sequence],
            assignment_out: Union[Tensor, np.ndarray, List[int]],
            k: int,
            n: int,
            *,
            sampler: Optional[Sampler] = None,
            random_state: Optional[int] = None,
            empty_cluster: str = 'keep',
            verbose: int = 0) -> Optional[KMeansResult]:
    """Cluster points into k groups.

    Centroids are initialized from a sample of k points, every point is
    assigned to its nearest centroid once, and the centroids are then
    replaced by the mean of their assigned points n times. Points are not
    re-assigned between updates.

    Args:
        points: (N, D) point collection; never modified
        assignment_out: Caller-owned array of length N that receives the
            cluster identifier (1..k) of every point
        k: Number of clusters
        n: Number of centroid updates (0 keeps the sampled centroids)
        sampler: Source of the initial sample (default: RandomSampler)
        random_state: Seed for the default sampler
        empty_cluster: 'keep' or 'raise', see MeanUpdater
        verbose: Verbosity level (0=silent, 1=progress, 2=detailed)

    Returns:
        KMeansResult, or None when k < 2, there are fewer than k points, or
        ``assignment_out`` does not have one slot per point. A rejected call
        does not write to ``assignment_out``.

    Raises:
        ValueError: If n is negative or empty_cluster is unknown
        EmptyClusterError: If a cluster empties and empty_cluster='raise'
    """
    n = check_n_iterations(n)
    updater = MeanUpdater(empty_cluster)

    failure = check_cluster_request(points, assignment_out, k)
    if failure is not None:
        if verbose:
            print(f"Rejected clustering request: {failure.value}")
        return None

    X = as_points(points)
    out = AssignmentBuffer(assignment_out)
    if sampler is None:
        sampler = RandomSampler(random_state)

    if verbose:
        print(f"Initializing {k} clusters from {X.shape[0]} points...")

    start_time = time.time()
    centroids = SampleInit(sampler).initialize(X, k)
    NearestCentroidAssignment().assign(X, out, centroids)
    assignments = out.read(X.device)

    for iteration in range(n):
        empty = updater.update(X, assignments, centroids)

        if verbose >= 2:
            objective = inertia(X, centroids.ordered(), assignments)
            print(f"Update {iteration:3d}: inertia = {objective:.6f}"
                  + (f" ({len(empty)} empty)" if empty else ""))

    if verbose:
        print(f"Total clustering time: {time.time() - start_time:.3f}s")

    return _build_result(X, out, centroids)


class KMeans(BaseClusteringAlgorithm):
    """K-means clustering estimator.

    Parameters
    ----------
    n_clusters : int
        Number of clusters
    max_iter : int, default=10
        Iteration budget. In 'single_pass' mode this is exactly the number
        of centroid updates; in 'alternating' mode it bounds the number of
        assign/update rounds.
    mode : {'single_pass', 'alternating'}, default='single_pass'
        - 'single_pass' : assign once, then update centroids max_iter times
        - 'alternating' : classic Lloyd iterations until assignments settle
    tol : float, default=1e-4
        Alternating mode stops once fewer than this fraction of points
        change cluster
    empty_cluster : {'keep', 'raise'}, default='keep'
        Policy for clusters that lose all their points
    sampler : Sampler, optional
        Source of the initial sample. Defaults to RandomSampler(random_state).
    verbose : int, default=0
        Verbosity level
    random_state : int, optional
        Random seed for reproducibility
    device : torch.device, optional
        Device for computation. By default the data stays where it is.

    Attributes
    ----------
    labels_ : Tensor of shape (n_samples,)
        Cluster identifiers (1..n_clusters) of the training data
    cluster_centers_ : Tensor of shape (n_clusters, n_features)
        Centroids; row i belongs to identifier i+1
    cluster_sizes_ : Tensor of shape (n_clusters,)
        Number of training points per cluster
    result_ : KMeansResult
        Grouping view over the training data
    inertia_ : float
        Sum of squared distances to the assigned centroids
    n_iter_ : int
        Number of update rounds run
    """

    def __init__(self,
                 n_clusters: int,
                 max_iter: int = 10,
                 mode: str = 'single_pass',
                 tol: float = 1e-4,
                 empty_cluster: str = 'keep',
                 sampler: Optional[Sampler] = None,
                 verbose: int = 0,
                 random_state: Optional[int] = None,
                 device: Optional[torch.device] = None):
        """Initialize K-means algorithm."""
        super().__init__(
            n_clusters=n_clusters,
            max_iter=max_iter,
            verbose=verbose,
            random_state=random_state,
            device=device
        )
        self.mode = mode
        self.tol = tol
        self.empty_cluster = empty_cluster
        self.sampler = sampler

        self.labels_ = None
        self.result_ = None

    def _make_sampler(self) -> Sampler:
        if self.sampler is not None:
            return self.sampler
        return RandomSampler(self.random_state)

    def _fit(self, X: Tensor) -> 'KMeans':
        """Fit on validated data."""
        if self.mode not in MODES:
            raise ValueError(f"Unknown mode: {self.mode}")
        check_n_iterations(self.max_iter)

        labels = torch.zeros(X.shape[0], dtype=torch.long, device=X.device)
        failure = check_cluster_request(X, labels, self.n_clusters)
        if failure is not None:
            raise ValueError(f"Cannot fit {self.n_clusters} clusters: "
                             f"{failure.value} ({failure.name})")

        self.history_ = []
        if self.mode == 'single_pass':
            result = cluster(
                X, labels, self.n_clusters, self.max_iter,
                sampler=self._make_sampler(),
                empty_cluster=self.empty_cluster,
                verbose=self.verbose
            )
            self.n_iter_ = self.max_iter
        else:
            result = self._fit_alternating(X, labels)

        self.result_ = result
        self.labels_ = labels
        self.fitted_ = True
        return self

    def _fit_alternating(self, X: Tensor, labels: Tensor) -> KMeansResult:
        """Lloyd iterations: re-assign after every centroid update."""
        updater = MeanUpdater(self.empty_cluster)
        assigner = NearestCentroidAssignment()
        criterion = ChangeInAssignments(min_change_fraction=self.tol)
        out = AssignmentBuffer(labels)

        if self.verbose:
            print(f"Initializing {self.n_clusters} clusters...")

        start_time = time.time()
        centroids = SampleInit(self._make_sampler()).initialize(X, self.n_clusters)

        self.n_iter_ = 0
        converged = False
        for iteration in range(self.max_iter):
            iter_start_time = time.time()

            assignments = assigner.assign(X, out, centroids)
            converged = criterion.check({
                'iteration': iteration,
                'assignments': assignments
            })
            if converged:
                if self.verbose:
                    print(f"Converged at iteration {iteration}")
                break

            empty = updater.update(X, assignments, centroids)
            objective = inertia(X, centroids.ordered(), assignments)
            self.history_.append({
                'iteration': iteration,
                'inertia': objective,
                'empty_clusters': empty
            })
            self.n_iter_ = iteration + 1

            iter_time = time.time() - iter_start_time
            if self.verbose >= 2 or (self.verbose >= 1 and iteration % 10 == 0):
                print(f"Iteration {iteration:3d}: inertia = {objective:.6f} "
                      f"({iter_time:.3f}s)")

        if not converged:
            # Labels must describe the final centroids
            assigner.assign(X, out, centroids)
            if self.verbose:
                warnings.warn(f"Failed to converge after {self.max_iter} iterations")

        if self.verbose:
            print(f"Total fitting time: {time.time() - start_time:.3f}s")

        return _build_result(X, out, centroids)

    @property
    def cluster_centers_(self) -> Tensor:
        """Centroids ordered by cluster identifier."""
        self._check_fitted()
        return self.result_.centroids

    @property
    def cluster_sizes_(self) -> Tensor:
        """Training points per cluster."""
        self._check_fitted()
        return self.result_.cluster_sizes

    @property
    def inertia_(self) -> float:
        """Sum of squared distances of training points to their centroids."""
        self._check_fitted()
        return inertia(self.result_.points, self.result_.centroids, self.labels_)

    def predict(self, X: Union[Tensor, np.ndarray, Sequence]) -> Tensor:
        """Predict cluster identifiers for new data.

        Parameters
        ----------
        X : Tensor of shape (n_samples, n_features)
            New data to predict

        Returns
        -------
        labels : Tensor of shape (n_samples,)
            Identifiers of the nearest centroids (1..n_clusters)
        """
        self._check_fitted()
        X = self._validate_data(X)
        centers = self.cluster_centers_.to(X.device)
        centroids = IndexedCentroids(
            ids=torch.arange(1, self.n_clusters + 1, device=X.device),
            centroids=centers
        )
        return NearestCentroidAssignment().compute_assignments(X, centroids)

    def score(self, X: Union[Tensor, np.ndarray, Sequence],
              y: Optional[Tensor] = None) -> float:
        """Negative inertia of X under the fitted centroids."""
        X = self._validate_data(X)
        labels = self.predict(X)
        return -inertia(X, self.cluster_centers_.to(X.device), labels)

    def get_params(self, deep: bool = True):
        params = super().get_params(deep)
        params.update({
            'mode': self.mode,
            'tol': self.tol,
            'empty_cluster': self.empty_cluster,
            'sampler': self.sampler
        })
        return params
