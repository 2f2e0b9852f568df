"""
Base class for estimators built on the k-means engine.

Provides the sklearn-style surface (fit / predict / parameters) shared by
the estimators; subclasses implement the fitting loop.
"""

from abc import abstractmethod
from typing import Optional, Dict, Any, Union, Sequence
import torch
from torch import Tensor
import numpy as np

from ..utils.validation import as_points


class BaseClusteringAlgorithm:
    """Common estimator plumbing: configuration, validation, fitted state."""

    def __init__(self,
                 n_clusters: int,
                 max_iter: int = 10,
                 verbose: int = 0,
                 random_state: Optional[int] = None,
                 device: Optional[torch.device] = None):
        """
        Args:
            n_clusters: Number of clusters K
            max_iter: Iteration budget
            verbose: Verbosity level (0=silent, 1=progress, 2=detailed)
            random_state: Random seed for reproducibility
            device: Torch device (None keeps the data where it is)
        """
        self.n_clusters = n_clusters
        self.max_iter = max_iter
        self.verbose = verbose
        self.random_state = random_state
        self.device = device

        # Algorithm state
        self.fitted_ = False
        self.n_iter_ = 0
        self.history_ = []

    @abstractmethod
    def _fit(self, X: Tensor) -> 'BaseClusteringAlgorithm':
        """Run the fitting loop on validated data."""
        pass

    @abstractmethod
    def predict(self, X: Tensor) -> Tensor:
        """Predict cluster identifiers for new data."""
        pass

    def fit(self, X: Union[Tensor, np.ndarray, Sequence],
            y: Optional[Tensor] = None) -> 'BaseClusteringAlgorithm':
        """Fit the clustering model.

        Args:
            X: (n, d) data
            y: Ignored (for sklearn compatibility)

        Returns:
            Self
        """
        return self._fit(self._validate_data(X))

    def fit_predict(self, X: Union[Tensor, np.ndarray, Sequence],
                    y: Optional[Tensor] = None) -> Tensor:
        """Fit and return the cluster identifiers of the training data."""
        self.fit(X, y)
        return self.labels_

    def _validate_data(self, X: Union[Tensor, np.ndarray, Sequence]) -> Tensor:
        """Convert input to an (n, d) tensor, keeping its element type."""
        X = as_points(X)
        if self.device is not None:
            X = X.to(self.device)
        return X

    def _check_fitted(self) -> None:
        if not self.fitted_:
            raise RuntimeError("Model must be fitted first")

    def get_params(self, deep: bool = True) -> Dict[str, Any]:
        """Get parameters (sklearn compatibility)."""
        return {
            'n_clusters': self.n_clusters,
            'max_iter': self.max_iter,
            'verbose': self.verbose,
            'random_state': self.random_state,
            'device': self.device
        }

    def set_params(self, **params) -> 'BaseClusteringAlgorithm':
        """Set parameters (sklearn compatibility)."""
        valid = self.get_params()
        for key, value in params.items():
            if key not in valid:
                raise ValueError(f"Invalid parameter {key!r} for {type(self).__name__}")
            setattr(self, key, value)
        return self
