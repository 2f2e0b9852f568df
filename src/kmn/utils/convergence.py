"""
Convergence criteria for the alternating k-means mode.

The single-pass driver runs a fixed number of updates and never consults a
criterion; alternating k-means stops once assignments settle.
"""

from typing import Dict, Any
from torch import Tensor

from ..base.interfaces import ConvergenceCriterion


class ChangeInAssignments(ConvergenceCriterion):
    """Convergence based on fraction of points that change clusters."""

    def __init__(self, min_change_fraction: float = 1e-4,
                 patience: int = 1):
        """
        Args:
            min_change_fraction: Converged once fewer than this fraction of
                points change cluster
            patience: Number of stable iterations required
        """
        super().__init__()
        self.min_change_fraction = min_change_fraction
        self.patience = patience
        self._prev_assignments = None
        self._stable_count = 0

    def check(self, current_state: Dict[str, Any]) -> bool:
        """Check if assignments have stabilized."""
        current_assignments: Tensor = current_state['assignments']

        if self._prev_assignments is None:
            self._prev_assignments = current_assignments.clone()
            return False

        n_changed = (current_assignments != self._prev_assignments).sum().item()
        n_total = len(current_assignments)
        change_fraction = n_changed / n_total

        self.history.append({
            'iteration': current_state.get('iteration', len(self.history)),
            'n_changed': n_changed,
            'change_fraction': change_fraction
        })

        if change_fraction < self.min_change_fraction:
            self._stable_count += 1
            converged = self._stable_count >= self.patience
        else:
            self._stable_count = 0
            converged = False

        self._prev_assignments = current_assignments.clone()

        return converged

    def reset(self):
        super().reset()
        self._prev_assignments = None
        self._stable_count = 0
