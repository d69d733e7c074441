"""
Windowed nearest-neighbor spread scorer.

For every step, measures how far the walker is from the positions it held
over a short trailing window. A walker pacing on the spot stays close to
its recent positions (score near 1); a walker striding away or jumping
around does not (score near 0).

Neighbor sampling walks backward from step i-2, so the step directly before
the current one never takes part, and stops at the lower bound of the
window [i - window_size, i). The compared steps are therefore
i-2, i-3, ..., i-window_size.
"""

import numpy as np

from ..config import DEFAULT_DISTANCE_THRESHOLD, DEFAULT_WINDOW_SIZE, ScoringConfig
from .base import ErraticismScorerBase, ScoredStep
from .utils import positions_array


def neighbor_spread(positions, i, window_size):
    """
    Largest distance from step i to its sampled trailing neighbors.

    Args:
        positions (np.ndarray): (n, 2) array of cumulative positions
        i (int): Index of the current step, i >= window_size
        window_size (int): Window length

    Returns:
        float: Maximum distance in meters (0.0 if nothing was sampled)
    """
    neighbors = positions[i - window_size:i - 1]
    if len(neighbors) == 0:
        return 0.0

    d = neighbors - positions[i]
    return float(np.sqrt(d[:, 0] * d[:, 0] + d[:, 1] * d[:, 1]).max())


def score_neighbor(steps, window_size=DEFAULT_WINDOW_SIZE, threshold=DEFAULT_DISTANCE_THRESHOLD):
    """
    Score each step by its spread against a trailing window.

    Steps with fewer than window_size predecessors score 0.0. Otherwise
    score = 1 - min(d_max / threshold, 1).

    Args:
        steps (Sequence[PositionedStep]): Trajectory in temporal order
        window_size (int): Trailing window length (> 0)
        threshold (float): Distance in meters mapped to score 0 (> 0)

    Returns:
        list[ScoredStep]
    """
    # Reuse config validation for the two tunables
    ScoringConfig(window_size=window_size, distance_threshold=threshold)

    positions = positions_array(steps)
    scored = []

    for i, step in enumerate(steps):
        if i < window_size:
            erraticism = 0.0
        else:
            d_max = neighbor_spread(positions, i, window_size)
            erraticism = 1.0 - min(d_max / threshold, 1.0)
        scored.append(ScoredStep(step.timestamp, erraticism))

    return scored


class WindowedNeighborScorer(ErraticismScorerBase):
    """Windowed nearest-neighbor spread heuristic."""

    name = 'neighbor'

    def score(self, steps, config=None):
        config = config or ScoringConfig()
        return score_neighbor(steps, config.window_size, config.distance_threshold)
