"""
Pluggable erraticism scorer implementations.

Both engines score a reconstructed trajectory through the same score()
method; get_scorer() picks one by name so the caller never branches on
the algorithm.

Example usage:
    scorer = get_scorer('neighbor')
    scorer = get_scorer('kalman', backend='filterpy')

    scored = scorer.score(steps, ScoringConfig(window_size=10))
"""

from .base import ErraticismScorerBase, ScoredStep

SCORER_NAMES = ('neighbor', 'kalman')


def get_scorer(scorer_type='neighbor', **kwargs):
    """
    Factory function to get a scorer implementation by name.

    Args:
        scorer_type (str): Scorer type - options:
            - 'neighbor': Windowed nearest-neighbor spread (cheap, local)
            - 'kalman': Kalman filter smoothing lag, min-max normalized per run
        **kwargs: Additional arguments passed to scorer constructor
            (kalman accepts backend='numpy' or 'filterpy')

    Returns:
        ErraticismScorerBase instance with a score() method

    Raises:
        ValueError: If scorer_type is not recognized
    """
    if scorer_type == 'neighbor':
        from .neighbor import WindowedNeighborScorer
        return WindowedNeighborScorer(**kwargs)
    elif scorer_type == 'kalman':
        from .kalman import KalmanScorer
        return KalmanScorer(**kwargs)
    else:
        raise ValueError(f"Unknown scorer type: {scorer_type}. Use 'neighbor' or 'kalman'")


__all__ = ['get_scorer', 'ErraticismScorerBase', 'ScoredStep', 'SCORER_NAMES']
