"""
Per-step erraticism scoring for pedestrian-dead-reckoning step logs.

Example usage:
    from step_erraticism import read_steplog, get_scorer, ScoringConfig

    steps = read_steplog('walk.steplog')
    scored = get_scorer('kalman').score(steps, ScoringConfig(process_noise=0.05))
"""

from .config import ScoringConfig
from .scorers import ScoredStep, get_scorer
from .scorers.kalman import score_kalman
from .scorers.neighbor import score_neighbor
from .steplog import (
    PositionedStep, RawStepRecord, SteplogNotFoundError, load_steps, parse_records,
    read_steplog, reconstruct,
)

__version__ = '0.1.0'

__all__ = [
    'ScoringConfig', 'ScoredStep', 'get_scorer', 'score_kalman', 'score_neighbor',
    'PositionedStep', 'RawStepRecord', 'SteplogNotFoundError', 'load_steps',
    'parse_records', 'read_steplog', 'reconstruct',
]
