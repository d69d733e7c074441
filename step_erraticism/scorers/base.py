"""
Abstract base class for erraticism scorers.

All scorer implementations must inherit from ErraticismScorerBase and
implement score().
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class ScoredStep:
    timestamp: int
    score: float  # 0 = erratic, 1 = smooth


class ErraticismScorerBase(ABC):
    """
    Abstract base class for per-step erraticism scoring.

    All subclasses must implement:
    - score(steps, config) -> list[ScoredStep]

    This interface lets the windowed-neighbor and Kalman engines be used
    interchangeably over the same reconstructed trajectory.
    """

    name = None

    @abstractmethod
    def score(self, steps, config=None):
        """
        Score every step of a reconstructed trajectory.

        Args:
            steps (Sequence[PositionedStep]): Trajectory in temporal order
            config (ScoringConfig, optional): Tunables; defaults when None

        Returns:
            list[ScoredStep]: One entry per input step, same order
        """
        pass
