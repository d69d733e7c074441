"""
Tunable parameters for the erraticism scorers.

The windowed scorer reads window_size and distance_threshold, the Kalman
scorer reads process_noise. Nothing else is recognized.
"""

import numbers
from dataclasses import dataclass

DEFAULT_WINDOW_SIZE = 25
DEFAULT_DISTANCE_THRESHOLD = 14.0  # meters
DEFAULT_PROCESS_NOISE = 0.01


@dataclass(frozen=True)
class ScoringConfig:
    """
    Configuration shared by both scoring engines.

    Attributes:
        window_size (int): Trailing steps considered by the windowed scorer (> 0)
        distance_threshold (float): Spread (meters) at which the windowed score reaches 0 (> 0)
        process_noise (float): Diagonal of the Kalman process covariance (>= 0)

    Raises:
        ValueError: If any value is out of range
    """
    window_size: int = DEFAULT_WINDOW_SIZE
    distance_threshold: float = DEFAULT_DISTANCE_THRESHOLD
    process_noise: float = DEFAULT_PROCESS_NOISE

    def __post_init__(self):
        if isinstance(self.window_size, bool) or not isinstance(self.window_size, numbers.Integral):
            raise ValueError(f"window_size must be an integer, got {self.window_size!r}")
        if self.window_size <= 0:
            raise ValueError(f"window_size must be > 0, got {self.window_size}")
        if not self.distance_threshold > 0:
            raise ValueError(f"distance_threshold must be > 0, got {self.distance_threshold}")
        if not self.process_noise >= 0:
            raise ValueError(f"process_noise must be >= 0, got {self.process_noise}")
