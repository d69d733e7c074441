"""
Kalman filter erraticism scorer.

Runs a 2D position-only linear Kalman filter over the dead-reckoned
trajectory and scores each step by how far the filtered estimate sits from
the observed position. A smooth walk is tracked closely; sudden jumps leave
the estimate lagging behind.

Model (identity everything):
    F = I   (position persists, no motion model)
    H = I   (full position observed every step)
    R = I   (unit measurement noise)
    Q = q*I (process noise, q = process_noise)

State starts at mean (0, 0), covariance I.

The deviation is taken after the update, against the same observation that
produced it, so it measures smoothing lag rather than a predictive
innovation. Raw deviations are min-max normalized over the whole run and
flipped so the largest deviation scores 0.0 and the smallest 1.0.

Two backends compute the recursion:
- 'numpy': standard-form covariance update, pseudoinverse if S is singular
- 'filterpy': filterpy.kalman.predict/update (Joseph-form covariance)
"""

import logging
from dataclasses import dataclass

import numpy as np

from ..config import DEFAULT_PROCESS_NOISE, ScoringConfig
from .base import ErraticismScorerBase, ScoredStep
from .utils import inverted_min_max

logger = logging.getLogger(__name__)

BACKENDS = ('numpy', 'filterpy')

# Score for every step when all raw deviations are equal
DEGENERATE_SCORE = 1.0


@dataclass(frozen=True)
class FilterState:
    mean: np.ndarray        # (2,) position estimate
    covariance: np.ndarray  # (2, 2)


@dataclass(frozen=True)
class KalmanModel:
    F: np.ndarray  # state transition
    H: np.ndarray  # observation
    R: np.ndarray  # observation noise covariance
    Q: np.ndarray  # process noise covariance

    @classmethod
    def position_only(cls, process_noise=DEFAULT_PROCESS_NOISE):
        """Identity transition/observation model with unit measurement noise."""
        return cls(
            F=np.eye(2),
            H=np.eye(2),
            R=np.eye(2),
            Q=process_noise * np.eye(2),
        )


def initial_state():
    return FilterState(mean=np.zeros(2), covariance=np.eye(2))


def predict(state, model):
    """Kalman predict step (time update)."""
    # x = F*x
    mean = model.F @ state.mean
    # P = F*P*F' + Q
    covariance = model.F @ state.covariance @ model.F.T + model.Q
    return FilterState(mean, covariance)


def update(state, z, model):
    """
    Kalman update step (measurement update).

    Standard form: P = (I - K*H)*P

    Args:
        state (FilterState): Predicted state
        z (array-like): Observed (x, y) position
        model (KalmanModel): Filter matrices

    Returns:
        FilterState: Posterior state
    """
    H = model.H
    z = np.asarray(z, dtype=float)

    # Innovation covariance
    S = H @ state.covariance @ H.T + model.R

    # Kalman gain: K = P*H'*inv(S)
    try:
        S_inv = np.linalg.inv(S)
    except np.linalg.LinAlgError:
        logger.warning("Singular innovation covariance, using pseudoinverse")
        S_inv = np.linalg.pinv(S)

    K = state.covariance @ H.T @ S_inv

    mean = state.mean + K @ (z - H @ state.mean)
    n = state.mean.shape[0]
    covariance = (np.eye(n) - K @ H) @ state.covariance

    return FilterState(mean, covariance)


def _filterpy_step(state, z, model):
    from filterpy.kalman import predict as fp_predict
    from filterpy.kalman import update as fp_update

    mean, covariance = fp_predict(state.mean, state.covariance, F=model.F, Q=model.Q)
    mean, covariance = fp_update(mean, covariance, np.asarray(z, dtype=float), model.R, H=model.H)
    return FilterState(mean, covariance)


def kalman_step(state, z, model, backend='numpy'):
    """
    Run one predict/update cycle and measure the post-update deviation.

    Args:
        state (FilterState): State after the previous step
        z (array-like): Observed (x, y) position for this step
        model (KalmanModel): Filter matrices
        backend (str): 'numpy' or 'filterpy'

    Returns:
        tuple: (FilterState, raw deviation in meters)
    """
    if backend == 'numpy':
        state = update(predict(state, model), z, model)
    elif backend == 'filterpy':
        state = _filterpy_step(state, z, model)
    else:
        raise ValueError(f"Unknown Kalman backend: {backend}. Use {', '.join(repr(b) for b in BACKENDS)}")

    deviation = float(np.linalg.norm(model.H @ state.mean - np.asarray(z, dtype=float)))
    return state, deviation


def raw_deviations(steps, process_noise=DEFAULT_PROCESS_NOISE, backend='numpy'):
    """
    First pass: run the filter over every step in order.

    Returns:
        list[float]: Post-update deviation per step
    """
    model = KalmanModel.position_only(process_noise)
    state = initial_state()
    deviations = []

    for step in steps:
        state, deviation = kalman_step(state, (step.x, step.y), model, backend)
        deviations.append(deviation)

    return deviations


def score_kalman(steps, process_noise=DEFAULT_PROCESS_NOISE, backend='numpy'):
    """
    Score each step by normalized Kalman smoothing lag.

    The whole run is buffered: normalization needs the global min and max
    before any score can be emitted.

    Args:
        steps (Sequence[PositionedStep]): Trajectory in temporal order
        process_noise (float): Process covariance diagonal (>= 0)
        backend (str): 'numpy' or 'filterpy'

    Returns:
        list[ScoredStep]
    """
    ScoringConfig(process_noise=process_noise)

    deviations = raw_deviations(steps, process_noise, backend)
    scores = inverted_min_max(deviations, degenerate=DEGENERATE_SCORE)

    if deviations and min(deviations) == max(deviations):
        logger.debug(f"All {len(deviations)} deviation(s) equal, scoring every step {DEGENERATE_SCORE}")

    return [ScoredStep(step.timestamp, score) for step, score in zip(steps, scores)]


class KalmanScorer(ErraticismScorerBase):
    """Kalman filter smoothing-lag heuristic."""

    name = 'kalman'

    def __init__(self, backend='numpy'):
        """
        Args:
            backend (str): 'numpy' (default) or 'filterpy'

        Raises:
            ValueError: If backend is not recognized
        """
        if backend not in BACKENDS:
            raise ValueError(f"Unknown Kalman backend: {backend}. Use {', '.join(repr(b) for b in BACKENDS)}")
        self.backend = backend

    def score(self, steps, config=None):
        config = config or ScoringConfig()
        return score_kalman(steps, config.process_noise, self.backend)
