"""
Trajectory Simulation - Utility Functions

Shared vector helpers used by the force models.
"""

import numpy as np

from . import constants as C


def regularized_norm(vec: np.ndarray, epsilon: float = C.VELOCITY_EPSILON) -> float:
    """
    Magnitude of a vector plus a small positive epsilon.

    Used wherever a speed appears as a divisor, so a body at rest yields
    vanishing forces instead of a division by zero.
    """
    return float(np.sqrt(np.dot(vec, vec))) + epsilon


def compute_apparent_velocity(v: np.ndarray, wind_vx: float, wind_vy: float) -> np.ndarray:
    """
    Compute air-relative velocity for a horizontal wind.

    v_app = v - (wind_vx, wind_vy, 0)
    """
    return v - np.array([wind_vx, wind_vy, 0.0])
