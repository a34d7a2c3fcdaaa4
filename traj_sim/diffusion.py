"""
Trajectory Simulation - Transient Heat Conduction

Closed-form temperature inside a thick wall whose surface is suddenly
raised to a new temperature (semi-infinite solid):

    T(x, t) = Tb + (Ti - Tb) * erf(x / (2 * sqrt(alpha * t)))

This is not an ODE model and does not go through the integrators.
"""

import numpy as np

from . import constants as C
from .config import DiffusionConfig

_ERF_ABSCISSAE = np.arange(len(C.ERF_TABLE)) * C.ERF_TABLE_STEP


def error_function(s: float) -> float:
    """
    Error function by linear interpolation in a 0.1-step table.

    Returns 1.0 for s >= 2.

    Raises:
        ValueError: If s is negative
    """
    if s < 0.0:
        raise ValueError(f"Error function argument must be non-negative, got {s}")
    if s >= C.ERF_TABLE_MAX:
        return 1.0
    return float(np.interp(s, _ERF_ABSCISSAE, C.ERF_TABLE))


class HeatConductionWall:
    """Wall initially at initial_t whose surface is held at boundary_t from t=0."""

    def __init__(self, thickness: float, diffusivity: float,
                 initial_t: float, boundary_t: float):
        self.thickness = thickness
        self.diffusivity = diffusivity
        self.initial_t = initial_t
        self.boundary_t = boundary_t

    @classmethod
    def from_config(cls, config: DiffusionConfig) -> 'HeatConductionWall':
        return cls(config.thickness, config.diffusivity,
                   config.initial_t, config.boundary_t)

    def set_boundary_temperature(self, value: float):
        self.boundary_t = value

    def temperature(self, x: float, time: float) -> float:
        """
        Temperature (K) at depth x (m) below the surface after time (s).

        Before exposure (time <= 0) the wall is at its initial temperature.

        Raises:
            ValueError: If x is negative
        """
        if x < 0.0:
            raise ValueError(f"Depth must be non-negative, got {x}")
        if time <= 0.0:
            return self.initial_t

        grp = 0.5 * x / np.sqrt(self.diffusivity * time)
        return self.boundary_t + (self.initial_t - self.boundary_t) * error_function(grp)

    def profile(self, time: float, n_points: int = 21) -> np.ndarray:
        """Temperatures at n_points evenly spaced depths across the thickness."""
        depths = np.linspace(0.0, self.thickness, n_points)
        return np.array([self.temperature(x, time) for x in depths])
