"""
Trajectory Simulation - Type Definitions

This module provides TypedDict definitions for structured return types,
improving type safety and IDE support.
"""

from typing import TypedDict

import numpy as np
from numpy.typing import NDArray


class AtmosphereProperties(TypedDict):
    """Return type for atmosphere model output."""
    temperature: float  # Temperature (K)
    pressure: float  # Pressure (Pa)
    density: float  # Density (kg/m³)
    speed_of_sound: float  # Speed of sound (m/s)


class ProjectileForces(TypedDict):
    """Force breakdown for the spinning projectile (N, world axes)."""
    drag: NDArray[np.float64]  # Drag force, opposes apparent velocity
    magnus: NDArray[np.float64]  # Magnus force, v × spin axis
    gravity: NDArray[np.float64]  # Weight, vertical only
    total: NDArray[np.float64]  # Sum of the above
    drag_magnitude: float  # |drag| (N)
    magnus_magnitude: float  # |magnus| (N)
    lift_coefficient: float  # Cl from the spin correlation
    apparent_speed: float  # Regularized air-relative speed (m/s)
    speed: float  # Regularized ground speed (m/s)


class RocketForces(TypedDict):
    """Force breakdown for the rocket in the x-z plane (N)."""
    thrust: float  # Total thrust along the body axis (N)
    drag: float  # Drag along the body axis (N)
    lift: float  # Lift normal to the body axis (N), zero in this model
    weight: float  # m * g(z) (N)
    fx: float  # Net horizontal force (N)
    fz: float  # Net vertical force (N)
    pressure: float  # Ambient pressure (Pa)
    density: float  # Ambient density (kg/m³)
    gravity: float  # g(z) (m/s²)
