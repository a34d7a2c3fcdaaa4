"""
Trajectory Simulation - Force Computations

This module implements the force laws used by the models:
- Quadratic drag against the apparent (air-relative) velocity
- Magnus lift of a spinning body
- Altitude-compensated engine thrust
- Inverse-square gravity
"""

import numpy as np

from . import constants as C
from .utils import regularized_norm


# =============================================================================
# SPINNING PROJECTILE
# =============================================================================

def compute_drag_force(v_apparent: np.ndarray, density: float, area: float,
                       cd: float) -> np.ndarray:
    """
    Compute quadratic drag opposing the apparent velocity.

    F_drag = -0.5 * rho * A * Cd * va² * v_app / va

    where va = |v_app| + eps, so a body at rest gets a vanishing force.
    """
    va = regularized_norm(v_apparent)
    drag_magnitude = 0.5 * density * area * cd * va * va
    return -drag_magnitude * v_apparent / va


def compute_lift_coefficient(radius: float, omega: float, speed: float) -> float:
    """
    Empirical backspin lift coefficient.

    Cl = -0.05 + sqrt(0.0025 + 0.36 * |r * omega / v|)

    Args:
        radius: Body radius (m)
        omega: Spin rate (rad/s)
        speed: Regularized speed (m/s), must be > 0
    """
    return C.CL_OFFSET + np.sqrt(C.CL_BASE + C.CL_SLOPE * abs(radius * omega / speed))


def compute_magnus_force(v: np.ndarray, spin_axis: np.ndarray, density: float,
                         area: float, radius: float, omega: float,
                         cl: float = None) -> np.ndarray:
    """
    Compute the Magnus force of a spinning body.

    F_m = 0.5 * rho * A * Cl * v² * (v × r_spin) / v

    The spin axis is expected to be a unit vector. Cl is computed from
    radius, omega and speed unless the caller already has it.
    """
    speed = regularized_norm(v)
    if cl is None:
        cl = compute_lift_coefficient(radius, omega, speed)
    magnus_magnitude = 0.5 * density * area * cl * speed * speed
    return np.cross(v, spin_axis) * magnus_magnitude / speed


# =============================================================================
# ROCKET
# =============================================================================

def compute_frontal_area(diameter: float) -> float:
    """Circular frontal area 0.25 * pi * d² (m²)."""
    return 0.25 * np.pi * diameter * diameter


def compute_engine_thrust(pressure: float, number_of_engines: int,
                          sea_level_thrust: float, vacuum_thrust: float) -> float:
    """
    Compute total thrust with altitude compensation.

    Thrust per engine varies linearly with ambient pressure ratio:
    T = T_vac - (T_vac - T_sl) * (P_amb / P_sl)

    evaluated as a convex blend so that ratio 1 reproduces T_sl and
    ratio 0 reproduces T_vac exactly.
    """
    pressure_ratio = pressure / C.ATM_P0
    thrust_per_engine = sea_level_thrust * pressure_ratio + vacuum_thrust * (1.0 - pressure_ratio)
    return number_of_engines * thrust_per_engine


def compute_rocket_drag(speed: float, density: float, cd: float, area: float) -> float:
    """Drag magnitude 0.5 * Cd * rho * V² * A (N)."""
    return 0.5 * cd * density * speed * speed * area


def compute_gravity(altitude: float) -> float:
    """
    Gravitational acceleration at altitude (inverse-square law).

    g(z) = g0 * Re² / (Re + z)²
    """
    return C.G0 * C.R_EARTH * C.R_EARTH / (C.R_EARTH + altitude) ** 2
