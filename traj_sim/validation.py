"""
Trajectory Simulation - Validation Checks

The models never validate their inputs: a non-physical parameter simply
propagates NaN or inf through the state. This module is the external
layer that detects it:
- Finite state check
- Positive mass check
- Physical parameter checks for each body configuration

Each check returns True or raises ValidationError.
"""

import numpy as np

from .config import ProjectileConfig, RocketConfig, SpringConfig
from .state import StateVector


class ValidationError(Exception):
    """Raised when a physics validation check fails."""
    pass


def check_state_finite(state: StateVector) -> bool:
    """
    Verify no phase variable is NaN or infinite.

    Args:
        state: State to check

    Returns:
        True if valid, raises ValidationError otherwise
    """
    if not np.isfinite(state.s):
        raise ValidationError(f"Independent variable is not finite: s = {state.s}")
    bad = np.flatnonzero(~np.isfinite(state.q))
    if bad.size > 0:
        raise ValidationError(
            f"Non-finite state components at indices {bad.tolist()} "
            f"(s = {state.s:.4f}): {state.q[bad].tolist()}"
        )
    return True


def check_mass_valid(m: float) -> bool:
    """Check that mass is strictly positive."""
    if not m > 0.0:
        raise ValidationError(f"Mass must be positive, got {m}")
    return True


def check_non_negative(name: str, value: float) -> bool:
    if not value >= 0.0:
        raise ValidationError(f"{name} must be non-negative, got {value}")
    return True


def validate_state(state: StateVector, mass: float = None) -> bool:
    """
    Run all state checks.

    Args:
        state: Current state
        mass: Current body mass when the model carries one in its state

    Returns:
        True if all checks pass
    """
    check_state_finite(state)
    if mass is not None:
        check_mass_valid(mass)
    return True


def validate_projectile_config(config: ProjectileConfig) -> bool:
    check_mass_valid(config.mass)
    check_non_negative("area", config.area)
    check_non_negative("density", config.density)
    check_non_negative("cd", config.cd)
    check_non_negative("radius", config.radius)
    if np.linalg.norm(config.spin_axis) == 0.0 and config.omega != 0.0:
        raise ValidationError("Spinning projectile needs a non-zero spin axis")
    return True


def validate_rocket_config(config: RocketConfig) -> bool:
    check_mass_valid(config.initial_mass)
    check_non_negative("number_of_engines", config.number_of_engines)
    check_non_negative("sea_level_thrust_per_engine", config.sea_level_thrust_per_engine)
    check_non_negative("vacuum_thrust_per_engine", config.vacuum_thrust_per_engine)
    check_non_negative("diameter", config.diameter)
    check_non_negative("cd", config.cd)
    check_non_negative("mass_flow_rate", config.mass_flow_rate)
    check_non_negative("burn_time", config.burn_time)
    propellant = config.mass_flow_rate * config.number_of_engines * config.burn_time
    if propellant >= config.initial_mass:
        raise ValidationError(
            f"Burn consumes {propellant:.1f} kg, more than the initial mass "
            f"{config.initial_mass:.1f} kg"
        )
    return True


def validate_spring_config(config: SpringConfig) -> bool:
    check_mass_valid(config.mass)
    check_non_negative("mu", config.mu)
    check_non_negative("k", config.k)
    return True
