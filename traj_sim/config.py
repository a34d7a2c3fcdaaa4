"""
Trajectory Simulation - Configuration

This module provides frozen dataclasses for dependency injection, so
different bodies and run settings can be passed to the drivers without
modifying global constants.

Create variants via dataclasses.replace().
"""

from dataclasses import dataclass, field
from typing import Tuple

from . import constants as C


@dataclass(frozen=True)
class SimulationConfig:
    """Run settings shared by every driver."""

    dt: float = C.DT
    max_time: float = C.MAX_TIME
    method: str = 'rk4'
    verbose: bool = True
    log_interval: int = C.LOG_INTERVAL


@dataclass(frozen=True)
class ProjectileConfig:
    """
    Spinning projectile (golf ball by default).

    The launch is described by speed, elevation angle above the x-y plane
    and azimuth from the +x axis; spin_axis is normalized by the model.
    """

    mass: float = C.BALL_MASS
    area: float = C.BALL_AREA
    density: float = C.ATM_RHO0
    cd: float = C.BALL_CD
    wind_vx: float = 0.0
    wind_vy: float = 0.0
    spin_axis: Tuple[float, float, float] = tuple(C.BALL_SPIN_AXIS)
    omega: float = C.BALL_OMEGA
    radius: float = C.BALL_RADIUS
    launch_speed: float = C.BALL_LAUNCH_SPEED
    launch_angle: float = C.BALL_LAUNCH_ANGLE
    launch_azimuth: float = 0.0
    x0: float = 0.0
    y0: float = 0.0
    z0: float = 0.0


@dataclass(frozen=True)
class RocketConfig:
    """Multi-engine rocket ascending in the x-z plane."""

    number_of_engines: int = C.ROCKET_ENGINES
    sea_level_thrust_per_engine: float = C.ROCKET_SEA_LEVEL_THRUST
    vacuum_thrust_per_engine: float = C.ROCKET_VACUUM_THRUST
    diameter: float = C.ROCKET_DIAMETER
    cd: float = C.ROCKET_CD
    initial_mass: float = C.ROCKET_INITIAL_MASS
    mass_flow_rate: float = C.ROCKET_MASS_FLOW_RATE
    burn_time: float = C.ROCKET_BURN_TIME
    theta: float = C.ROCKET_THETA
    omega: float = C.ROCKET_OMEGA
    x0: float = 0.0
    z0: float = 0.0
    vx0: float = 0.0
    vz0: float = 0.0


@dataclass(frozen=True)
class SpringConfig:
    """Damped spring-mass oscillator."""

    mass: float = C.SPRING_MASS
    mu: float = C.SPRING_MU
    k: float = C.SPRING_K
    x0: float = C.SPRING_X0


@dataclass(frozen=True)
class DiffusionConfig:
    """Wall suddenly exposed to a new surface temperature."""

    thickness: float = C.WALL_THICKNESS
    diffusivity: float = C.WALL_DIFFUSIVITY
    initial_t: float = C.WALL_INITIAL_T
    boundary_t: float = C.WALL_BOUNDARY_T


@dataclass(frozen=True)
class Config:
    """Bundle of every body configuration plus run settings."""

    simulation: SimulationConfig = field(default_factory=SimulationConfig)
    projectile: ProjectileConfig = field(default_factory=ProjectileConfig)
    rocket: RocketConfig = field(default_factory=RocketConfig)
    spring: SpringConfig = field(default_factory=SpringConfig)
    diffusion: DiffusionConfig = field(default_factory=DiffusionConfig)


def create_default_config() -> Config:
    """Create a Config with default values from constants."""
    return Config()


def create_test_config(dt: float = 0.01, max_time: float = 10.0,
                       **overrides) -> SimulationConfig:
    """Create a fast, quiet SimulationConfig suitable for testing.

    Any keyword arg accepted by SimulationConfig can be passed as an override.
    """
    defaults = dict(dt=dt, max_time=max_time, verbose=False)
    defaults.update(overrides)
    return SimulationConfig(**defaults)
