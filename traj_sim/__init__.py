"""
Trajectory Simulation Package

Fixed-step RK4 integration of rigid-body trajectories through a single
dynamics-model contract.

Modules:
    - constants: Physical constants and default body parameters
    - state: State vector of phase variables
    - dynamics: DynamicsModel protocol and slot helpers
    - integrators: RK4 and Euler steps
    - atmosphere: US Standard Atmosphere 1976 collaborator
    - forces: Drag, Magnus, thrust and gravity laws
    - projectile: Spinning projectile model
    - rocket: Multi-engine rocket model
    - spring: Damped spring-mass model
    - diffusion: Closed-form transient wall conduction
    - validation: External physics validation checks
    - main: Simulation drivers and logging
    - montecarlo: Projectile dispersion study
    - cli: Command-line entry point
"""

from .state import StateVector, IndexOutOfRange
from .dynamics import DynamicsModel
from .integrators import rk4_step, euler_step, integrate
from .atmosphere import AtmosphereModel, USStandardAtmosphere, ConstantAtmosphere
from .projectile import ProjectileModel
from .rocket import RocketModel
from .spring import SpringModel
from .diffusion import HeatConductionWall
from .main import run_projectile, run_rocket, run_spring, SimulationLog
from .config import (
    SimulationConfig, ProjectileConfig, RocketConfig, SpringConfig, DiffusionConfig,
    create_default_config, create_test_config,
)

__version__ = "1.0.0"

__all__ = [
    'StateVector',
    'IndexOutOfRange',
    'DynamicsModel',
    'rk4_step',
    'euler_step',
    'integrate',
    'AtmosphereModel',
    'USStandardAtmosphere',
    'ConstantAtmosphere',
    'ProjectileModel',
    'RocketModel',
    'SpringModel',
    'HeatConductionWall',
    'run_projectile',
    'run_rocket',
    'run_spring',
    'SimulationLog',
    'SimulationConfig',
    'ProjectileConfig',
    'RocketConfig',
    'SpringConfig',
    'DiffusionConfig',
    'create_default_config',
    'create_test_config',
]
