"""
Trajectory Simulation - Simulation Drivers

This module implements the stepping loops around the integrator:
- Fixed-step advance of a single model
- Termination checks on the returned state (ground impact, burn
  completion, maximum time)
- Per-step data logging with CSV export

The integrator and the models never decide when to stop; that is done
here, between steps.
"""

import csv
import logging
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

import numpy as np

from .config import (
    ProjectileConfig, RocketConfig, SpringConfig, SimulationConfig,
)
from .dynamics import DynamicsModel
from .integrators import integrate
from .projectile import ProjectileModel, STATE_NAMES as PROJECTILE_NAMES
from .rocket import RocketModel, STATE_NAMES as ROCKET_NAMES
from .spring import SpringModel, STATE_NAMES as SPRING_NAMES
from .state import StateVector
from .validation import ValidationError, validate_state

# Configure module logger
logger = logging.getLogger(__name__)

# Slack on time comparisons so accumulated steps land on max_time
TIME_TOLERANCE = 1e-9


@dataclass
class SimulationLog:
    """Container for logged simulation data, one row per step."""
    columns: List[str] = field(default_factory=list)
    time: List[float] = field(default_factory=list)
    rows: List[np.ndarray] = field(default_factory=list)

    def append(self, state: StateVector):
        """Log the state after the current timestep."""
        self.time.append(state.s)
        self.rows.append(state.to_vector())

    def __len__(self) -> int:
        return len(self.time)

    def column(self, name: str) -> np.ndarray:
        """History of one state slot, by name."""
        idx = self.columns.index(name)
        return np.array([row[idx] for row in self.rows])

    def to_csv(self, filename: str):
        """Write the log to a CSV file with a header row."""
        with open(filename, 'w', newline='') as fh:
            writer = csv.writer(fh)
            writer.writerow(['time'] + list(self.columns))
            for t, row in zip(self.time, self.rows):
                writer.writerow([t] + [float(v) for v in row])
        logger.info(f"Wrote {len(self)} rows to {filename}")


def check_termination(model: DynamicsModel, max_time: float,
                      ground_level: Optional[float] = 0.0,
                      start_time: float = 0.0) -> Tuple[bool, str]:
    """
    Check whether stepping should stop.

    Args:
        model: Model being advanced
        max_time: Maximum value of the independent variable
        ground_level: Altitude below which a body that has left the start
            time is considered to have landed; None disables the check
        start_time: Independent variable at launch

    Returns:
        (should_terminate, reason)
    """
    s = model.state.s
    if s >= max_time - TIME_TOLERANCE:
        return True, f"Maximum simulation time reached ({max_time:.2f} s)"

    if ground_level is not None and s > start_time and getattr(model, 'z', 0.0) < ground_level:
        return True, "Ground impact"

    return False, ""


def _run_model(model: DynamicsModel, columns: List[str], config: SimulationConfig,
               label: str, ground_level: Optional[float] = 0.0,
               event: Optional[Callable[[DynamicsModel], Optional[str]]] = None,
               mass: Optional[Callable[[DynamicsModel], float]] = None
               ) -> Tuple[DynamicsModel, SimulationLog, str]:
    """
    Step a model until a termination condition holds.

    Args:
        event: Called before each step; returns a termination reason or None
        mass: Returns the current body mass for validation, if it varies

    Returns:
        (model, log, termination_reason) tuple
    """
    dt = config.dt
    if dt <= 0:
        raise ValueError(f"Time step dt must be positive, got {dt}")

    log = SimulationLog(columns=list(columns))
    log.append(model.state)
    start = model.state.s

    logger.info(f"Starting {label} simulation: dt={dt}s, max_time={config.max_time}s, "
                f"method={config.method}")
    logger.debug(f"Initial state: {model.state}")

    if config.verbose:
        print("\n" + "=" * 70)
        print(f"{label.upper()} SIMULATION | dt={dt}s | T_max={config.max_time}s")
        print("=" * 70)

    wall_start = time.time()
    step_count = 0

    while True:
        reason = event(model) if event is not None else None
        if reason is None:
            should_terminate, reason = check_termination(
                model, config.max_time, ground_level=ground_level, start_time=start
            )
            if not should_terminate:
                reason = None

        if reason is not None:
            logger.info(f"Simulation terminated: {reason} "
                        f"({step_count} steps, {time.time() - wall_start:.2f}s wall)")
            if config.verbose:
                print(f"\nTermination: {reason}")
            return model, log, reason

        try:
            validate_state(model.state, mass=mass(model) if mass is not None else None)
        except ValidationError as e:
            logger.error(f"Validation failed: {e}")
            if config.verbose:
                print(f"\nValidation Error: {e}")
            return model, log, f"Validation failure: {e}"

        integrate(model, dt, method=config.method)
        log.append(model.state)
        step_count += 1

        if config.verbose and step_count % config.log_interval == 0:
            print(f"  {model}")


def run_projectile(config: ProjectileConfig = None,
                   sim_config: SimulationConfig = None
                   ) -> Tuple[ProjectileModel, SimulationLog, str]:
    """
    Fly a spinning projectile until it returns to the ground.

    Returns:
        (model, log, termination_reason) tuple
    """
    if config is None:
        config = ProjectileConfig()
    if sim_config is None:
        sim_config = SimulationConfig()

    model = ProjectileModel.from_config(config)
    return _run_model(model, PROJECTILE_NAMES, sim_config, "projectile",
                      ground_level=config.z0)


def run_rocket(config: RocketConfig = None, sim_config: SimulationConfig = None,
               coast: bool = False, atmosphere=None
               ) -> Tuple[RocketModel, SimulationLog, str]:
    """
    Fly the rocket through its burn.

    Once elapsed time reaches the burn time the run either stops
    ("Burn complete") or, with coast=True, the engines are cut off and the
    vehicle coasts until ground impact or max_time.

    A vehicle at rest whose net vertical force at launch is not upward
    never leaves the pad; the run stops before the first step with
    "Insufficient thrust".

    Returns:
        (model, log, termination_reason) tuple
    """
    if config is None:
        config = RocketConfig()
    if sim_config is None:
        sim_config = SimulationConfig()

    model = RocketModel.from_config(config, atmosphere=atmosphere)
    launch_time = model.time

    def burnout(m: RocketModel) -> Optional[str]:
        if m.time == launch_time and m.vz <= 0.0:
            forces = m.compute_forces(m.state.to_vector())
            if forces['fz'] <= 0.0:
                logger.warning(f"Thrust {forces['thrust']:.0f} N cannot lift "
                               f"weight {forces['weight']:.0f} N")
                return "Insufficient thrust"
        if m.engines_on and m.time >= m.burn_time - TIME_TOLERANCE:
            if not coast:
                return "Burn complete"
            m.cut_off_engines()
            logger.info(f"Engine cutoff at t={m.time:.2f}s, alt={m.z/1000:.2f}km, "
                        f"v={m.speed:.1f}m/s")
        return None

    return _run_model(model, ROCKET_NAMES, sim_config, "rocket",
                      ground_level=config.z0, event=burnout,
                      mass=lambda m: m.mass)


def run_spring(config: SpringConfig = None, sim_config: SimulationConfig = None
               ) -> Tuple[SpringModel, SimulationLog, str]:
    """Let the spring oscillate until max_time."""
    if config is None:
        config = SpringConfig()
    if sim_config is None:
        sim_config = SimulationConfig()

    model = SpringModel.from_config(config)
    return _run_model(model, SPRING_NAMES, sim_config, "spring", ground_level=None)


def compute_impact_point(log: SimulationLog, ground_level: float = 0.0) -> np.ndarray:
    """
    (x, y) where the trajectory crosses ground_level on the way down.

    Linear interpolation between the last two samples; the final sample is
    returned when the log does not end below the ground.
    """
    x = log.column('x')
    y = log.column('y')
    z = log.column('z')
    if len(z) < 2 or z[-1] >= ground_level:
        return np.array([x[-1], y[-1]])
    frac = (z[-2] - ground_level) / (z[-2] - z[-1])
    return np.array([
        x[-2] + frac * (x[-1] - x[-2]),
        y[-2] + frac * (y[-1] - y[-2]),
    ])


def compute_range(log: SimulationLog, ground_level: float = 0.0) -> float:
    """Downrange (x) distance from launch to impact (m)."""
    return float(compute_impact_point(log, ground_level)[0] - log.column('x')[0])


def compute_lateral_displacement(log: SimulationLog, ground_level: float = 0.0) -> float:
    """Crosswind (y) displacement from launch to impact (m)."""
    return float(compute_impact_point(log, ground_level)[1] - log.column('y')[0])
