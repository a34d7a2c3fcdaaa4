"""
Trajectory Simulation - Multi-Engine Rocket

Ten-component model of a thrust-powered vehicle flying in the x-z plane:
- Thrust interpolated between sea-level and vacuum values by ambient
  pressure ratio
- Drag on the frontal area
- Inverse-square gravity
- Linearly depleting mass

The pitch angle is prescribed kinematically (d(theta)/dt = omega,
d(omega)/dt = 0); no rotational dynamics are modelled. The model does not
stop burning on its own: the caller ends the burn with cut_off_engines().

State layout:
    q[0] = vx              q[1] = x
    q[2] = vy              q[3] = y        (always constant)
    q[4] = vz              q[5] = z        (altitude)
    q[6] = mass flow rate per engine (kg/s)
    q[7] = mass (kg)
    q[8] = omega = d(theta)/dt (rad/s)
    q[9] = theta, pitch above horizontal (rad)
"""

from typing import Optional

import numpy as np

from .atmosphere import AtmosphereModel, USStandardAtmosphere
from .config import RocketConfig
from .dynamics import stage_state, state_slot
from .forces import (
    compute_engine_thrust, compute_frontal_area, compute_gravity, compute_rocket_drag,
)
from .state import StateVector
from .types import RocketForces

VX, X, VY, Y, VZ, Z, MASS_FLOW_RATE, MASS, OMEGA, THETA = range(10)
STATE_SIZE = 10
STATE_NAMES = ["vx", "x", "vy", "y", "vz", "z", "mass_flow_rate", "mass", "omega", "theta"]


class RocketModel:
    """Multi-engine rocket with altitude-dependent thrust, drag and gravity."""

    vx = state_slot(VX, "x velocity (m/s)")
    x = state_slot(X, "x position (m)")
    vy = state_slot(VY, "y velocity (m/s)")
    y = state_slot(Y, "y position (m)")
    vz = state_slot(VZ, "z (vertical) velocity (m/s)")
    z = state_slot(Z, "altitude (m)")
    mass_flow_rate = state_slot(MASS_FLOW_RATE, "mass flow rate per engine (kg/s)")
    mass = state_slot(MASS, "vehicle mass (kg)")
    omega = state_slot(OMEGA, "pitch rate (rad/s)")
    theta = state_slot(THETA, "pitch angle above horizontal (rad)")

    def __init__(self, x0: float, y0: float, z0: float,
                 vx0: float, vy0: float, vz0: float, time: float,
                 initial_mass: float, mass_flow_rate: float,
                 number_of_engines: int, sea_level_thrust_per_engine: float,
                 vacuum_thrust_per_engine: float, rocket_diameter: float,
                 cd: float, theta: float, omega: float, burn_time: float,
                 atmosphere: Optional[AtmosphereModel] = None):
        self.number_of_engines = number_of_engines
        self.sea_level_thrust_per_engine = sea_level_thrust_per_engine
        self.vacuum_thrust_per_engine = vacuum_thrust_per_engine
        self.rocket_diameter = rocket_diameter
        self.cd = cd
        self.initial_mass = initial_mass
        self.burn_time = burn_time
        self.frontal_area = compute_frontal_area(rocket_diameter)
        self.atmosphere = atmosphere if atmosphere is not None else USStandardAtmosphere()
        self.engines_on = True
        self.state = StateVector(
            q=[vx0, x0, vy0, y0, vz0, z0, mass_flow_rate, initial_mass, omega, theta],
            s=time,
        )

    @classmethod
    def from_config(cls, config: RocketConfig,
                    atmosphere: Optional[AtmosphereModel] = None) -> 'RocketModel':
        return cls(
            x0=config.x0, y0=0.0, z0=config.z0,
            vx0=config.vx0, vy0=0.0, vz0=config.vz0, time=0.0,
            initial_mass=config.initial_mass,
            mass_flow_rate=config.mass_flow_rate,
            number_of_engines=config.number_of_engines,
            sea_level_thrust_per_engine=config.sea_level_thrust_per_engine,
            vacuum_thrust_per_engine=config.vacuum_thrust_per_engine,
            rocket_diameter=config.diameter,
            cd=config.cd, theta=config.theta, omega=config.omega,
            burn_time=config.burn_time,
            atmosphere=atmosphere,
        )

    @property
    def time(self) -> float:
        return self.state.s

    @property
    def speed(self) -> float:
        return float(np.sqrt(self.vx**2 + self.vy**2 + self.vz**2))

    def cut_off_engines(self):
        """End the burn: no more thrust and no more mass loss."""
        self.engines_on = False
        self.mass_flow_rate = 0.0

    def thrust_at(self, altitude: float) -> float:
        """Total thrust (N) at altitude, zero once the engines are cut off."""
        if not self.engines_on:
            return 0.0
        pressure, _ = self.atmosphere.query(altitude)
        return compute_engine_thrust(
            pressure, self.number_of_engines,
            self.sea_level_thrust_per_engine, self.vacuum_thrust_per_engine,
        )

    def compute_forces(self, q: np.ndarray) -> RocketForces:
        """Force breakdown at phase point q."""
        vtotal = np.sqrt(q[VX]**2 + q[VY]**2 + q[VZ]**2)
        z = q[Z]
        mass = q[MASS]
        theta = q[THETA]

        pressure, density = self.atmosphere.query(z)
        if self.engines_on:
            thrust = compute_engine_thrust(
                pressure, self.number_of_engines,
                self.sea_level_thrust_per_engine, self.vacuum_thrust_per_engine,
            )
        else:
            thrust = 0.0
        drag = compute_rocket_drag(vtotal, density, self.cd, self.frontal_area)
        g = compute_gravity(z)

        # Lift is carried in the force resolution but not modelled.
        lift = 0.0
        fx = (thrust - drag) * np.cos(theta) - lift * np.sin(theta)
        fz = (thrust - drag) * np.sin(theta) + lift * np.cos(theta) - mass * g

        return RocketForces(
            thrust=float(thrust), drag=float(drag), lift=lift,
            weight=float(mass * g), fx=float(fx), fz=float(fz),
            pressure=float(pressure), density=float(density), gravity=float(g),
        )

    def right_hand_side(self, s: float, q: np.ndarray, delta_q: np.ndarray,
                        ds: float, q_scale: float) -> np.ndarray:
        """Right-hand sides of the rocket equations of motion, times ds."""
        new_q = stage_state(q, delta_q, q_scale)
        forces = self.compute_forces(new_q)
        mass = new_q[MASS]

        dq = np.zeros(STATE_SIZE)
        dq[VX] = ds * (forces['fx'] / mass)
        dq[X] = ds * new_q[VX]
        dq[VZ] = ds * (forces['fz'] / mass)
        dq[Z] = ds * new_q[VZ]
        dq[MASS] = -ds * (new_q[MASS_FLOW_RATE] * self.number_of_engines)
        dq[THETA] = ds * new_q[OMEGA]
        return dq

    def __str__(self) -> str:
        return (
            f"Rocket(t={self.time:.2f}s, "
            f"alt={self.z/1000:.2f}km, "
            f"v={self.speed:.1f}m/s, "
            f"m={self.mass:.1f}kg)"
        )
