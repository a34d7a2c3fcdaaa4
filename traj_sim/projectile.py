"""
Trajectory Simulation - Spinning Projectile

Six-component model of a spin-stabilized body (e.g. a golf ball) flying
through still or moving air, subject to:
- Quadratic drag against the apparent velocity (velocity minus wind)
- Magnus lift along v × spin axis
- Constant vertical gravity

State layout:
    q[0] = vx    q[1] = x
    q[2] = vy    q[3] = y
    q[4] = vz    q[5] = z    (z is up)
"""

import numpy as np

from . import constants as C
from .config import ProjectileConfig
from .dynamics import stage_state, state_slot
from .forces import compute_drag_force, compute_lift_coefficient, compute_magnus_force
from .state import StateVector
from .types import ProjectileForces
from .utils import compute_apparent_velocity, regularized_norm

VX, X, VY, Y, VZ, Z = range(6)
STATE_SIZE = 6
STATE_NAMES = ["vx", "x", "vy", "y", "vz", "z"]
VELOCITY_SLOTS = [VX, VY, VZ]
POSITION_SLOTS = [X, Y, Z]


class ProjectileModel:
    """
    Spinning projectile with drag and Magnus lift.

    Physical parameters are fixed at construction; only the state evolves.
    Parameters are not validated here (see traj_sim.validation): a zero
    mass or negative density gives inf/NaN derivatives.
    """

    vx = state_slot(VX, "x velocity (m/s)")
    x = state_slot(X, "x position (m)")
    vy = state_slot(VY, "y velocity (m/s)")
    y = state_slot(Y, "y position (m)")
    vz = state_slot(VZ, "z (vertical) velocity (m/s)")
    z = state_slot(Z, "z (vertical) position (m)")

    def __init__(self, x0: float, y0: float, z0: float,
                 vx0: float, vy0: float, vz0: float, time: float,
                 mass: float, area: float, density: float, cd: float,
                 wind_vx: float = 0.0, wind_vy: float = 0.0,
                 spin_axis=(0.0, 1.0, 0.0), omega: float = 0.0,
                 radius: float = 0.0, gravity: float = C.G_PROJECTILE):
        self.mass = mass
        self.area = area
        self.density = density
        self.cd = cd
        self.wind_vx = wind_vx
        self.wind_vy = wind_vy
        axis = np.asarray(spin_axis, dtype=np.float64)
        norm = np.linalg.norm(axis)
        self.spin_axis = axis / norm if norm > 0.0 else axis
        self.omega = omega
        self.radius = radius
        self.gravity = gravity
        self.reset(x0, y0, z0, vx0, vy0, vz0, time)

    @classmethod
    def from_config(cls, config: ProjectileConfig) -> 'ProjectileModel':
        """Build a model launched as described by a ProjectileConfig."""
        speed = config.launch_speed
        horizontal = speed * np.cos(config.launch_angle)
        return cls(
            x0=config.x0, y0=config.y0, z0=config.z0,
            vx0=horizontal * np.cos(config.launch_azimuth),
            vy0=horizontal * np.sin(config.launch_azimuth),
            vz0=speed * np.sin(config.launch_angle),
            time=0.0,
            mass=config.mass, area=config.area, density=config.density,
            cd=config.cd, wind_vx=config.wind_vx, wind_vy=config.wind_vy,
            spin_axis=config.spin_axis, omega=config.omega,
            radius=config.radius,
        )

    def reset(self, x0: float, y0: float, z0: float,
              vx0: float, vy0: float, vz0: float, time: float = 0.0):
        """Re-initialize the state to a new launch condition."""
        self.state = StateVector(q=[vx0, x0, vy0, y0, vz0, z0], s=time)

    @property
    def time(self) -> float:
        return self.state.s

    @property
    def velocity(self) -> np.ndarray:
        return self.state.q[VELOCITY_SLOTS].copy()

    @property
    def position(self) -> np.ndarray:
        return self.state.q[POSITION_SLOTS].copy()

    def compute_forces(self, q: np.ndarray) -> ProjectileForces:
        """Force breakdown at phase point q."""
        v = q[VELOCITY_SLOTS]
        v_apparent = compute_apparent_velocity(v, self.wind_vx, self.wind_vy)

        speed = regularized_norm(v)
        cl = compute_lift_coefficient(self.radius, self.omega, speed)

        drag = compute_drag_force(v_apparent, self.density, self.area, self.cd)
        magnus = compute_magnus_force(
            v, self.spin_axis, self.density, self.area, self.radius, self.omega, cl=cl
        )
        gravity = np.array([0.0, 0.0, self.mass * self.gravity])

        return ProjectileForces(
            drag=drag,
            magnus=magnus,
            gravity=gravity,
            total=drag + magnus + gravity,
            drag_magnitude=float(np.linalg.norm(drag)),
            magnus_magnitude=float(np.linalg.norm(magnus)),
            lift_coefficient=float(cl),
            apparent_speed=regularized_norm(v_apparent),
            speed=speed,
        )

    def right_hand_side(self, s: float, q: np.ndarray, delta_q: np.ndarray,
                        ds: float, q_scale: float) -> np.ndarray:
        """Right-hand sides of the six first-order projectile ODEs, times ds."""
        new_q = stage_state(q, delta_q, q_scale)
        forces = self.compute_forces(new_q)

        accel = (forces['drag'] + forces['magnus']) / self.mass
        accel[2] += self.gravity

        dq = np.empty(STATE_SIZE)
        dq[VELOCITY_SLOTS] = ds * accel
        dq[POSITION_SLOTS] = ds * new_q[VELOCITY_SLOTS]
        return dq

    def __str__(self) -> str:
        return (
            f"Projectile(t={self.time:.2f}s, "
            f"pos=({self.x:.1f}, {self.y:.1f}, {self.z:.1f})m, "
            f"v={np.linalg.norm(self.velocity):.1f}m/s)"
        )
