"""
Trajectory Simulation - Damped Spring-Mass Oscillator

m * x'' = -mu * x' - k * x

State layout:
    q[0] = vx    q[1] = x
"""

import numpy as np

from .config import SpringConfig
from .dynamics import stage_state, state_slot
from .state import StateVector

VX, X = range(2)
STATE_SIZE = 2
STATE_NAMES = ["vx", "x"]


class SpringModel:
    """Mass on a linear spring with viscous damping."""

    vx = state_slot(VX, "velocity (m/s)")
    x = state_slot(X, "displacement from rest (m)")

    def __init__(self, mass: float, mu: float, k: float, x0: float, time: float = 0.0):
        self.mass = mass
        self.mu = mu
        self.k = k
        self.state = StateVector(q=[0.0, x0], s=time)

    @classmethod
    def from_config(cls, config: SpringConfig) -> 'SpringModel':
        return cls(mass=config.mass, mu=config.mu, k=config.k, x0=config.x0)

    @property
    def time(self) -> float:
        return self.state.s

    def reset_position(self, x0: float):
        """Move the mass to x0 at rest, keeping the current time."""
        self.x = x0
        self.vx = 0.0

    def energy(self) -> float:
        """Kinetic plus spring potential energy (J)."""
        return 0.5 * self.mass * self.vx**2 + 0.5 * self.k * self.x**2

    def right_hand_side(self, s: float, q: np.ndarray, delta_q: np.ndarray,
                        ds: float, q_scale: float) -> np.ndarray:
        new_q = stage_state(q, delta_q, q_scale)
        vx = new_q[VX]
        x = new_q[X]

        dq = np.empty(STATE_SIZE)
        dq[VX] = ds * (-self.mu * vx - self.k * x) / self.mass
        dq[X] = ds * vx
        return dq
