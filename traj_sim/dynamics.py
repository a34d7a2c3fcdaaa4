"""
Trajectory Simulation - Dynamics Model Contract

Every physical model exposes its current StateVector and a single
right-hand-side operation:

    dq = model.right_hand_side(s, q, delta_q, ds, q_scale)

which evaluates the derivatives at the intermediate state
q + q_scale * delta_q and returns them already multiplied by the step
size ds. The integrators combine stage outputs by plain weighted sums,
so the ds pre-scaling must happen here and nowhere else.
"""

from typing import Protocol, runtime_checkable

import numpy as np

from .state import StateVector


@runtime_checkable
class DynamicsModel(Protocol):
    """Capability implemented by every integrable model."""

    state: StateVector

    def right_hand_side(self, s: float, q: np.ndarray, delta_q: np.ndarray,
                        ds: float, q_scale: float) -> np.ndarray:
        """Return ds * dq/ds evaluated at q + q_scale * delta_q."""
        ...


def stage_state(q: np.ndarray, delta_q: np.ndarray, q_scale: float) -> np.ndarray:
    """Intermediate state q + q_scale * delta_q for one RK stage."""
    return q + q_scale * delta_q


def state_slot(index: int, doc: str) -> property:
    """
    Named read/write accessor for a fixed state slot.

    Models declare e.g. ``vx = state_slot(VX, "x velocity (m/s)")`` so
    callers never index the raw array.
    """
    def getter(self) -> float:
        return self.state.get_component(index)

    def setter(self, value: float):
        self.state.set_component(index, value)

    return property(getter, setter, doc=doc)
