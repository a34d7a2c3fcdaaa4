"""
Trajectory Simulation - Numerical Integration

This module implements the fixed-step RK4 integrator (and a first-order
Euler step for comparison) on top of the DynamicsModel contract.

Because right_hand_side returns derivatives already scaled by ds, each
stage output k_i is an increment, and the combination is a plain weighted
sum without a trailing ds factor.
"""

import logging

import numpy as np

from .state import StateVector
from .dynamics import DynamicsModel

logger = logging.getLogger(__name__)


def rk4_step(model: DynamicsModel, state: StateVector, ds: float) -> StateVector:
    """
    Perform a single RK4 integration step.

    The RK4 method computes:
    k1 = ds * f(s, q)
    k2 = ds * f(s + ds/2, q + k1/2)
    k3 = ds * f(s + ds/2, q + k2/2)
    k4 = ds * f(s + ds, q + k3)
    q_new = q + (k1 + 2*k2 + 2*k3 + k4) / 6

    Args:
        model: Model providing right_hand_side
        state: State to advance (not modified)
        ds: Step size; zero is a no-op, negative integrates backward

    Returns:
        New state after integration
    """
    s = state.s
    q = state.to_vector()

    k1 = model.right_hand_side(s, q, np.zeros_like(q), ds, 0.0)
    k2 = model.right_hand_side(s + 0.5*ds, q, k1, ds, 0.5)
    k3 = model.right_hand_side(s + 0.5*ds, q, k2, ds, 0.5)
    k4 = model.right_hand_side(s + ds, q, k3, ds, 1.0)

    q_new = q + (k1 + 2.0*k2 + 2.0*k3 + k4) / 6.0

    return StateVector.from_vector(q_new, s + ds)


def euler_step(model: DynamicsModel, state: StateVector, ds: float) -> StateVector:
    """
    Perform a single Euler integration step.

    This is a first-order method, primarily for testing/comparison.
    """
    s = state.s
    q = state.to_vector()

    dq = model.right_hand_side(s, q, np.zeros_like(q), ds, 0.0)

    return StateVector.from_vector(q + dq, s + ds)


STEPPERS = {
    'rk4': rk4_step,
    'euler': euler_step,
}


def integrate(model: DynamicsModel, ds: float, method: str = 'rk4') -> StateVector:
    """
    Advance a model's state by one step.

    The model's state is replaced with the new StateVector, which is also
    returned. The integrator keeps no reference to either state.

    Args:
        model: Model to advance
        ds: Step size
        method: Integration method ('rk4' or 'euler')

    Returns:
        New state after integration
    """
    try:
        stepper = STEPPERS[method]
    except KeyError:
        raise ValueError(f"Unknown integration method: {method}") from None

    model.state = stepper(model, model.state, ds)
    logger.debug(f"{type(model).__name__} advanced to s={model.state.s:.4f}")
    return model.state
