import pytest
import numpy as np
from traj_sim import integrators
from traj_sim.dynamics import DynamicsModel, stage_state
from traj_sim.projectile import ProjectileModel
from traj_sim.spring import SpringModel
from traj_sim.state import StateVector
from traj_sim import constants as C


class RecordingModel:
    """dq/ds = q, recording every stage evaluation."""

    def __init__(self, q0, s0=0.0):
        self.state = StateVector(q=q0, s=s0)
        self.calls = []

    def right_hand_side(self, s, q, delta_q, ds, q_scale):
        self.calls.append((s, q.copy(), delta_q.copy(), ds, q_scale))
        return ds * stage_state(q, delta_q, q_scale)


def ballistic_model(vx0=20.0, vz0=30.0):
    # density = 0 removes drag and Magnus exactly
    return ProjectileModel(x0=0.0, y0=0.0, z0=0.0, vx0=vx0, vy0=0.0, vz0=vz0,
                           time=0.0, mass=1.0, area=0.01, density=0.0, cd=0.5,
                           omega=100.0, radius=0.02)


def test_rk4_step_returns_state():
    model = RecordingModel([1.0, 2.0])
    s2 = integrators.rk4_step(model, model.state, 0.1)
    assert isinstance(s2, StateVector)
    assert s2.q.shape == (2,)
    assert s2.s == pytest.approx(0.1)

def test_rk4_stage_structure():
    model = RecordingModel([1.0, -2.0], s0=3.0)
    dt = 0.2
    integrators.rk4_step(model, model.state, dt)
    assert len(model.calls) == 4

    s_values = [c[0] for c in model.calls]
    scales = [c[4] for c in model.calls]
    assert s_values == [3.0, 3.0 + 0.5*dt, 3.0 + 0.5*dt, 3.0 + dt]
    assert scales == [0.0, 0.5, 0.5, 1.0]
    assert all(c[3] == dt for c in model.calls)

    # every stage starts from the same base state
    for c in model.calls:
        np.testing.assert_array_equal(c[1], [1.0, -2.0])

    # stage deltas chain k1 -> k2 -> k3
    q = np.array([1.0, -2.0])
    k1 = dt * q
    k2 = dt * (q + 0.5 * k1)
    k3 = dt * (q + 0.5 * k2)
    np.testing.assert_array_equal(model.calls[0][2], [0.0, 0.0])
    np.testing.assert_allclose(model.calls[1][2], k1)
    np.testing.assert_allclose(model.calls[2][2], k2)
    np.testing.assert_allclose(model.calls[3][2], k3)

def test_rk4_matches_taylor_series_for_linear_system():
    model = RecordingModel([2.0])
    h = 0.1
    s2 = integrators.rk4_step(model, model.state, h)
    expected = 2.0 * (1 + h + h**2 / 2 + h**3 / 6 + h**4 / 24)
    assert s2.q[0] == pytest.approx(expected, rel=1e-14)

def test_euler_step_first_order():
    model = RecordingModel([2.0])
    s2 = integrators.euler_step(model, model.state, 0.1)
    assert s2.q[0] == pytest.approx(2.2)
    assert s2.s == pytest.approx(0.1)
    assert len(model.calls) == 1

def test_rk4_does_not_modify_input_state():
    model = ballistic_model()
    before = model.state.copy()
    integrators.rk4_step(model, model.state, 0.1)
    np.testing.assert_array_equal(model.state.q, before.q)
    assert model.state.s == before.s

def test_rk4_deterministic():
    model = SpringModel(mass=1.0, mu=0.5, k=20.0, x0=0.4)
    a = integrators.rk4_step(model, model.state, 0.05)
    b = integrators.rk4_step(model, model.state, 0.05)
    np.testing.assert_array_equal(a.q, b.q)
    assert a.s == b.s

def test_zero_step_is_noop():
    model = SpringModel(mass=1.0, mu=0.5, k=20.0, x0=0.4)
    model.vx = 1.3
    s2 = integrators.rk4_step(model, model.state, 0.0)
    np.testing.assert_array_equal(s2.q, model.state.q)
    assert s2.s == model.state.s

def test_negative_step_rewinds():
    model = SpringModel(mass=1.0, mu=0.5, k=20.0, x0=0.4)
    start = model.state.copy()
    integrators.integrate(model, 0.01)
    integrators.integrate(model, -0.01)
    np.testing.assert_allclose(model.state.q, start.q, atol=1e-9)
    assert model.state.s == pytest.approx(0.0, abs=1e-15)

def test_constant_field_reproduces_closed_form():
    model = ballistic_model(vx0=20.0, vz0=30.0)
    dt = 0.01
    for _ in range(200):
        integrators.integrate(model, dt)
    t = model.time
    assert t == pytest.approx(2.0)
    assert model.x == pytest.approx(20.0 * t, rel=1e-10)
    assert model.z == pytest.approx(30.0 * t + 0.5 * C.G_PROJECTILE * t**2, rel=1e-10)
    assert model.vz == pytest.approx(30.0 + C.G_PROJECTILE * t, rel=1e-10)
    assert model.y == 0.0

def test_rk4_fourth_order_convergence():
    def final_error(dt):
        model = SpringModel(mass=1.0, mu=0.0, k=20.0, x0=0.4)
        n = int(round(1.0 / dt))
        for _ in range(n):
            integrators.integrate(model, dt)
        exact = 0.4 * np.cos(np.sqrt(20.0) * 1.0)
        return abs(model.x - exact)

    e1 = final_error(0.02)
    e2 = final_error(0.01)
    assert e1 / e2 > 10.0

def test_integrate_replaces_model_state():
    model = SpringModel(mass=1.0, mu=0.5, k=20.0, x0=0.4)
    old = model.state
    new = integrators.integrate(model, 0.1)
    assert model.state is new
    assert new is not old
    assert old.s == 0.0

def test_integrate_euler():
    model = RecordingModel([1.0])
    integrators.integrate(model, 0.1, method='euler')
    assert model.state.q[0] == pytest.approx(1.1)

def test_integrate_unknown_method():
    model = RecordingModel([1.0])
    with pytest.raises(ValueError):
        integrators.integrate(model, 0.1, method='unknown')

def test_models_satisfy_protocol():
    assert isinstance(ballistic_model(), DynamicsModel)
    assert isinstance(SpringModel(1.0, 0.0, 1.0, 0.0), DynamicsModel)
    assert isinstance(RecordingModel([0.0]), DynamicsModel)
