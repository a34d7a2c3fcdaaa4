"""Tests for the multi-engine rocket model."""
import pytest
import numpy as np
from traj_sim import constants as C
from traj_sim import integrators
from traj_sim.atmosphere import ConstantAtmosphere, USStandardAtmosphere
from traj_sim.config import RocketConfig
from traj_sim.rocket import (
    RocketModel, STATE_SIZE, VX, X, VY, Y, VZ, Z, MASS_FLOW_RATE, MASS, OMEGA, THETA,
)


class RecordingAtmosphere:
    def __init__(self):
        self.altitudes = []

    def query(self, altitude):
        self.altitudes.append(altitude)
        return C.ATM_P0, C.ATM_RHO0


def make_rocket(mass_flow_rate=C.ROCKET_MASS_FLOW_RATE, theta=np.pi / 2, omega=0.0,
                vy0=0.0, atmosphere=None):
    return RocketModel(x0=0.0, y0=0.0, z0=0.0, vx0=0.0, vy0=vy0, vz0=0.0, time=0.0,
                       initial_mass=C.ROCKET_INITIAL_MASS, mass_flow_rate=mass_flow_rate,
                       number_of_engines=C.ROCKET_ENGINES,
                       sea_level_thrust_per_engine=C.ROCKET_SEA_LEVEL_THRUST,
                       vacuum_thrust_per_engine=C.ROCKET_VACUUM_THRUST,
                       rocket_diameter=C.ROCKET_DIAMETER, cd=C.ROCKET_CD,
                       theta=theta, omega=omega, burn_time=C.ROCKET_BURN_TIME,
                       atmosphere=atmosphere)


def test_state_layout():
    model = make_rocket(theta=0.3, omega=0.01)
    assert model.state.n == STATE_SIZE
    assert model.state.q[MASS] == C.ROCKET_INITIAL_MASS
    assert model.state.q[MASS_FLOW_RATE] == C.ROCKET_MASS_FLOW_RATE
    assert model.theta == 0.3
    assert model.omega == 0.01
    assert model.engines_on

def test_default_atmosphere():
    assert isinstance(make_rocket().atmosphere, USStandardAtmosphere)

def test_from_config():
    model = RocketModel.from_config(RocketConfig(z0=100.0, burn_time=10.0))
    assert model.z == 100.0
    assert model.burn_time == 10.0
    assert model.frontal_area == pytest.approx(0.25 * np.pi * C.ROCKET_DIAMETER**2)

def test_sea_level_thrust_exact():
    expected = C.ROCKET_ENGINES * C.ROCKET_SEA_LEVEL_THRUST
    assert make_rocket().thrust_at(0.0) == expected
    assert make_rocket(atmosphere=ConstantAtmosphere()).thrust_at(5000.0) == expected

def test_vacuum_thrust_exact():
    model = make_rocket(atmosphere=ConstantAtmosphere(pressure=0.0, density=0.0))
    assert model.thrust_at(0.0) == C.ROCKET_ENGINES * C.ROCKET_VACUUM_THRUST

def test_thrust_grows_with_altitude():
    model = make_rocket()
    assert model.thrust_at(0.0) < model.thrust_at(10000.0) < model.thrust_at(100000.0)

def test_cut_off_engines():
    model = make_rocket()
    model.cut_off_engines()
    assert not model.engines_on
    assert model.thrust_at(0.0) == 0.0
    assert model.mass_flow_rate == 0.0
    forces = model.compute_forces(model.state.to_vector())
    assert forces['thrust'] == 0.0

def test_forces_on_pad():
    model = make_rocket()
    forces = model.compute_forces(model.state.to_vector())
    thrust = C.ROCKET_ENGINES * C.ROCKET_SEA_LEVEL_THRUST
    assert forces['thrust'] == thrust
    assert forces['drag'] == 0.0
    assert forces['lift'] == 0.0
    assert forces['gravity'] == pytest.approx(C.G0)
    assert forces['fz'] == pytest.approx(thrust - C.ROCKET_INITIAL_MASS * C.G0)
    assert forces['fx'] == pytest.approx(0.0, abs=1e-6)

def test_rhs_derivatives():
    model = make_rocket(theta=0.4, omega=0.02, vy0=7.0)
    q = model.state.to_vector()
    dq = model.right_hand_side(0.0, q, np.zeros(STATE_SIZE), 0.5, 0.0)
    assert dq[VY] == 0.0
    assert dq[Y] == 0.0
    assert dq[MASS_FLOW_RATE] == 0.0
    assert dq[OMEGA] == 0.0
    assert dq[THETA] == pytest.approx(0.5 * 0.02)
    assert dq[MASS] == pytest.approx(-0.5 * C.ROCKET_MASS_FLOW_RATE * C.ROCKET_ENGINES)
    forces = model.compute_forces(q)
    assert dq[VX] == pytest.approx(0.5 * forces['fx'] / C.ROCKET_INITIAL_MASS)
    assert dq[VZ] == pytest.approx(0.5 * forces['fz'] / C.ROCKET_INITIAL_MASS)
    assert dq[X] == 0.0 and dq[Z] == 0.0

def test_atmosphere_queried_at_stage_altitude():
    atmosphere = RecordingAtmosphere()
    model = make_rocket(atmosphere=atmosphere)
    model.z = 1200.0
    q = model.state.to_vector()
    delta = np.zeros(STATE_SIZE)
    delta[Z] = 100.0
    model.right_hand_side(0.0, q, delta, 0.1, 0.5)
    assert atmosphere.altitudes[-1] == pytest.approx(1250.0)

def test_zero_mass_flow_keeps_mass_constant():
    model = make_rocket(mass_flow_rate=0.0)
    for _ in range(100):
        integrators.integrate(model, 0.1)
    assert model.mass == C.ROCKET_INITIAL_MASS

def test_mass_depletes_linearly():
    model = make_rocket()
    for _ in range(50):
        integrators.integrate(model, 0.1)
    expected = C.ROCKET_INITIAL_MASS - C.ROCKET_ENGINES * C.ROCKET_MASS_FLOW_RATE * model.time
    assert model.mass == pytest.approx(expected, rel=1e-9)

def test_pitch_is_kinematic():
    model = make_rocket(theta=1.0, omega=0.01)
    for _ in range(100):
        integrators.integrate(model, 0.1)
    assert model.theta == pytest.approx(1.0 + 0.01 * 10.0)
    assert model.omega == 0.01

def test_vertical_ascent():
    model = make_rocket()
    for _ in range(100):
        integrators.integrate(model, 0.1)
    assert model.z > 0.0
    assert model.vz > 0.0
    assert model.vx == pytest.approx(0.0, abs=1e-6)
    assert model.y == 0.0

def test_str():
    assert "Rocket(" in str(make_rocket())
