"""Tests for the atmosphere models."""
import pytest
from traj_sim import constants as C
from traj_sim.atmosphere import (
    ConstantAtmosphere, USStandardAtmosphere, compute_atmosphere_properties,
)


def test_sea_level():
    T, P, rho, a = compute_atmosphere_properties(0.0)
    assert T == C.ATM_T0
    assert P == C.ATM_P0
    assert rho == pytest.approx(C.ATM_RHO0, rel=1e-3)
    assert a == pytest.approx(340.3, rel=1e-3)

def test_tropopause():
    T, P, rho, a = compute_atmosphere_properties(11000.0)
    assert T == pytest.approx(216.65)
    assert P == pytest.approx(22632.0, rel=1e-3)

def test_pressure_and_density_decrease():
    previous = compute_atmosphere_properties(0.0)
    for h in [1000.0, 5000.0, 15000.0, 30000.0, 60000.0, 90000.0]:
        current = compute_atmosphere_properties(h)
        assert current[1] < previous[1]
        assert current[2] < previous[2]
        previous = current

def test_negative_altitude_clamped():
    assert compute_atmosphere_properties(-500.0) == compute_atmosphere_properties(0.0)

def test_vacuum_far_above():
    T, P, rho, a = compute_atmosphere_properties(1.0e6)
    assert rho == 0.0
    assert T > 0.0

def test_us76_query():
    atm = USStandardAtmosphere()
    P, rho = atm.query(0.0)
    assert P == C.ATM_P0
    props = atm.properties(8000.0)
    assert set(props) == {'temperature', 'pressure', 'density', 'speed_of_sound'}

def test_us76_cache_consistent():
    atm = USStandardAtmosphere()
    first = atm.query(12345.0)
    atm.query(500.0)
    assert atm.query(12345.0) == first
    assert atm.query(12345.0) == first
    T, P, rho, a = compute_atmosphere_properties(12345.0)
    assert first == (P, rho)

def test_constant_atmosphere():
    atm = ConstantAtmosphere()
    assert atm.query(0.0) == (C.ATM_P0, C.ATM_RHO0)
    assert atm.query(50000.0) == (C.ATM_P0, C.ATM_RHO0)
    assert ConstantAtmosphere(pressure=0.0, density=0.0).query(0.0) == (0.0, 0.0)
