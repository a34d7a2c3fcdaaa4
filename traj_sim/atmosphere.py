"""
Trajectory Simulation - Atmosphere Models

The rocket model reads ambient pressure and density through the
AtmosphereModel protocol:

    pressure, density = atmosphere.query(altitude)

USStandardAtmosphere implements it with the US Standard Atmosphere 1976
layers (lapse-rate model up to 84.852 km, exponential decay above).
ConstantAtmosphere returns fixed conditions regardless of altitude.
"""

from typing import Optional, Protocol, Tuple

import numpy as np

from . import constants as C
from .types import AtmosphereProperties


class AtmosphereModel(Protocol):
    """Pure function of altitude -> (pressure Pa, density kg/m^3)."""

    def query(self, altitude: float) -> Tuple[float, float]:
        ...


# US-76 layer model carried over from the rlv_sim ascent simulator
# (rlv_sim/forces.py), without its module-level property cache.
# Layer boundaries and lapse rates (dT/dh in K/m, geometric altitude)
_US76_H = np.array([0.0, 11000.0, 20000.0, 32000.0, 47000.0, 51000.0, 71000.0, 84852.0])
_US76_L = np.array([-0.0065, 0.0, 0.0010, 0.0028, 0.0, -0.0028, -0.0020])


def _build_us76_tables() -> Tuple[np.ndarray, np.ndarray]:
    """Layer-base temperatures and pressures for US-76."""
    tb = [C.ATM_T0]
    pb = [C.ATM_P0]
    for i, lapse in enumerate(_US76_L):
        dh = _US76_H[i + 1] - _US76_H[i]
        T0 = tb[-1]
        P0 = pb[-1]
        if abs(lapse) > 1e-12:
            T1 = T0 + lapse * dh
            exponent = -C.G0 / (lapse * C.R_GAS)
            P1 = P0 * (T1 / T0) ** exponent
        else:
            T1 = T0
            P1 = P0 * np.exp(-C.G0 * dh / (C.R_GAS * T0))
        tb.append(float(T1))
        pb.append(float(P1))
    return np.array(tb), np.array(pb)


_US76_TB, _US76_PB = _build_us76_tables()


def compute_atmosphere_properties(altitude: float) -> tuple:
    """
    Compute atmospheric properties (Temperature, Pressure, Density, Speed of Sound).

    Args:
        altitude: Geometric altitude above sea level (m); negative values
            are treated as sea level

    Returns:
        (temperature, pressure, density, speed_of_sound)
        T in K, P in Pa, rho in kg/m^3, a in m/s
    """
    h = max(0.0, float(altitude))

    if h <= _US76_H[-1]:
        idx = int(np.searchsorted(_US76_H, h, side='right') - 1)
        idx = max(0, min(idx, len(_US76_L) - 1))
        lapse = _US76_L[idx]
        T0 = _US76_TB[idx]
        P0 = _US76_PB[idx]
        dh = h - _US76_H[idx]

        if abs(lapse) > 1e-12:
            T = T0 + lapse * dh
            exponent = -C.G0 / (lapse * C.R_GAS)
            P = P0 * (T / T0) ** exponent
        else:
            T = T0
            P = P0 * np.exp(-C.G0 * dh / (C.R_GAS * T0))
    else:
        T = _US76_TB[-1]
        P = _US76_PB[-1] * np.exp(-(h - _US76_H[-1]) / C.ATM_UPPER_SCALE_HEIGHT)

    rho = P / (C.R_GAS * T) if (T > 0.0 and P > 0.0) else 0.0
    if rho < C.DENSITY_FLOOR:
        rho = 0.0
    speed_of_sound = np.sqrt(C.GAMMA * C.R_GAS * T) if T > 0.0 else C.ATM_SPEED_OF_SOUND_FALLBACK
    return float(T), float(P), float(rho), float(speed_of_sound)


class USStandardAtmosphere:
    """
    US Standard Atmosphere 1976 behind the AtmosphereModel protocol.

    The last queried altitude and its result are cached; a repeated query
    returns the cached values, which are identical to a fresh computation.
    """

    def __init__(self):
        self._last_altitude: Optional[float] = None
        self._last_properties: Optional[tuple] = None

    def properties(self, altitude: float) -> AtmosphereProperties:
        altitude = float(altitude)
        if altitude != self._last_altitude:
            self._last_properties = compute_atmosphere_properties(altitude)
            self._last_altitude = altitude
        T, P, rho, a = self._last_properties
        return AtmosphereProperties(
            temperature=T, pressure=P, density=rho, speed_of_sound=a
        )

    def query(self, altitude: float) -> Tuple[float, float]:
        props = self.properties(altitude)
        return props['pressure'], props['density']


class ConstantAtmosphere:
    """Altitude-independent conditions, sea level by default."""

    def __init__(self, pressure: float = C.ATM_P0, density: float = C.ATM_RHO0):
        self.pressure = pressure
        self.density = density

    def query(self, altitude: float) -> Tuple[float, float]:
        return self.pressure, self.density
