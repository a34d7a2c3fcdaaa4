"""
Trajectory Simulation - Physical Constants and Default Parameters

This module defines the physical constants, atmosphere parameters and the
default body configurations (golf ball, multi-engine rocket, spring-mass,
wall) used throughout the simulation.
"""

import numpy as np

# =============================================================================
# NUMERICS
# =============================================================================

# Additive regularization for velocity magnitudes used as divisors (m/s)
VELOCITY_EPSILON = 1.0e-8

# =============================================================================
# EARTH PARAMETERS
# =============================================================================

# Standard gravitational acceleration at sea level (m/s^2)
G0 = 9.80665

# Constant vertical gravity used by the projectile model (m/s^2, +z up)
G_PROJECTILE = -9.81

# Earth radius used by the inverse-square gravity law (m)
R_EARTH = 6356766.0

# =============================================================================
# ATMOSPHERE (US Standard Atmosphere 1976)
# =============================================================================

ATM_T0 = 288.15            # Sea level temperature (K)
ATM_P0 = 101325.0          # Sea level pressure (Pa)
ATM_RHO0 = 1.225           # Sea level density (kg/m^3)

GAMMA = 1.4      # Adiabatic index for air
R_GAS = 287.05   # Specific gas constant (J/(kg·K))

ATM_SPEED_OF_SOUND_FALLBACK = 340.0  # m/s
ATM_UPPER_SCALE_HEIGHT = 5000.0      # m, exponential decay above 84.852 km
DENSITY_FLOOR = 1e-12                # Below this the air is treated as vacuum (kg/m^3)

# =============================================================================
# PROJECTILE DEFAULTS (golf ball)
# =============================================================================

BALL_MASS = 0.0459         # kg
BALL_AREA = 0.0014         # m^2
BALL_RADIUS = 0.0214       # m
BALL_CD = 0.22
BALL_OMEGA = 300.0         # rad/s
BALL_SPIN_AXIS = np.array([0.0, 1.0, 0.0])  # backspin about +y
BALL_LAUNCH_SPEED = 50.0   # m/s
BALL_LAUNCH_ANGLE = np.radians(45.0)

# Empirical backspin lift correlation: Cl = CL_OFFSET + sqrt(CL_BASE + CL_SLOPE*|r*w/v|)
CL_OFFSET = -0.05
CL_BASE = 0.0025
CL_SLOPE = 0.36

# =============================================================================
# ROCKET DEFAULTS (nine-engine first stage)
# =============================================================================

ROCKET_ENGINES = 9
ROCKET_SEA_LEVEL_THRUST = 845000.0   # N per engine
ROCKET_VACUUM_THRUST = 914000.0      # N per engine
ROCKET_DIAMETER = 3.7                # m
ROCKET_CD = 0.5
ROCKET_INITIAL_MASS = 549054.0       # kg
ROCKET_MASS_FLOW_RATE = 298.0        # kg/s per engine
ROCKET_BURN_TIME = 162.0             # s
ROCKET_THETA = np.pi / 2.0           # rad, pitch above horizontal
ROCKET_OMEGA = 0.0                   # rad/s, pitch rate

# =============================================================================
# SPRING DEFAULTS
# =============================================================================

SPRING_MASS = 1.0     # kg
SPRING_MU = 0.5       # kg/s
SPRING_K = 20.0       # N/m
SPRING_X0 = 0.4       # m

# =============================================================================
# HEAT DIFFUSION DEFAULTS (steel wall)
# =============================================================================

WALL_THICKNESS = 0.02        # m
WALL_DIFFUSIVITY = 1.172e-5  # m^2/s
WALL_INITIAL_T = 300.0       # K
WALL_BOUNDARY_T = 600.0      # K

# Tabulated erf on [0, 2] in steps of 0.1
ERF_TABLE = np.array([
    0.0, 0.1125, 0.2227, 0.3286, 0.4284,
    0.5205, 0.6039, 0.6778, 0.7421, 0.7969,
    0.8427, 0.8802, 0.9103, 0.9340, 0.9523,
    0.9661, 0.9764, 0.9838, 0.9891, 0.9928,
    0.9953,
])
ERF_TABLE_STEP = 0.1
ERF_TABLE_MAX = 2.0

# =============================================================================
# SIMULATION PARAMETERS
# =============================================================================

# Time step (s)
DT = 0.01

# Maximum simulation time (s)
MAX_TIME = 600.0

# Steps between progress rows when verbose
LOG_INTERVAL = 100
