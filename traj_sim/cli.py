"""
Trajectory Simulation - CLI

Single entry point for running any of the models from the command line
and exporting the step log.
"""

import argparse
import logging
import sys
from dataclasses import replace

import numpy as np

from .config import (
    DiffusionConfig, ProjectileConfig, RocketConfig, SimulationConfig, SpringConfig,
)
from .diffusion import HeatConductionWall
from .main import (
    compute_lateral_displacement, compute_range, run_projectile, run_rocket, run_spring,
)
from .montecarlo import run_monte_carlo
from .validation import (
    ValidationError, validate_projectile_config, validate_rocket_config,
    validate_spring_config,
)

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    """Parse command-line arguments."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--dt", type=float, default=None, help="Time step (s)")
    common.add_argument("--max-time", type=float, default=None,
                        help="Maximum simulation time (s)")
    common.add_argument("--method", choices=["rk4", "euler"], default="rk4",
                        help="Integration method")
    common.add_argument("--csv", type=str, default=None,
                        help="Write the step log to this CSV file")
    common.add_argument("--quiet", "-q", action="store_true",
                        help="Suppress verbose output")

    parser = argparse.ArgumentParser(
        description="Rigid-body trajectory simulation",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("projectile", parents=[common], help="Spinning projectile")
    p.add_argument("--speed", type=float, default=ProjectileConfig.launch_speed,
                   help="Launch speed (m/s)")
    p.add_argument("--angle", type=float, default=np.degrees(ProjectileConfig.launch_angle),
                   help="Launch elevation (deg)")
    p.add_argument("--omega", type=float, default=ProjectileConfig.omega,
                   help="Spin rate (rad/s)")
    p.add_argument("--wind-vx", type=float, default=0.0, help="Wind x velocity (m/s)")
    p.add_argument("--wind-vy", type=float, default=0.0, help="Wind y velocity (m/s)")

    r = sub.add_parser("rocket", parents=[common], help="Multi-engine rocket")
    r.add_argument("--burn-time", type=float, default=RocketConfig.burn_time,
                   help="Burn duration (s)")
    r.add_argument("--theta", type=float, default=np.degrees(RocketConfig.theta),
                   help="Initial pitch above horizontal (deg)")
    r.add_argument("--pitch-rate", type=float, default=np.degrees(RocketConfig.omega),
                   help="Prescribed pitch rate (deg/s)")
    r.add_argument("--coast", action="store_true",
                   help="Keep flying after burnout until impact or max time")

    s = sub.add_parser("spring", parents=[common], help="Damped spring-mass")
    s.add_argument("--mass", type=float, default=SpringConfig.mass, help="Mass (kg)")
    s.add_argument("--mu", type=float, default=SpringConfig.mu, help="Damping (kg/s)")
    s.add_argument("--k", type=float, default=SpringConfig.k, help="Spring constant (N/m)")
    s.add_argument("--x0", type=float, default=SpringConfig.x0, help="Initial location (m)")

    d = sub.add_parser("diffusion", help="Transient wall conduction")
    d.add_argument("--time", type=float, default=60.0, help="Exposure time (s)")
    d.add_argument("--points", type=int, default=11, help="Depths to report")
    d.add_argument("--boundary-t", type=float, default=DiffusionConfig.boundary_t,
                   help="Surface temperature (K)")
    d.add_argument("--quiet", "-q", action="store_true", help="Suppress verbose output")

    m = sub.add_parser("montecarlo", parents=[common],
                       help="Projectile dispersion study (--csv writes one row per run)")
    m.add_argument("--runs", type=int, default=50, help="Number of runs")
    m.add_argument("--seed", type=int, default=42, help="Master random seed")

    return parser.parse_args(argv)


def _simulation_config(args) -> SimulationConfig:
    cfg = SimulationConfig(method=args.method, verbose=not args.quiet)
    if args.dt is not None:
        cfg = replace(cfg, dt=args.dt)
    if args.max_time is not None:
        cfg = replace(cfg, max_time=args.max_time)
    return cfg


def _print_summary(title: str, rows):
    print("\n" + "=" * 60)
    print(title)
    print("=" * 60)
    for label, value in rows:
        print(f"{label}: {value}")
    print("=" * 60 + "\n")


def _run_command(args):
    if args.command == "diffusion":
        wall = HeatConductionWall.from_config(
            replace(DiffusionConfig(), boundary_t=args.boundary_t)
        )
        depths = np.linspace(0.0, wall.thickness, args.points)
        _print_summary(
            f"WALL TEMPERATURE AFTER {args.time:.1f} s",
            [(f"x = {x*1000:6.2f} mm", f"{wall.temperature(x, args.time):.2f} K") for x in depths],
        )
        return

    sim_config = _simulation_config(args)

    if args.command == "projectile":
        config = ProjectileConfig(
            launch_speed=args.speed, launch_angle=np.radians(args.angle),
            omega=args.omega, wind_vx=args.wind_vx, wind_vy=args.wind_vy,
        )
        validate_projectile_config(config)
        model, log, reason = run_projectile(config, sim_config)
        _print_summary("PROJECTILE SUMMARY", [
            ("Termination reason", reason),
            ("Flight time", f"{model.time:.2f} s"),
            ("Range", f"{compute_range(log):.2f} m"),
            ("Lateral displacement", f"{compute_lateral_displacement(log):.2f} m"),
            ("Apex", f"{np.max(log.column('z')):.2f} m"),
        ])
    elif args.command == "rocket":
        config = RocketConfig(
            burn_time=args.burn_time, theta=np.radians(args.theta),
            omega=np.radians(args.pitch_rate),
        )
        validate_rocket_config(config)
        model, log, reason = run_rocket(config, sim_config, coast=args.coast)
        _print_summary("ROCKET SUMMARY", [
            ("Termination reason", reason),
            ("Final time", f"{model.time:.2f} s"),
            ("Final altitude", f"{model.z/1000:.2f} km"),
            ("Downrange", f"{model.x/1000:.2f} km"),
            ("Final velocity", f"{model.speed:.2f} m/s"),
            ("Final mass", f"{model.mass:.1f} kg"),
        ])
    elif args.command == "spring":
        config = SpringConfig(mass=args.mass, mu=args.mu, k=args.k, x0=args.x0)
        validate_spring_config(config)
        model, log, reason = run_spring(config, sim_config)
        _print_summary("SPRING SUMMARY", [
            ("Termination reason", reason),
            ("Final time", f"{model.time:.2f} s"),
            ("Final position", f"{model.x:.4f} m"),
            ("Final energy", f"{model.energy():.4f} J"),
        ])
    else:
        results = run_monte_carlo(n_runs=args.runs, seed=args.seed, sim_config=sim_config,
                                  verbose=not args.quiet)
        if args.csv:
            results.to_csv(args.csv)
        return

    if args.csv:
        log.to_csv(args.csv)


def main(argv=None) -> int:
    """Main execution flow."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    if args.quiet:
        logging.getLogger("traj_sim").setLevel(logging.WARNING)

    try:
        _run_command(args)
    except ValidationError as e:
        logger.error(f"Invalid configuration: {e}")
        print(f"\n[ERROR] Invalid configuration: {e}")
        return 1
    except Exception as e:
        logger.error(f"Simulation failed: {e}", exc_info=True)
        print(f"\n[ERROR] Simulation failed: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
