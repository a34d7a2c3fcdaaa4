"""
Trajectory Simulation - Monte Carlo Dispersion Analysis

Batch trajectory study for the spinning projectile: launch speed, launch
angle, spin rate and crosswind are dispersed around a nominal
ProjectileConfig and each run flies an independent model. The integrator
is shared; no state crosses runs.
"""

import csv
import logging
import time
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional

import numpy as np

from .config import ProjectileConfig, SimulationConfig
from .main import compute_lateral_displacement, compute_range, run_projectile

logger = logging.getLogger(__name__)


@dataclass
class MCDispersion:
    """Definition of a single Monte Carlo dispersion parameter."""
    name: str
    sigma: float       # 1-sigma magnitude
    distribution: str = "gaussian"  # "gaussian" or "uniform"

    def sample(self, rng: np.random.Generator) -> float:
        if self.distribution == "gaussian":
            return float(rng.normal(0.0, self.sigma))
        if self.distribution == "uniform":
            return float(rng.uniform(-self.sigma, self.sigma))
        raise ValueError(f"Unknown distribution: {self.distribution}")


DEFAULT_DISPERSIONS = [
    MCDispersion("launch_speed", 1.0),               # m/s
    MCDispersion("launch_angle", np.radians(1.0)),   # rad
    MCDispersion("omega", 15.0),                     # rad/s
    MCDispersion("wind_vy", 1.0),                    # m/s
]


@dataclass
class MCRunResult:
    """Result from a single Monte Carlo run."""
    run_index: int
    range_m: float
    lateral_m: float
    apex_m: float
    flight_time_s: float
    final_reason: str
    dispersions_applied: Dict[str, float] = field(default_factory=dict)


CSV_COLUMNS = ['run_index', 'range_m', 'lateral_m', 'apex_m', 'flight_time_s', 'final_reason']


@dataclass
class MCResults:
    """Aggregated results from a Monte Carlo campaign."""
    runs: List[MCRunResult] = field(default_factory=list)
    config: Optional[ProjectileConfig] = None
    wall_time_s: float = 0.0

    @property
    def n_runs(self) -> int:
        return len(self.runs)

    def get_statistic(self, attr: str) -> dict:
        """Compute mean/std/min/max for a scalar attribute across runs."""
        values = [getattr(r, attr) for r in self.runs if hasattr(r, attr)]
        if not values:
            return {'mean': 0, 'std': 0, 'min': 0, 'max': 0}
        arr = np.array(values)
        return {
            'mean': float(np.mean(arr)),
            'std': float(np.std(arr)),
            'min': float(np.min(arr)),
            'max': float(np.max(arr)),
        }

    def summary(self) -> str:
        """Return a formatted summary string."""
        lines = [f"Monte Carlo Results: {self.n_runs} runs in {self.wall_time_s:.1f}s"]
        for attr in ['range_m', 'lateral_m', 'apex_m', 'flight_time_s']:
            stats = self.get_statistic(attr)
            lines.append(f"  {attr:15s}: mean={stats['mean']:.2f} std={stats['std']:.2f} "
                         f"min={stats['min']:.2f} max={stats['max']:.2f}")
        return '\n'.join(lines)

    def to_csv(self, filename: str):
        """Write one row per run to a CSV file with a header row."""
        with open(filename, 'w', newline='') as fh:
            writer = csv.writer(fh)
            writer.writerow(CSV_COLUMNS)
            for r in self.runs:
                writer.writerow([getattr(r, name) for name in CSV_COLUMNS])
        logger.info(f"Wrote {self.n_runs} runs to {filename}")


def disperse_config(base_config: ProjectileConfig, dispersions: List[MCDispersion],
                    rng: np.random.Generator) -> tuple:
    """
    Apply one draw of every dispersion to the base configuration.

    Returns:
        (dispersed_config, {name: offset})
    """
    applied = {}
    changes = {}
    for d in dispersions:
        offset = d.sample(rng)
        applied[d.name] = offset
        changes[d.name] = getattr(base_config, d.name) + offset
    return replace(base_config, **changes), applied


def run_monte_carlo(base_config: ProjectileConfig = None,
                    n_runs: int = 100,
                    seed: int = 42,
                    sim_config: SimulationConfig = None,
                    dispersions: List[MCDispersion] = None,
                    verbose: bool = True) -> MCResults:
    """
    Run a Monte Carlo dispersion campaign.

    Args:
        base_config: Nominal projectile configuration
        n_runs: Number of Monte Carlo runs
        seed: Master random seed
        sim_config: Step size and time limit for every run (forced quiet)
        dispersions: Parameters to disperse; defaults to DEFAULT_DISPERSIONS
        verbose: Print progress

    Returns:
        MCResults with per-run data and statistics
    """
    if base_config is None:
        base_config = ProjectileConfig()
    if sim_config is None:
        sim_config = SimulationConfig()
    sim_config = replace(sim_config, verbose=False)
    if dispersions is None:
        dispersions = DEFAULT_DISPERSIONS

    rng = np.random.default_rng(seed)
    results = MCResults(config=base_config)
    start = time.time()

    logger.info(f"Starting Monte Carlo campaign: {n_runs} runs, seed={seed}")

    for i in range(n_runs):
        config, applied = disperse_config(base_config, dispersions, rng)
        model, log, reason = run_projectile(config, sim_config)

        results.runs.append(MCRunResult(
            run_index=i,
            range_m=compute_range(log, config.z0),
            lateral_m=compute_lateral_displacement(log, config.z0),
            apex_m=float(np.max(log.column('z'))),
            flight_time_s=model.time,
            final_reason=reason,
            dispersions_applied=applied,
        ))

        if verbose and (i + 1) % max(1, n_runs // 10) == 0:
            elapsed = time.time() - start
            print(f"  MC run {i+1}/{n_runs} ({elapsed:.1f}s)")

    results.wall_time_s = time.time() - start

    if verbose:
        print(results.summary())

    return results
