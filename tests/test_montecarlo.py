import pytest
import numpy as np
from traj_sim import montecarlo
from traj_sim.config import ProjectileConfig, create_test_config


def test_dispersion_sample_distributions():
    rng = np.random.default_rng(0)
    assert isinstance(montecarlo.MCDispersion("omega", 10.0).sample(rng), float)
    u = montecarlo.MCDispersion("omega", 2.0, "uniform").sample(rng)
    assert -2.0 <= u <= 2.0
    with pytest.raises(ValueError):
        montecarlo.MCDispersion("omega", 1.0, "lognormal").sample(rng)

def test_disperse_config_applies_offsets():
    base = ProjectileConfig()
    dispersions = [montecarlo.MCDispersion("launch_speed", 1.0),
                   montecarlo.MCDispersion("wind_vy", 0.5)]
    config, applied = montecarlo.disperse_config(base, dispersions, np.random.default_rng(3))
    assert set(applied) == {"launch_speed", "wind_vy"}
    assert config.launch_speed == pytest.approx(base.launch_speed + applied["launch_speed"])
    assert config.wind_vy == pytest.approx(applied["wind_vy"])
    assert config.mass == base.mass

def test_empty_results_statistics():
    stats = montecarlo.MCResults().get_statistic('range_m')
    assert stats == {'mean': 0, 'std': 0, 'min': 0, 'max': 0}

@pytest.mark.slow
def test_monte_carlo_campaign():
    sim = create_test_config(dt=0.05, max_time=30.0)
    results = montecarlo.run_monte_carlo(n_runs=4, seed=7, sim_config=sim, verbose=False)
    assert results.n_runs == 4
    assert all(r.final_reason == "Ground impact" for r in results.runs)
    assert [r.run_index for r in results.runs] == [0, 1, 2, 3]
    stats = results.get_statistic('range_m')
    assert 0.0 < stats['min'] <= stats['mean'] <= stats['max']
    assert "4 runs" in results.summary()

@pytest.mark.slow
def test_monte_carlo_reproducible():
    sim = create_test_config(dt=0.05, max_time=30.0)
    a = montecarlo.run_monte_carlo(n_runs=3, seed=11, sim_config=sim, verbose=False)
    b = montecarlo.run_monte_carlo(n_runs=3, seed=11, sim_config=sim, verbose=False)
    assert [r.range_m for r in a.runs] == [r.range_m for r in b.runs]
    assert [r.dispersions_applied for r in a.runs] == [r.dispersions_applied for r in b.runs]

def test_results_to_csv(tmp_path):
    results = montecarlo.MCResults(runs=[
        montecarlo.MCRunResult(0, 120.5, 1.5, 40.0, 6.2, "Ground impact"),
        montecarlo.MCRunResult(1, 118.0, -0.5, 39.0, 6.1, "Ground impact"),
    ])
    path = tmp_path / "mc.csv"
    results.to_csv(str(path))
    lines = path.read_text().splitlines()
    assert lines[0] == ",".join(montecarlo.CSV_COLUMNS)
    assert len(lines) == 3
    assert lines[1].split(",")[0] == "0"
    assert lines[2].split(",")[-1] == "Ground impact"
