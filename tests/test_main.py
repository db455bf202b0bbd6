"""
Headless driver and plotting collaborator tests.
"""
import json

import pytest

from orbitsim import cli
from orbitsim import main as driver
from orbitsim.simulation.fleet import Fleet
from orbitsim.visualization.plots import plot_trails, plot_altitude_history


def test_run_records_altitude_series():
    fleet = Fleet()
    fleet.add(height=500_000.0)
    times, altitudes = driver.run(fleet, 1.0, 1.5, frame_dt=0.5)
    assert times == pytest.approx([0.0, 0.5, 1.0, 1.5])
    assert len(altitudes) == 1
    assert len(altitudes[0]) == 4
    assert altitudes[0][-1] == pytest.approx(500_000.0, abs=10.0)


def test_run_stops_when_everything_crashed():
    fleet = Fleet()
    fleet.add(height=50_000.0)
    times, altitudes = driver.run(fleet, 1.0, 100.0, frame_dt=1.0)
    assert times == [0.0, 1.0]
    assert len(altitudes[0]) == 1


def test_save_json(tmp_output_dir):
    path = driver.save_json({"a": 1}, "unit")
    with open(path) as f:
        assert json.load(f) == {"a": 1}


def test_cli_scenario_config_carries_name_and_time_scale(monkeypatch):
    answers = iter(["orbit", "500", "2"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(answers))
    config = cli.create_satellite_config(2)
    assert config.name == "Satellite-3"
    assert config.time_scale == 2.0
    assert config.circular is True
    assert config.height == pytest.approx(500_000.0)


def test_main_with_eof_defaults(tmp_output_dir, monkeypatch):
    def eof(prompt=""):
        raise EOFError

    monkeypatch.setattr("builtins.input", eof)
    monkeypatch.setattr(driver.settings, "DEFAULT_DURATION", 2.0)
    monkeypatch.setattr("orbitsim.cli.DEFAULT_DURATION", 2.0)
    driver.main()
    assert list(tmp_output_dir.glob("fleet_snapshot_*.json"))
    assert (tmp_output_dir / "trails.png").exists()
    assert (tmp_output_dir / "altitude_history.png").exists()


def test_plots(tmp_output_dir):
    fleet = Fleet()
    fleet.add()
    fleet.add(height=50_000.0)
    fleet.tick(1.0)
    assert plot_trails(fleet).endswith("trails.png")
    assert plot_altitude_history([0.0, 1.0], [[1.0, 2.0], [1.0]], ["a", "b"]).endswith("altitude_history.png")
