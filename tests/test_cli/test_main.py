"""
Command Line Entry Point Tests

main(argv) is what the elvcar-run console script calls.
"""

import sys
from pathlib import Path

# Add project root to path for imports
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

import yaml

import main as cli
from config import DEFAULT_SCENARIO


def write_scenario(path):
    path.write_text(yaml.dump({
        'simulation': {
            'name': 'one_hop',
            'duration': 8.0,
            'requests': [{'time': 0.1, 'floor': 1}],
        }
    }))
    return path


def test_list_prints_bundled_scenarios(capsys):
    assert cli.main(["--list"]) == 0
    assert str(DEFAULT_SCENARIO) in capsys.readouterr().out.splitlines()


def test_runs_scenario_from_argv(tmp_path, capsys):
    scenario = write_scenario(tmp_path / "one_hop.yaml")
    assert cli.main([str(scenario)]) == 0
    out = capsys.readouterr().out
    assert "floor 1: accepted" in out
    assert "Final state: floor 1" in out


def test_log_flag_writes_event_log(tmp_path, monkeypatch):
    scenario = write_scenario(tmp_path / "one_hop.yaml")
    monkeypatch.chdir(tmp_path)
    assert cli.main([str(scenario), "--log"]) == 0
    lines = (tmp_path / "trajectory_log.jsonl").read_text().splitlines()
    assert '"metadata"' in lines[0]


def test_run_simulation_defaults_to_bundled_scenario():
    controller, recorder, scheduler = cli.run_simulation()
    assert [floor for _, floor in recorder.arrivals()] == [3, 5, 0]
    reasons = [str(result.reason) for _, result in scheduler.results if not result]
    assert reasons == ["InTransit"]
