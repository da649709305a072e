import json

import pytest
from nbody_sim.cli import main
from nbody_sim.io import load_scene_raw

def write_scene(path):
    path.write_text(json.dumps({
        "dt": 1e-3,
        "steps": 2,
        "particles": [
            {"species": "proton", "position": [-0.5, 0.0, 0.0]},
            {"species": "proton", "position": [0.5, 0.0, 0.0]},
        ],
    }))

def test_cli_runs_and_saves(tmp_path):
    scene = tmp_path / "scene.json"
    out = tmp_path / "out.json"
    write_scene(scene)

    rc = main([str(scene), "--steps", "3", "--log-level", "WARNING", "--output", str(out)])

    assert rc == 0
    data = load_scene_raw(str(out))
    assert data["steps"] == 3
    assert data["time"] == pytest.approx(3e-3)
    assert data["particles"][0]["position"][0] < -0.5
    assert data["particles"][1]["position"][0] > 0.5

def test_cli_overrides_scene_parameters(tmp_path):
    scene = tmp_path / "scene.json"
    out = tmp_path / "out.json"
    write_scene(scene)

    main([str(scene), "--dt", "0", "--workers", "2", "--log-level", "ERROR", "--output", str(out)])

    data = load_scene_raw(str(out))
    assert data["dt"] == 0.0
    assert data["workers"] == 2
    # dt = 0 leaves the scene untouched
    assert data["particles"][0]["position"] == [-0.5, 0.0, 0.0]

def test_cli_profile_and_log_file(tmp_path):
    scene = tmp_path / "scene.json"
    log_file = tmp_path / "run.log"
    write_scene(scene)

    main([str(scene), "--profile", "--report-every", "1", "--log-file", str(log_file)])

    text = log_file.read_text()
    assert "compute: n=2" in text
    assert "Proton at position" in text
