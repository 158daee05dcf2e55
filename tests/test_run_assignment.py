import numpy as np
import pytest
import yaml

from track_assign import Assigner, load_config
from track_assign.run_assignment import load_cost_matrix, main, run


def write_config(path, cost_dir, **assigner):
    params = {"unassigned_track_cost": 0.5, "solver": "munkres", "verbose": False}
    params.update(assigner)
    config = {"Assigner": params, "EXP": {"cost_dir": str(cost_dir), "pattern": "*.csv", "delimiter": ","}}
    path.write_text(yaml.safe_dump(config))
    return path


def test_default_config():
    config = load_config()
    assert "Assigner" in config and "EXP" in config
    assigner = Assigner(**config["Assigner"])
    assert assigner.solver == "munkres"
    assert assigner.unassigned_detection_cost is None


def test_missing_config(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml")


def test_missing_section(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("EXP:\n  cost_dir: .\n")
    with pytest.raises(KeyError, match="Assigner"):
        load_config(path)


def test_load_cost_matrix(tmp_path):
    path = tmp_path / "000.csv"
    path.write_text("0.1,inf,0.3\n")
    cost = load_cost_matrix(path)
    assert cost.shape == (1, 3)
    assert np.isinf(cost[0, 1])

    column = tmp_path / "001.csv"
    column.write_text("1.0\n2.0\n")
    assert load_cost_matrix(column).shape == (2, 1)

    empty = tmp_path / "002.csv"
    empty.write_text("")
    assert load_cost_matrix(empty).shape == (0, 0)


def test_run_frames_in_order(tmp_path, capsys):
    cost_dir = tmp_path / "costs"
    cost_dir.mkdir()
    (cost_dir / "001.csv").write_text("0.1,0.9\n0.9,0.1\n")
    (cost_dir / "000.csv").write_text("0.1,inf\ninf,inf\n")
    config = load_config(write_config(tmp_path / "config.yaml", cost_dir))

    results = run(config)
    assert [r[0].name for r in results] == ["000.csv", "001.csv"]

    _, matches, unassigned_tracks, unassigned_detections = results[0]
    assert matches.tolist() == [[0, 0]]
    assert unassigned_tracks.tolist() == [1]
    assert unassigned_detections.tolist() == [1]

    _, matches, _, _ = results[1]
    assert matches.tolist() == [[0, 0], [1, 1]]
    assert "001.csv: matches=[[0, 0], [1, 1]]" in capsys.readouterr().out


def test_main_cost_dir_override(tmp_path):
    cost_dir = tmp_path / "other"
    cost_dir.mkdir()
    (cost_dir / "frame.csv").write_text("1,2,3\n")
    config_path = write_config(tmp_path / "config.yaml", tmp_path / "unused",
                               unassigned_track_cost=10.0)

    results = main(["--config", str(config_path), "--cost-dir", str(cost_dir)])
    assert len(results) == 1
    _, matches, _, unassigned_detections = results[0]
    assert matches.tolist() == [[0, 0]]
    assert unassigned_detections.tolist() == [1, 2]
