import json
import logging

import pytest
from typer.testing import CliRunner

from voxel_gestures.cli import app
from voxel_gestures.cli.replay import RecordedFrame

runner = CliRunner()


@pytest.fixture(autouse=True)
def restore_logging():
    logger = logging.getLogger("voxel_gestures")
    handlers, propagate, level = list(logger.handlers), logger.propagate, logger.level
    yield
    logger.handlers[:] = handlers
    logger.propagate = propagate
    logger.setLevel(level)


@pytest.fixture
def config_path(tmp_path):
    return tmp_path / "config.json"


@pytest.fixture
def recording(tmp_path, hands):
    """Pinch held from 0 to 600ms, then no hand, then a point."""
    path = tmp_path / "recording.jsonl"
    lines = [{"t": t, "landmarks": hands.pinch().to_list()} for t in range(0, 601, 50)]
    lines.append({"t": 650, "landmarks": None})
    lines.append({"t": 700, "landmarks": hands.point().to_list()})
    path.write_text("\n".join(json.dumps(line) for line in lines) + "\n\n")
    return path


def test_recorded_frame():
    assert RecordedFrame(t=0).to_sample() is None
    frame = RecordedFrame.model_validate_json(json.dumps({"t": 10, "landmarks": [[0.1, 0.2, 0.3]] * 21}))
    assert frame.to_sample().wrist == (0.1, 0.2, 0.3)


def test_replay(recording, config_path, tmp_path):
    world = tmp_path / "world.json"
    result = runner.invoke(app, ["replay", str(recording), "--config", str(config_path), "--save", str(world)])
    assert result.exit_code == 0, result.output
    # Fired at 200 and 500 (cooldown of 300ms)
    assert result.output.count("-> add") == 2
    assert "2 action(s) fired, 1 voxel(s) in the world" in result.output
    assert json.loads(world.read_text())["voxels"][0]["color"] == "#4F46E5"


def test_replay_delete_mode(recording, config_path, tmp_path):
    world = tmp_path / "world.json"
    runner.invoke(app, ["replay", str(recording), "--config", str(config_path), "--save", str(world)])
    result = runner.invoke(
        app, ["replay", str(recording), "--config", str(config_path), "--mode", "delete", "--load", str(world)]
    )
    assert result.exit_code == 0, result.output
    assert "-> remove" in result.output
    assert "0 voxel(s) in the world" in result.output


def test_replay_json(recording, config_path):
    result = runner.invoke(app, ["replay", str(recording), "--config", str(config_path), "--json"])
    assert result.exit_code == 0, result.output
    states = [json.loads(line) for line in result.output.splitlines() if line.startswith("{")]
    assert len(states) == 15
    assert states[-2]["gesture"] is None
    assert states[-1]["gesture"] == "point"


def test_replay_invalid_mode(recording, config_path):
    result = runner.invoke(app, ["replay", str(recording), "--config", str(config_path), "--mode", "paint"])
    assert result.exit_code == 1


def test_replay_invalid_recording(tmp_path, config_path):
    path = tmp_path / "bad.jsonl"
    path.write_text('{"t": 0, "landmarks": [[0, 0, 0]]}\n')
    result = runner.invoke(app, ["replay", str(path), "--config", str(config_path)])
    assert result.exit_code == 1


def test_show(tmp_path):
    path = tmp_path / "world.json"
    path.write_text(
        json.dumps(
            {
                "version": "1.0",
                "gridSize": 4,
                "voxels": [
                    {"x": 1, "y": 0, "z": 1, "color": "#FF0000", "timestamp": 1},
                    {"x": 9, "y": 0, "z": 1, "color": "#FF0000"},
                ],
                "timestamp": 2,
            }
        )
    )
    result = runner.invoke(app, ["show", str(path), "--list"])
    assert result.exit_code == 0, result.output
    assert "Voxels: 2" in result.output
    assert "1 out of the grid" in result.output
    assert "#FF0000: 2" in result.output


def test_show_invalid(tmp_path):
    path = tmp_path / "world.json"
    path.write_text('{"version": "2.0", "gridSize": 4, "voxels": [], "timestamp": 0}')
    result = runner.invoke(app, ["show", str(path)])
    assert result.exit_code == 1


def test_config(config_path):
    result = runner.invoke(app, ["config", "--config", str(config_path), "--init"])
    assert result.exit_code == 0, result.output
    assert config_path.exists()

    result = runner.invoke(app, ["config", "--config", str(config_path)])
    assert result.exit_code == 0
    assert json.loads(result.output)["grid"]["size"] == 16

    result = runner.invoke(app, ["config", "--config", str(config_path), "--init"])
    assert result.exit_code == 1
