"""Tests for scenario configuration loading and validation."""

import json

import pytest

from config import Config, ScenarioSettings, validate_pursuer_count


def test_defaults():
    settings = Config(new_data={"scenario": {"frames": 1}}).scenario_settings()
    assert settings.pursuer_count == 8
    assert settings.max_speed == 3.0
    assert settings.max_force == 5.0
    assert settings.respawn_inner_radius == 20.0
    assert settings.respawn_outer_radius == 30.0
    assert settings.max_prediction_time == 20.0
    assert settings.seed is None


def test_camera_block_maps_to_flat_fields():
    data = {"scenario": {"camera": {"distance": 10, "elevation": 4, "smooth_move_speed": 2.5}}}
    settings = Config(new_data=data).scenario_settings()
    assert settings.camera_distance == 10
    assert settings.camera_elevation == 4
    assert settings.smooth_move_speed == 2.5


def test_logging_and_render_blocks_are_not_settings():
    data = {"scenario": {"logging": {"enabled": True}, "render": {"snapshot": "x.png"}}}
    config = Config(new_data=data)
    assert config.logging == {"enabled": True}
    assert config.render == {"snapshot": "x.png"}
    assert isinstance(config.scenario_settings(), ScenarioSettings)


@pytest.mark.parametrize(
    "scenario",
    [
        {"unknown_field": 1},
        {"camera": {"zoom": 2}},
        {"respawn_inner_radius": 30, "respawn_outer_radius": 20},
        {"pursuer_count": -1},
        {"pursuer_count": 2.5},
        {"max_speed": -1},
        {"trail_capacity": 0},
        {"smooth_move_speed": 0},
    ],
)
def test_invalid_scenarios_are_rejected(scenario):
    with pytest.raises(ValueError):
        Config(new_data={"scenario": scenario}).scenario_settings()


def test_pursuer_count_validation():
    assert validate_pursuer_count(0) == 0
    assert validate_pursuer_count(12) == 12
    with pytest.raises(ValueError):
        validate_pursuer_count(True)
    with pytest.raises(ValueError):
        validate_pursuer_count("8")


def test_config_needs_a_source():
    with pytest.raises(ValueError):
        Config()
    with pytest.raises(ValueError):
        Config(new_data={"scenario": []})


def test_load_from_file(tmp_path):
    path = tmp_path / "scenario.json"
    path.write_text(json.dumps({"scenario": {"pursuer_count": 3, "seed": 5}, "plugins": ["my.module"]}))
    config = Config(config_path=str(path))
    settings = config.scenario_settings()
    assert settings.pursuer_count == 3
    assert settings.seed == 5
    assert config.plugins == ["my.module"]
