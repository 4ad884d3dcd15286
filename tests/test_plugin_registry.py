"""Tests for the steering behaviour registry and plugin loading."""

import logging

import pytest

import plugin_registry
from config import Config
from plugin_registry import (
    available_steering_behaviors,
    get_steering_behavior,
    load_plugins_from_config,
    register_steering_behavior,
)


@pytest.fixture(autouse=True)
def isolated_registry(monkeypatch):
    monkeypatch.setattr(plugin_registry, "_steering_behaviors", dict(plugin_registry._steering_behaviors))


class IdleBehavior:
    def __init__(self, agent, settings):
        self.agent = agent
        self.settings = settings

    def step(self, agents, context, elapsed_time):
        pass

    def reset(self, agents, context):
        pass


def test_builtin_behaviors_are_registered():
    names = available_steering_behaviors()
    assert "wander" in names
    assert "pursuit" in names


def test_register_and_get():
    register_steering_behavior(" Idle ", IdleBehavior)
    behavior = get_steering_behavior("idle", "agent", "settings")
    assert isinstance(behavior, IdleBehavior)
    assert behavior.agent == "agent"


def test_unknown_behavior_is_none():
    assert get_steering_behavior("teleport", None) is None


def test_load_plugins_from_config(tmp_path, monkeypatch, caplog):
    module = tmp_path / "extra_behaviors_for_tests.py"
    module.write_text(
        "from plugin_registry import register_steering_behavior\n"
        "register_steering_behavior('hover', lambda agent, settings: None)\n"
    )
    monkeypatch.syspath_prepend(str(tmp_path))
    config = Config(new_data={"scenario": {}, "plugins": ["extra_behaviors_for_tests", "no_such_behaviors_module"]})
    caplog.set_level(logging.INFO, logger="sim.plugin_registry")
    loaded = load_plugins_from_config(config)
    assert loaded == ["extra_behaviors_for_tests"]
    assert "hover" in available_steering_behaviors()
    assert any("no_such_behaviors_module" in r.getMessage() and r.levelno == logging.ERROR for r in caplog.records)
