"""Shared fixtures for the simulation tests."""

from __future__ import annotations

from random import Random

import pytest

from camera import Camera
from clock import Clock
from config import ScenarioSettings
from environment import SimulationContext
from geometry_utils.vector3D import Vector3D
from multiple_pursuit import MultiplePursuitPlugIn


class MaxRandom:
    """Random source that always returns the upper bound."""

    def uniform(self, a, b):
        return b


class MinRandom:
    """Random source that always returns the lower bound."""

    def uniform(self, a, b):
        return a


class RecordingDrawing:
    """Drawing collaborator that records the calls it receives."""

    def __init__(self):
        self.calls = []

    def begin_frame(self, camera):
        self.calls.append(("begin_frame", camera))

    def draw_ground_grid(self, center):
        self.calls.append(("draw_ground_grid", center.copy()))

    def draw_vehicle(self, vehicle, color):
        self.calls.append(("draw_vehicle", vehicle, color))

    def end_frame(self):
        self.calls.append(("end_frame",))


@pytest.fixture
def rng():
    return Random(1234)


@pytest.fixture
def context():
    return SimulationContext(clock=Clock(), camera=Camera(), random_generator=Random(20240611), seed=20240611)


@pytest.fixture
def settings():
    return ScenarioSettings()


@pytest.fixture
def plugin(context, settings):
    """An opened plug-in with the default eight pursuers."""
    plug = MultiplePursuitPlugIn(8, settings)
    plug.open(context)
    yield plug
    if plug.population_size:
        plug.close(context)


def make_stationary(vehicle):
    """Stop a vehicle for good: it can still steer but never moves."""
    vehicle.speed = 0.0
    vehicle.max_speed = 0.0


def place(vehicle, x, z, y=0.0):
    vehicle.set_position(Vector3D(x, y, z))
    vehicle.clear_trail_history()
