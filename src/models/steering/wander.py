# ------------------------------------------------------------------------------
#  CollectiPy
#  Copyright (c) 2025 Fabio Oddi
#
#  This file is part of CollectyPy, released under the BSD 3-Clause License.
#  You may use, modify, and redistribute this file according to the terms of the
#  license. Attribution is required if this code is used in other works.
# ------------------------------------------------------------------------------

import logging
from random import Random
from plugin_base import SteeringBehavior
from plugin_registry import register_steering_behavior
from geometry_utils.vector3D import Vector3D
from models.utils import scalar_random_walk

logger = logging.getLogger("sim.steering.wander")

WANDER_RATE = 12
WANDER_SCALE = 3

def steer_for_wander(vehicle, elapsed_time: float, random_generator: Random) -> Vector3D:
    """
    Smoothed random walk in the vehicle's side/up plane.

    The two walk scalars live on the vehicle so that consecutive frames
    stay correlated; they are cleared by `Vehicle.reset`.
    """
    speed = WANDER_RATE * elapsed_time
    vehicle.wander_side = scalar_random_walk(random_generator, vehicle.wander_side, speed, -1, +1)
    vehicle.wander_up = scalar_random_walk(random_generator, vehicle.wander_up, speed, -1, +1)
    return (vehicle.side * vehicle.wander_side) + (vehicle.up * vehicle.wander_up)

class WanderBehavior(SteeringBehavior):
    """Horizontal wandering biased towards the current heading."""
    def __init__(self, agent, settings=None):
        """Initialize the instance."""
        self.agent = agent
        self.scale = getattr(settings, "wander_scale", WANDER_SCALE)

    def steering_force(self, vehicle, elapsed_time: float, random_generator: Random) -> Vector3D:
        """Return the force the wanderer applies this frame."""
        wander2d = steer_for_wander(vehicle, elapsed_time, random_generator).set_y_to_zero()
        return vehicle.forward + (wander2d * self.scale)

    def step(self, agent, population, context, elapsed_time: float) -> None:
        """Execute the simulation step."""
        vehicle = agent.vehicle
        vehicle.apply_steering_force(
            self.steering_force(vehicle, elapsed_time, context.random_generator),
            elapsed_time
        )

    def reset(self, agent, population, context) -> None:
        """The wanderer restarts from the origin; nothing else to do."""

register_steering_behavior("wander", lambda agent, settings: WanderBehavior(agent, settings))
