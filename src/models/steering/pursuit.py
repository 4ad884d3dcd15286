# ------------------------------------------------------------------------------
#  CollectiPy
#  Copyright (c) 2025 Fabio Oddi
#
#  This file is part of CollectyPy, released under the BSD 3-Clause License.
#  You may use, modify, and redistribute this file according to the terms of the
#  license. Attribution is required if this code is used in other works.
# ------------------------------------------------------------------------------

"""Predictive pursuit and the respawn rule of the pursuers."""

import logging
from random import Random
from plugin_base import SteeringBehavior
from plugin_registry import register_steering_behavior
from geometry_utils.vector3D import Vector3D
from models.utils import frandom2, random_unit_vector_on_xz_plane

logger = logging.getLogger("sim.steering.pursuit")

MAX_PREDICTION_TIME = 20.0
RESPAWN_INNER_RADIUS = 20.0
RESPAWN_OUTER_RADIUS = 30.0

def steer_for_seek(vehicle, target: Vector3D) -> Vector3D:
    """Force that turns the current velocity into the offset to `target`."""
    desired_velocity = target - vehicle.position
    return desired_velocity - vehicle.velocity()

def intercept_time(vehicle, quarry, max_prediction_time: float) -> float:
    """
    Look-ahead used to aim at the quarry.

    ``distance / max_speed`` capped at `max_prediction_time`. A vehicle that
    cannot move gets the full horizon instead of a division by zero.
    """
    distance = vehicle.position.distance(quarry.position)
    if distance == 0:
        return 0.0
    if vehicle.max_speed <= 0:
        return max_prediction_time
    return min(distance / vehicle.max_speed, max_prediction_time)

def steer_for_pursuit(vehicle, quarry, max_prediction_time: float = MAX_PREDICTION_TIME) -> Vector3D:
    """Seek the position the quarry is predicted to reach."""
    prediction_time = intercept_time(vehicle, quarry, max_prediction_time)
    predicted = quarry.predict_future_position(prediction_time)
    return steer_for_seek(vehicle, predicted)

def in_contact(vehicle, quarry) -> bool:
    """True when the two bodies overlap at their current positions."""
    return vehicle.position.distance(quarry.position) < vehicle.radius + quarry.radius

def randomize_starting_position_and_heading(
    vehicle,
    quarry,
    random_generator: Random,
    inner: float = RESPAWN_INNER_RADIUS,
    outer: float = RESPAWN_OUTER_RADIUS,
) -> None:
    """Place `vehicle` on the ring [inner, outer] around `quarry` with a random heading."""
    radius = frandom2(random_generator, inner, outer)
    random_on_ring = random_unit_vector_on_xz_plane(random_generator) * radius
    vehicle.set_position(quarry.position + random_on_ring)
    vehicle.randomize_heading_on_xz_plane(random_generator)

class PursuitBehavior(SteeringBehavior):
    """Chase the quarry; start over on the respawn ring after touching it."""
    def __init__(self, agent, settings=None):
        """Initialize the instance."""
        self.agent = agent
        self.max_prediction_time = getattr(settings, "max_prediction_time", MAX_PREDICTION_TIME)
        self.inner_radius = getattr(settings, "respawn_inner_radius", RESPAWN_INNER_RADIUS)
        self.outer_radius = getattr(settings, "respawn_outer_radius", RESPAWN_OUTER_RADIUS)

    def step(self, agent, population, context, elapsed_time: float) -> None:
        """Execute the simulation step."""
        quarry = population[agent.quarry].vehicle
        if in_contact(agent.vehicle, quarry):
            agent.respawn(population, context)
        force = steer_for_pursuit(agent.vehicle, quarry, self.max_prediction_time)
        agent.vehicle.apply_steering_force(force, elapsed_time)

    def reset(self, agent, population, context) -> None:
        """Move to a random point of the respawn ring around the quarry."""
        quarry = population[agent.quarry].vehicle
        randomize_starting_position_and_heading(
            agent.vehicle,
            quarry,
            context.random_generator,
            self.inner_radius,
            self.outer_radius
        )
        if logger.isEnabledFor(logging.DEBUG):
            position = agent.vehicle.position
            logger.debug(
                "%s placed at %s, %.2f from quarry",
                agent.get_name(),
                tuple(position),
                position.distance(quarry.position)
            )

register_steering_behavior("pursuit", lambda agent, settings: PursuitBehavior(agent, settings))
