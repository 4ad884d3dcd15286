# ------------------------------------------------------------------------------
#  CollectiPy
#  Copyright (c) 2025 Fabio Oddi
#
#  This file is part of CollectyPy, released under the BSD 3-Clause License.
#  You may use, modify, and redistribute this file according to the terms of the
#  license. Attribution is required if this code is used in other works.
# ------------------------------------------------------------------------------

"""Kinematic vehicle shared by every agent kind.

A vehicle carries a right-handed local space (forward, side, up) and a
scalar speed along ``forward``. Steering forces are clipped to
``max_force``, smoothed, integrated over the elapsed time and the resulting
velocity is clipped to ``max_speed``.
"""
import logging
from collections import deque
from random import Random
from geometry_utils.vector3D import Vector3D, FORWARD, SIDE, UP, ZERO
from models.utils import blend_into_accumulator, clip, random_unit_vector_on_xz_plane

logger = logging.getLogger("sim.vehicle")

DEFAULT_MASS = 1.0
DEFAULT_RADIUS = 0.5
DEFAULT_MAX_FORCE = 5.0
DEFAULT_MAX_SPEED = 3.0
DEFAULT_TRAIL_CAPACITY = 100

class Vehicle:
    """Point-mass vehicle moving on its forward axis."""
    def __init__(
        self,
        name: str = "vehicle",
        max_force: float = DEFAULT_MAX_FORCE,
        max_speed: float = DEFAULT_MAX_SPEED,
        radius: float = DEFAULT_RADIUS,
        trail_capacity: int = DEFAULT_TRAIL_CAPACITY,
    ):
        """Initialize the instance."""
        self.name = name
        self.default_max_force = float(max_force)
        self.default_max_speed = float(max_speed)
        self.default_radius = float(radius)
        self.trail = deque(maxlen=max(1, int(trail_capacity)))
        self.reset()

    def reset(self):
        """Return to the origin at rest with default limits and no trail."""
        self.reset_local_space()
        self.mass = DEFAULT_MASS
        self.radius = self.default_radius
        self.speed = 0.0
        self.max_force = self.default_max_force
        self.max_speed = self.default_max_speed
        self.smoothed_acceleration = Vector3D()
        self.last_steering_force = Vector3D()
        self.wander_side = 0.0
        self.wander_up = 0.0
        self.clear_trail_history()

    def reset_local_space(self):
        """Identity local space at the origin."""
        self.position = ZERO.copy()
        self.forward = FORWARD.copy()
        self.side = SIDE.copy()
        self.up = UP.copy()

    def clear_trail_history(self):
        """Forget recorded positions."""
        self.trail.clear()

    def record_trail_vertex(self, position: Vector3D):
        """Append ``position``; the oldest entry is evicted when full."""
        self.trail.append(position.copy())

    def set_position(self, new_position: Vector3D):
        """Set the position."""
        self.position = new_position.copy()

    def velocity(self) -> Vector3D:
        """Velocity along the forward axis."""
        return self.forward * self.speed

    def predict_future_position(self, prediction_time: float) -> Vector3D:
        """Linear extrapolation of the current motion."""
        return self.position + (self.velocity() * prediction_time)

    def set_forward(self, new_forward: Vector3D):
        """Set ``forward`` (normalized) and rebuild side/up around it."""
        self.regenerate_orthonormal_basis(new_forward.normalize(), self.up)

    def regenerate_orthonormal_basis(self, new_unit_forward: Vector3D, up_hint: Vector3D = UP):
        """Rebuild side and up from a unit forward and an approximate up."""
        side = new_unit_forward.cross(up_hint)
        if side.magnitude() == 0:
            # forward is parallel to the hint, fall back on the previous side
            side = self.side
        self.forward = new_unit_forward
        self.side = side.normalize()
        self.up = self.side.cross(self.forward).normalize()

    def randomize_heading_on_xz_plane(self, random_generator: Random):
        """Point ``forward`` in a uniformly random horizontal direction."""
        self.up = UP.copy()
        self.regenerate_orthonormal_basis(random_unit_vector_on_xz_plane(random_generator), self.up)

    def globalize_direction(self, local_direction: Vector3D) -> Vector3D:
        """Transform a direction from local space (side, up, forward) to global."""
        return (self.side * local_direction.x) + (self.up * local_direction.y) + (self.forward * local_direction.z)

    def globalize_position(self, local_position: Vector3D) -> Vector3D:
        """Transform a point from local space to global."""
        return self.position + self.globalize_direction(local_position)

    def apply_steering_force(self, force: Vector3D, elapsed_time: float):
        """Integrate ``force`` over ``elapsed_time``."""
        clipped_force = force.truncate_length(self.max_force)
        self.last_steering_force = clipped_force
        new_acceleration = clipped_force / self.mass
        if elapsed_time > 0:
            smooth_rate = clip(9 * elapsed_time, 0.15, 0.4)
            self.smoothed_acceleration = blend_into_accumulator(
                smooth_rate, new_acceleration, self.smoothed_acceleration
            )
        new_velocity = self.velocity() + (self.smoothed_acceleration * elapsed_time)
        new_velocity = new_velocity.truncate_length(self.max_speed)
        self.speed = new_velocity.magnitude()
        self.position = self.position + (new_velocity * elapsed_time)
        if self.speed > 0:
            self.regenerate_orthonormal_basis(new_velocity / self.speed, self.up)
        self.record_trail_vertex(self.position)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "%s steered force=%.3f speed=%.3f position=%s",
                self.name, clipped_force.magnitude(), self.speed,
                (self.position.x, self.position.y, self.position.z)
            )

    def __repr__(self) -> str:
        return f"Vehicle({self.name!r}, position={self.position!r}, speed={self.speed:.3f})"
