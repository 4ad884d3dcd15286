# ------------------------------------------------------------------------------
#  CollectiPy
#  Copyright (c) 2025 Fabio Oddi
#
#  This file is part of CollectyPy, released under the BSD 3-Clause License.
#  You may use, modify, and redistribute this file according to the terms of the
#  license. Attribution is required if this code is used in other works.
# ------------------------------------------------------------------------------

"""
Camera that follows a selected vehicle.

The camera only computes a pose (eye position, target point, up vector);
it never draws. Each update recomputes a goal pose from the tracked
vehicle and blends the current pose towards it, unless smoothing was
suppressed for that one update.
"""
from __future__ import annotations

import logging
import weakref
from enum import Enum
from typing import Optional
from geometry_utils.vector3D import Vector3D, UP, ZERO
from models.utils import blend_into_accumulator

logger = logging.getLogger("sim.camera")

CAMERA_TARGET_DISTANCE = 13.0
CAMERA_2D_ELEVATION = 8.0

class CameraMode(Enum):
    FIXED = "fixed"
    FIXED_DISTANCE_OFFSET = "fixed_distance_offset"
    STRAIGHT_DOWN = "straight_down"
    FIXED_LOCAL_OFFSET = "fixed_local_offset"
    OFFSET_POV = "offset_pov"

class Camera:
    """Tracking camera."""
    def __init__(self, smooth_move_speed: float = 1.5, lookdown_distance: float = 30.0):
        """Initialize the instance."""
        self.default_smooth_move_speed = float(smooth_move_speed)
        self.default_lookdown_distance = float(lookdown_distance)
        self.reset()

    def reset(self):
        """Back to a fixed camera looking at the origin."""
        self.reset_local_space()
        self.mode = CameraMode.FIXED
        self._vehicle_to_track = None
        self.fixed_position = Vector3D(75, 75, 75)
        self.fixed_target = ZERO.copy()
        self.fixed_up = UP.copy()
        self.fixed_dist_distance = 1.0
        self.fixed_dist_v_offset = 0.0
        self.lookdown_distance = self.default_lookdown_distance
        self.fixed_local_offset = Vector3D(5, 5, -5)
        self.pov_offset = Vector3D(0, 1, -3)
        self.smooth_next_move = False
        self.smooth_move_speed = self.default_smooth_move_speed

    def reset_local_space(self):
        """Identity pose at the origin."""
        self.position = ZERO.copy()
        self.target = ZERO.copy()
        self.up = UP.copy()
        self.goal_position = ZERO.copy()
        self.goal_target = ZERO.copy()
        self.goal_up = UP.copy()

    @property
    def vehicle_to_track(self):
        """The tracked vehicle, or None once it is gone."""
        if self._vehicle_to_track is None:
            return None
        return self._vehicle_to_track()

    @vehicle_to_track.setter
    def vehicle_to_track(self, vehicle) -> None:
        self._vehicle_to_track = weakref.ref(vehicle) if vehicle is not None else None

    def do_not_smooth_next_move(self):
        """Jump straight to the goal pose on the next update."""
        self.smooth_next_move = False

    def set_position(self, new_position: Vector3D):
        """Set the eye position."""
        self.position = new_position.copy()

    def update(self, current_time: float, elapsed_time: float, vehicle=None, paused: bool = False):
        """
        Recompute the goal pose from `vehicle` and move towards it.

        Without a vehicle the camera keeps its last pose, except in FIXED
        mode which does not need one. When `paused`, the anti-lag
        prediction is disabled and the blend does not advance.
        """
        self.vehicle_to_track = vehicle
        v = self.vehicle_to_track
        new_position = self.position
        new_target = self.target
        new_up = self.up
        anti_lag_time = 0.0 if paused else 1.0 / self.smooth_move_speed
        predicted = v.predict_future_position(anti_lag_time) if v is not None else ZERO

        if self.mode is CameraMode.FIXED:
            new_position = self.fixed_position
            new_target = self.fixed_target
            new_up = self.fixed_up
        elif v is None:
            return
        elif self.mode is CameraMode.FIXED_DISTANCE_OFFSET:
            new_up = UP
            new_target = predicted
            new_position = self.fixed_distance_eye(v)
        elif self.mode is CameraMode.STRAIGHT_DOWN:
            new_up = v.forward
            new_target = predicted
            new_position = predicted + Vector3D(0, self.lookdown_distance, 0)
        elif self.mode is CameraMode.FIXED_LOCAL_OFFSET:
            new_up = v.up
            new_target = predicted
            new_position = v.globalize_position(self.fixed_local_offset)
        elif self.mode is CameraMode.OFFSET_POV:
            new_up = v.up
            new_position = predicted + v.globalize_direction(self.pov_offset)
            new_target = new_position + (v.forward * 100)

        self.goal_position = new_position.copy()
        self.goal_target = new_target.copy()
        self.goal_up = new_up.copy()
        rate = 0.0 if paused else elapsed_time * self.smooth_move_speed
        self.smooth_camera_move(new_position, new_target, new_up, rate)

    def fixed_distance_eye(self, vehicle) -> Vector3D:
        """Behind the vehicle at the fixed distance, raised by the fixed elevation."""
        behind = vehicle.position - (vehicle.forward * self.fixed_dist_distance)
        return behind + Vector3D(0, self.fixed_dist_v_offset, 0)

    def smooth_camera_move(self, new_position: Vector3D, new_target: Vector3D, new_up: Vector3D, smooth_rate: float):
        """Blend towards the new pose, or snap once after `do_not_smooth_next_move`."""
        if self.smooth_next_move:
            self.position = blend_into_accumulator(smooth_rate, new_position, self.position)
            self.target = blend_into_accumulator(smooth_rate, new_target, self.target)
            up = blend_into_accumulator(smooth_rate, new_up, self.up)
            self.up = UP.copy() if up.magnitude() == 0 else up.normalize()
        else:
            self.smooth_next_move = True
            self.position = new_position.copy()
            self.target = new_target.copy()
            self.up = new_up.copy()
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug("Camera snapped to %s", tuple(self.position))

    # Helpers used by scenarios to place the camera around a vehicle.

    def position_3d(self, vehicle, distance: float = CAMERA_TARGET_DISTANCE, elevation: float = CAMERA_2D_ELEVATION):
        """Put the eye `distance` behind the vehicle, looking at it."""
        self.vehicle_to_track = vehicle
        self.set_position(vehicle.position - (vehicle.forward * distance))
        self.target = vehicle.position.copy()

    def position_2d(self, vehicle, distance: float = CAMERA_TARGET_DISTANCE, elevation: float = CAMERA_2D_ELEVATION):
        """As `position_3d`, then raise the eye by `elevation`."""
        self.position_3d(vehicle, distance, elevation)
        self.set_position(self.position + Vector3D(0, elevation, 0))

    def init_3d(self, vehicle, distance: float = CAMERA_TARGET_DISTANCE, elevation: float = CAMERA_2D_ELEVATION):
        """Place the camera and switch to fixed-distance tracking."""
        self.position_3d(vehicle, distance, elevation)
        self._set_fixed_distance(distance, elevation)

    def init_2d(self, vehicle, distance: float = CAMERA_TARGET_DISTANCE, elevation: float = CAMERA_2D_ELEVATION):
        """Place the camera (raised) and switch to fixed-distance tracking."""
        self.position_2d(vehicle, distance, elevation)
        self._set_fixed_distance(distance, elevation)

    def _set_fixed_distance(self, distance: float, elevation: float):
        self.fixed_dist_distance = float(distance)
        self.fixed_dist_v_offset = float(elevation)
        self.mode = CameraMode.FIXED_DISTANCE_OFFSET
