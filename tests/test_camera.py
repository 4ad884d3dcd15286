"""Tests for the tracking camera.

Validates:
1. Each mode derives its goal pose from the tracked vehicle
2. Smoothing blends towards the goal, except right after do_not_smooth_next_move
3. Pausing freezes the blend but not the goal computation
4. Without a vehicle the camera holds its pose
"""

import gc

import pytest

from camera import Camera, CameraMode
from geometry_utils.vector3D import Vector3D
from vehicle import Vehicle


def _as_tuple(v):
    return (v.x, v.y, v.z)


@pytest.fixture
def vehicle():
    v = Vehicle()
    v.set_forward(Vector3D(1, 0, 0))
    v.set_position(Vector3D(10, 0, 4))
    return v


@pytest.fixture
def camera():
    cam = Camera()
    cam.mode = CameraMode.FIXED_DISTANCE_OFFSET
    cam.fixed_dist_distance = 13.0
    cam.fixed_dist_v_offset = 8.0
    return cam


def test_fixed_distance_offset_eye(camera, vehicle):
    camera.update(0.0, 0.1, vehicle, False)
    # eye = position - forward * distance, raised by the elevation
    assert _as_tuple(camera.position) == pytest.approx((-3, 8, 4))
    assert _as_tuple(camera.target) == pytest.approx((10, 0, 4))
    assert _as_tuple(camera.up) == pytest.approx((0, 1, 0))


def test_first_update_snaps_then_blends(camera, vehicle):
    camera.update(0.0, 0.1, vehicle, False)
    first_eye = camera.position.copy()
    vehicle.set_position(Vector3D(20, 0, 4))
    camera.update(0.1, 0.1, vehicle, False)
    goal = camera.goal_position
    assert _as_tuple(goal) == pytest.approx((7, 8, 4))
    rate = 0.1 * camera.smooth_move_speed
    expected = first_eye + (goal - first_eye) * rate
    assert _as_tuple(camera.position) == pytest.approx(_as_tuple(expected))


def test_do_not_smooth_next_move_is_one_shot(camera, vehicle):
    camera.update(0.0, 0.1, vehicle, False)
    vehicle.set_position(Vector3D(50, 0, 4))
    camera.do_not_smooth_next_move()
    camera.update(0.1, 0.1, vehicle, False)
    assert camera.position == camera.goal_position
    assert camera.smooth_next_move is True
    vehicle.set_position(Vector3D(80, 0, 4))
    camera.update(0.2, 0.1, vehicle, False)
    assert camera.position != camera.goal_position


def test_pause_freezes_blend_but_recomputes_goal(camera, vehicle):
    camera.update(0.0, 0.1, vehicle, False)
    eye = camera.position.copy()
    vehicle.set_position(Vector3D(30, 0, 4))
    camera.update(0.1, 0.1, vehicle, True)
    assert camera.position == eye
    assert _as_tuple(camera.goal_position) == pytest.approx((17, 8, 4))


def test_straight_down_looks_at_predicted_position(vehicle):
    cam = Camera(smooth_move_speed=2.0, lookdown_distance=30.0)
    cam.mode = CameraMode.STRAIGHT_DOWN
    vehicle.speed = 1.0
    cam.update(0.0, 0.1, vehicle, False)
    # anti-lag horizon 1 / 2.0 seconds at speed 1 along +x
    assert _as_tuple(cam.target) == pytest.approx((10.5, 0, 4))
    assert _as_tuple(cam.position) == pytest.approx((10.5, 30, 4))
    assert _as_tuple(cam.up) == pytest.approx((1, 0, 0))


def test_paused_camera_does_not_extrapolate(vehicle):
    cam = Camera()
    cam.mode = CameraMode.STRAIGHT_DOWN
    vehicle.speed = 2.0
    cam.update(0.0, 0.1, vehicle, True)
    assert _as_tuple(cam.target) == pytest.approx((10, 0, 4))


def test_fixed_local_offset_and_pov(vehicle):
    cam = Camera()
    cam.mode = CameraMode.FIXED_LOCAL_OFFSET
    cam.update(0.0, 0.1, vehicle, True)
    assert cam.position == vehicle.globalize_position(cam.fixed_local_offset)
    cam.mode = CameraMode.OFFSET_POV
    cam.do_not_smooth_next_move()
    cam.update(0.0, 0.1, vehicle, True)
    expected_eye = vehicle.position + vehicle.globalize_direction(cam.pov_offset)
    assert _as_tuple(cam.position) == pytest.approx(_as_tuple(expected_eye))
    assert cam.target.x > cam.position.x


def test_without_vehicle_pose_is_held(camera):
    camera.position = Vector3D(1, 2, 3)
    camera.update(0.0, 0.1, None, False)
    assert camera.position == Vector3D(1, 2, 3)


def test_fixed_mode_needs_no_vehicle():
    cam = Camera()
    cam.update(0.0, 0.1, None, False)
    assert cam.position == Vector3D(75, 75, 75)
    assert cam.target == Vector3D(0, 0, 0)


def test_clearing_the_selection_stops_tracking(vehicle):
    cam = Camera()
    cam.mode = CameraMode.STRAIGHT_DOWN
    cam.update(0.0, 0.1, vehicle, False)
    eye = cam.position.copy()
    target = cam.target.copy()
    vehicle.set_position(Vector3D(50, 0, 50))
    cam.update(0.1, 0.1, None, False)
    assert cam.vehicle_to_track is None
    assert cam.position == eye
    assert cam.target == target


def test_tracked_vehicle_is_not_kept_alive(camera):
    v = Vehicle()
    camera.update(0.0, 0.1, v, False)
    assert camera.vehicle_to_track is v
    del v
    gc.collect()
    assert camera.vehicle_to_track is None
    eye = camera.position.copy()
    camera.update(0.1, 0.1, None, False)
    assert camera.position == eye


def test_position_and_init_helpers(vehicle):
    cam = Camera()
    cam.position_3d(vehicle, 13, 8)
    assert _as_tuple(cam.position) == pytest.approx((-3, 0, 4))
    cam.position_2d(vehicle, 13, 8)
    assert _as_tuple(cam.position) == pytest.approx((-3, 8, 4))
    cam.init_2d(vehicle, 10, 5)
    assert cam.mode is CameraMode.FIXED_DISTANCE_OFFSET
    assert cam.fixed_dist_distance == 10
    assert cam.fixed_dist_v_offset == 5


def test_reset_returns_to_fixed_mode(camera, vehicle):
    camera.update(0.0, 0.1, vehicle, False)
    camera.reset()
    assert camera.mode is CameraMode.FIXED
    assert camera.vehicle_to_track is None
    assert camera.smooth_next_move is False
