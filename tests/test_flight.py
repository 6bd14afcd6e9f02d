import math

import pytest

from skyharbor.flight import (
    Fleet,
    Key,
    Plane,
    exceeds_max_forward_velocity,
    format_vector,
    forward_vector,
    move_camera,
)
from skyharbor.geometry import Vector3


def test_forward_at_rest_is_plus_x():
    assert tuple(forward_vector(Vector3())) == pytest.approx((1.0, 0.0, 0.0))


@pytest.mark.parametrize("pitch, yaw", [(0.3, 1.2), (-1.0, 2.5), (0.0, -0.7)])
def test_forward_is_unit(pitch, yaw):
    assert forward_vector(Vector3(pitch, yaw, 0)).length() == pytest.approx(1.0)


def test_exceeds_max_forward_ignores_vertical():
    assert not exceeds_max_forward_velocity(Vector3(0, 100, 0), 1.0)
    assert exceeds_max_forward_velocity(Vector3(3, 0, 4), 5.0)


def test_format_vector():
    assert format_vector("Position: ", Vector3(1.5, 0, -2)) == "Position: 1.5, 0, -2"


def test_move_camera_opposite_keys_cancel():
    start = Vector3(100, 100, 100)
    moved = move_camera(start, {Key.LEFT, Key.RIGHT, Key.UP, Key.DOWN}, 100, 0.5)
    assert moved == start


def test_move_camera_right_and_up():
    start = Vector3(0, 0, 7)
    moved = move_camera(start, {Key.RIGHT, Key.UP}, 10, 1)
    assert moved == Vector3(10, 10, 7)


def _selected():
    return Plane(selected=True)


def test_accelerate_moves_forward():
    plane = _selected()
    plane.update({Key.W}, 0.1)
    assert plane.speed == pytest.approx(plane.acceleration * 0.1)
    assert plane.position.x == pytest.approx(plane.speed)
    assert plane.position.z == pytest.approx(0.0)


def test_speed_is_clamped():
    plane = _selected()
    for _ in range(10):
        plane.update({Key.W}, 1.0)
    assert plane.speed == plane.max_speed
    for _ in range(20):
        plane.update({Key.S}, 1.0)
    assert plane.speed == -plane.max_speed


def test_ground_stops_descent():
    plane = _selected()
    plane.update({Key.E}, 0.1)
    assert plane.position.y == 0.0
    assert plane.vertical_speed == 0.0


def test_climb():
    plane = _selected()
    plane.update({Key.Q}, 0.1)
    assert plane.position.y == pytest.approx(plane.vertical_speed)
    assert plane.vertical_speed > 0


def test_turn_toggles():
    plane = _selected()
    plane.handle_input({Key.D}, 0.5)
    assert plane.turn_right and not plane.turn_left
    assert plane.rotation.y == pytest.approx(-plane.turn_rate * 0.5)
    plane.handle_input({Key.D}, 0.5)
    assert not plane.turn_right
    assert plane.rotation.y == 0.0


def test_turn_left_cancels_right():
    plane = _selected()
    plane.handle_input({Key.D}, 0.5)
    plane.handle_input({Key.A}, 0.5)
    assert plane.turn_left and not plane.turn_right
    assert plane.rotation.y > 0


def test_space_resets_speeds():
    plane = _selected()
    plane.handle_input({Key.W, Key.Q}, 0.1)
    plane.handle_input({Key.SPACE}, 0.1)
    assert (plane.speed, plane.vertical_speed) == (0.0, 0.0)


def test_unselected_plane_ignores_input():
    plane = Plane()
    plane.update({Key.W, Key.Q}, 1.0)
    assert plane.position == Vector3()


def test_angle_degrees_accumulates():
    plane = _selected()
    plane.handle_input({Key.A}, math.pi / 2)
    plane.update(set(), 0.0)
    assert plane.angle_degrees().y == pytest.approx(math.degrees(plane.angle_radian.y))
    assert plane.angle_degrees().y == pytest.approx(90.0)


def test_fleet_selects_first():
    fleet = Fleet.of(["Plane 01", "Plane 02", "Plane 03"])
    assert fleet.current().name == "Plane 01"
    assert [p.selected for p in fleet.planes] == [True, False, False]


def test_fleet_cycles_and_wraps():
    fleet = Fleet.of(["Plane 01", "Plane 02", "Plane 03"])
    names = [fleet.select_next().name for _ in range(3)]
    assert names == ["Plane 02", "Plane 03", "Plane 01"]
    assert sum(p.selected for p in fleet.planes) == 1


def test_fleet_update_tab_switches_before_input():
    fleet = Fleet.of(["Plane 01", "Plane 02"])
    fleet.update({Key.TAB, Key.W}, 0.1)
    first, second = fleet.planes
    assert fleet.current() is second
    assert first.speed == 0.0
    assert second.speed > 0


def test_empty_fleet_rejected():
    with pytest.raises(ValueError):
        Fleet([])