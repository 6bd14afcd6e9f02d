import pytest

from skyharbor.components import (
    ActionMap,
    Boat,
    Component,
    Entity,
    InputComponent,
    PhysicsComponent,
    Plane,
    RenderComponent,
    TransformComponent,
    build_fleet,
    cycle_selection,
)
from skyharbor.flight import Key
from skyharbor.geometry import Quaternion, Vector3


def _noop(**kwargs):
    pass


class _Counter(Component):
    def __init__(self, entity, start):
        super().__init__(entity)
        self.value = start

    def update(self, dt):
        self.value += dt


def test_entity_starts_with_transform():
    entity = Entity()
    assert entity.get_component(TransformComponent) is entity.transform
    assert entity.components[0] is entity.transform


def test_add_and_get_component():
    entity = Entity()
    index = entity.add_component(_Counter, 3.0)
    assert index == 1
    counter = entity.get_component(_Counter)
    assert counter.value == 3.0
    assert counter.entity is entity
    assert entity.get_component(PhysicsComponent) is None


def test_entity_update_runs_components():
    entity = Entity()
    entity.add_component(_Counter, 1.0)
    entity.update(0.5)
    assert entity.get_component(_Counter).value == pytest.approx(1.5)


def test_transform_update_builds_rotation():
    entity = Entity()
    euler = Vector3(0.1, 0.2, 0.3)
    entity.transform.euler_angles = euler
    entity.update(0.0)
    assert entity.transform.rotation == Quaternion.from_euler(euler)


def test_yaw_cycles_back_to_zero():
    physics = Entity()
    physics.add_component(PhysicsComponent)
    comp = physics.get_component(PhysicsComponent)
    comp.increment_yaw()
    assert comp.turn_dir_yaw == 1
    comp.increment_yaw()
    assert comp.turn_dir_yaw == 0
    comp.decrement_yaw()
    assert comp.turn_dir_yaw == -1
    comp.decrement_yaw()
    assert comp.turn_dir_yaw == 0


def test_pitch_cycles_back_to_zero():
    entity = Entity()
    entity.add_component(PhysicsComponent)
    comp = entity.get_component(PhysicsComponent)
    comp.decrement_pitch()
    assert comp.turn_dir_pitch == -1
    comp.decrement_pitch()
    assert comp.turn_dir_pitch == 0
    comp.increment_pitch()
    comp.increment_pitch()
    assert comp.turn_dir_pitch == 0


def test_speed_uses_last_time_step_and_saturates():
    entity = Entity()
    entity.add_component(PhysicsComponent)
    comp = entity.get_component(PhysicsComponent)
    comp.update(0.1)
    comp.increment_speed()
    assert comp.speed == pytest.approx(comp.acceleration * 0.1)
    comp.speed = comp.max_speed + 1
    comp.increment_speed()
    assert comp.speed == comp.max_speed
    comp.speed = -comp.max_speed - 1
    comp.decrement_speed()
    assert comp.speed == -comp.max_speed


def test_physics_moves_along_forward():
    entity = Entity()
    entity.add_component(PhysicsComponent)
    comp = entity.get_component(PhysicsComponent)
    comp.speed = 2.0
    comp.update(0.1)
    pos = entity.transform.position
    assert pos.x == pytest.approx(0.0)
    assert pos.y == pytest.approx(0.0)
    assert pos.z == pytest.approx(2.0)


def test_reset_stops_everything():
    entity = Entity()
    entity.add_component(PhysicsComponent)
    comp = entity.get_component(PhysicsComponent)
    comp.speed = 3.0
    comp.increment_yaw()
    comp.increment_pitch()
    comp.reset()
    assert (comp.speed, comp.turn_dir_yaw, comp.turn_dir_pitch) == (0.0, 0, 0)


def test_action_map_bind_poll_clear():
    calls = []
    actions = ActionMap()
    actions.bind("go", Key.W, lambda: calls.append("w"))
    actions.bind("stop", Key.SPACE, lambda: calls.append("space"))
    actions.poll({Key.W})
    assert calls == ["w"]
    actions.bind("go", Key.S, lambda: calls.append("s"))
    actions.poll({Key.W, Key.S})
    assert calls == ["w", "s"]
    assert len(actions) == 2
    actions.clear()
    assert len(actions) == 0
    assert "go" not in actions


def test_render_component_draws_pose():
    drawn = []
    entity = Entity()
    entity.add_component(RenderComponent, lambda **kw: drawn.append(kw))
    entity.transform.position = Vector3(1.0, 2.0, 3.0)
    entity.select()
    entity.update(0.0)
    assert len(drawn) == 1
    assert drawn[0]["position"] == Vector3(1.0, 2.0, 3.0)
    assert drawn[0]["selected"] is True


def test_plane_ignores_input_until_selected():
    plane = Plane(_noop)
    plane.setup()
    plane.update(0.1)
    plane.input_manager.pressed = frozenset({Key.W})
    plane.update(0.1)
    assert plane.physics.speed == 0.0


def test_selected_plane_accelerates_and_resets():
    plane = Plane(_noop)
    plane.setup()
    plane.select()
    plane.update(0.1)
    plane.input_manager.pressed = frozenset({Key.W})
    plane.update(0.1)
    assert plane.physics.speed == pytest.approx(plane.physics.acceleration * 0.1)
    plane.input_manager.pressed = frozenset({Key.UP, Key.LEFT})
    plane.update(0.1)
    assert plane.physics.turn_dir_pitch == 1
    assert plane.physics.turn_dir_yaw == 1
    plane.input_manager.pressed = frozenset({Key.SPACE})
    plane.update(0.1)
    assert plane.physics.speed == 0.0
    assert plane.physics.turn_dir_yaw == 0


def test_boat_steers_with_a_and_d_only():
    boat = Boat(_noop, 10.0, 0.25, 3.0)
    boat.setup()
    boat.select()
    boat.input_manager.pressed = frozenset({Key.LEFT})
    boat.update(0.1)
    assert boat.physics.turn_dir_yaw == 0
    boat.input_manager.pressed = frozenset({Key.D})
    boat.update(0.1)
    assert boat.physics.turn_dir_yaw == -1
    assert boat.physics.turn_rate == 0.25


def test_cleanup_clears_bindings():
    boat = Boat(_noop, 10.0, 0.25, 3.0)
    boat.setup()
    assert len(boat.input_manager.inputs) == 5
    boat.cleanup()
    assert len(boat.input_manager.inputs) == 0


def test_select_and_deselect_toggle_components():
    plane = Plane(_noop)
    plane.select()
    assert plane.input_manager.enabled
    assert plane.get_component(RenderComponent).selected
    plane.deselect()
    assert not plane.selected
    assert not plane.get_component(InputComponent).enabled


def test_build_fleet_layout():
    entities = build_fleet(_noop, [_noop] * 5)
    assert len(entities) == 10
    assert all(isinstance(e, Boat) for e in entities[:5])
    assert all(isinstance(e, Plane) for e in entities[5:])
    assert [e.selected for e in entities].count(True) == 1
    assert entities[0].selected
    assert entities[5].transform.position == Vector3(0.0, 50.0, -150.0)
    assert entities[1].transform.scale == Vector3(0.01, 0.01, 0.01)


def test_build_fleet_rejects_wrong_boat_count():
    with pytest.raises(ValueError):
        build_fleet(_noop, [_noop] * 3)


def test_cycle_selection_wraps():
    entities = build_fleet(_noop, [_noop] * 5)
    index = 0
    for _ in range(len(entities)):
        index = cycle_selection(entities, index)
    assert index == 0
    assert entities[0].selected
    assert [e.selected for e in entities].count(True) == 1