"""Data-oriented entity-component store with physics, steering and camera systems."""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from enum import Enum, auto
from typing import AbstractSet, Any, Generic, Sequence, TypeVar

from skyharbor.flight import Key
from skyharbor.geometry import Quaternion, Vector3

WIDTH = 960
HEIGHT = 540
CAMERA_OFFSET = Vector3(0.0, 50.0, -100.0)
MAX_ENTITIES = 256
MAX_ALLOCATION = 100

T = TypeVar("T")


class Action(Enum):
    """Named controls shared by every vehicle."""

    FORWARD = auto()
    BACKWARD = auto()
    LEFT = auto()
    RIGHT = auto()
    UP = auto()
    DOWN = auto()
    RESET = auto()


KEY_ACTIONS = {
    Key.W: Action.FORWARD,
    Key.S: Action.BACKWARD,
    Key.A: Action.LEFT,
    Key.D: Action.RIGHT,
    Key.UP: Action.UP,
    Key.DOWN: Action.DOWN,
    Key.SPACE: Action.RESET,
}


class _ComponentIds:
    """Hands out a stable, increasing id for every component type seen."""

    def __init__(self) -> None:
        self._ids: dict[type, int] = {}

    def __call__(self, component_type: type) -> int:
        return self._ids.setdefault(component_type, len(self._ids))


_component_id = _ComponentIds()


@dataclass
class Physics2D:
    """Movement on the water plane: speed along the heading and yaw turning."""

    velocity: Vector3 = Vector3()
    max_speed: float = 0.0
    speed: float = 0.0
    acceleration: float = 0.0
    turn_rate: float = 0.0
    turn_yaw: int = 0


@dataclass
class Physics3D:
    """Movement in the air: speed along the heading with yaw and pitch turning."""

    velocity: Vector3 = Vector3()
    max_speed: float = 0.0
    speed: float = 0.0
    acceleration: float = 0.0
    turn_rate: float = 0.0
    turn_yaw: int = 0
    turn_pitch: int = 0


@dataclass
class TransformState:
    """Where an entity is and which way it faces."""

    position: Vector3 = Vector3()
    rotation: Quaternion = field(default_factory=Quaternion.identity)
    euler_angles: Vector3 = Vector3()
    forward_vector: Vector3 = Vector3()


@dataclass
class Render:
    """The model an entity is drawn with and whether it is highlighted."""

    model: Any = None
    selected: bool = False


@dataclass
class Inputs:
    """Which steering scheme applies to the entity."""

    is_plane: bool = False


class ComponentStorage(Generic[T]):
    """A dense column of components of one type, indexed by entity."""

    def __init__(self, component_type: type[T] | None = None) -> None:
        self.component_type = component_type
        self._data: list[T] = []

    def __len__(self) -> int:
        return len(self._data)

    def get(self, entity: int) -> T:
        """The component stored for the entity."""
        if not 0 <= entity < len(self._data):
            raise IndexError(f"no component stored for entity {entity}")
        return self._data[entity]

    def allocate(self, count: int = 1) -> tuple[T, int]:
        """Append default components; returns the last one and the new size."""
        if self.component_type is None:
            raise TypeError("storage has no component type")
        if not 1 <= count < MAX_ALLOCATION:
            raise ValueError(f"allocation count out of range: {count}")
        self._data.extend(self.component_type() for _ in range(count))
        return self._data[-1], len(self._data)

    def get_or_allocate(self, entity: int) -> T:
        """The entity's component, growing the storage to reach it if needed."""
        if entity < 0:
            raise IndexError(f"invalid entity {entity}")
        size = len(self._data)
        if size <= entity:
            self.allocate(max(entity - size + 1, 1))
        return self.get(entity)


class Scene:
    """Entities as component masks, with one storage per component type."""

    def __init__(self) -> None:
        self.entity_masks: list[set[int]] = []
        self.storages: list[ComponentStorage] = [ComponentStorage()]

    def __len__(self) -> int:
        return len(self.entity_masks)

    def _mask(self, entity: int) -> set[int]:
        if not 0 <= entity < len(self.entity_masks):
            raise IndexError(f"no such entity: {entity}")
        return self.entity_masks[entity]

    def get_storage(self, component_type: type[T]) -> ComponentStorage[T]:
        """The storage for a component type, created on first use."""
        cid = _component_id(component_type)
        if len(self.storages) <= cid:
            self.storages.extend(
                ComponentStorage() for _ in range(cid - len(self.storages) + 1)
            )
        if self.storages[cid].component_type is None:
            self.storages[cid] = ComponentStorage(component_type)
        return self.storages[cid]

    def create_entity(self) -> int:
        """Register a new entity with no components and return its id."""
        if len(self.entity_masks) >= MAX_ENTITIES:
            raise OverflowError(f"a scene holds at most {MAX_ENTITIES} entities")
        self.entity_masks.append(set())
        return len(self.entity_masks) - 1

    def add_component(self, entity: int, component_type: type[T]) -> T:
        """Mark the entity as having the component and return it."""
        mask = self._mask(entity)
        mask.add(_component_id(component_type))
        return self.get_storage(component_type).get_or_allocate(entity)

    def remove_component(self, entity: int, component_type: type) -> None:
        """Clear the entity's mark for the component; stored data is kept."""
        self._mask(entity).discard(_component_id(component_type))

    def get_component(self, entity: int, component_type: type[T]) -> T:
        """The entity's component; raises KeyError if it does not have one."""
        if not self.has_component(entity, component_type):
            raise KeyError(f"entity {entity} has no {component_type.__name__}")
        return self.get_storage(component_type).get(entity)

    def has_component(self, entity: int, component_type: type) -> bool:
        return _component_id(component_type) in self._mask(entity)


def forward_vector(eulers: Vector3) -> Vector3:
    """The local forward (+Z) direction for the given pitch and yaw in radians."""
    return Vector3(
        math.cos(eulers.x) * math.sin(eulers.y),
        -math.sin(eulers.x),
        math.cos(eulers.x) * math.cos(eulers.y),
    )


def _selected_vehicle(scene: Scene, entity: int, physics_type: type, is_plane: bool):
    for needed in (Render, TransformState, physics_type, Inputs):
        if not scene.has_component(entity, needed):
            return None
    if scene.get_component(entity, Inputs).is_plane != is_plane:
        return None
    if not scene.get_component(entity, Render).selected:
        return None
    return scene.get_component(entity, physics_type)


def _steer(phys, held: AbstractSet[Action], inputs_pressed: bool, dt: float,
           actions: Sequence[Action]) -> bool:
    """Apply at most one newly held action; returns the updated latch."""
    for action in actions:
        if inputs_pressed or action not in held:
            continue
        if action is Action.FORWARD:
            phys.speed += phys.acceleration * dt
        elif action is Action.BACKWARD:
            phys.speed -= phys.acceleration * dt
        elif action is Action.LEFT:
            phys.turn_yaw -= 1
            if phys.turn_yaw < -1:
                phys.turn_yaw = 0
        elif action is Action.RIGHT:
            phys.turn_yaw += 1
            if phys.turn_yaw > 1:
                phys.turn_yaw = 0
        elif action is Action.UP:
            phys.turn_pitch += 1
            if phys.turn_pitch > 1:
                phys.turn_pitch = 0
        elif action is Action.DOWN:
            phys.turn_pitch -= 1
            if phys.turn_pitch < -1:
                phys.turn_pitch = 0
        inputs_pressed = True
    if not any(action in held for action in actions):
        inputs_pressed = False
    return inputs_pressed


_BOAT_ACTIONS = (Action.FORWARD, Action.BACKWARD, Action.LEFT, Action.RIGHT)
_PLANE_ACTIONS = _BOAT_ACTIONS + (Action.UP, Action.DOWN)


def boat_system(scene: Scene, held: AbstractSet[Action], entity: int,
                inputs_pressed: bool, dt: float) -> bool:
    """Steer the selected boat; returns whether an input is still latched."""
    phys = _selected_vehicle(scene, entity, Physics2D, is_plane=False)
    if phys is None:
        return inputs_pressed
    return _steer(phys, held, inputs_pressed, dt, _BOAT_ACTIONS)


def plane_system(scene: Scene, held: AbstractSet[Action], entity: int,
                 inputs_pressed: bool, dt: float) -> bool:
    """Steer the selected plane; returns whether an input is still latched."""
    phys = _selected_vehicle(scene, entity, Physics3D, is_plane=True)
    if phys is None:
        return inputs_pressed
    return _steer(phys, held, inputs_pressed, dt, _PLANE_ACTIONS)


def _integrate(trans: TransformState, phys, pitch_dir: int, dt: float) -> None:
    angles = trans.euler_angles
    trans.euler_angles = replace(
        angles,
        x=angles.x + pitch_dir * phys.turn_rate * dt,
        y=angles.y + phys.turn_yaw * phys.turn_rate * dt,
    )
    trans.rotation = Quaternion.from_euler(trans.euler_angles)
    trans.forward_vector = forward_vector(trans.euler_angles)
    phys.velocity = trans.forward_vector.normalize() * phys.speed
    trans.position = trans.position + phys.velocity


def physics_2d_system(scene: Scene, dt: float) -> None:
    """Turn and move every entity with 2D physics and a transform."""
    for entity in range(len(scene)):
        if scene.has_component(entity, Physics2D) and scene.has_component(entity, TransformState):
            _integrate(scene.get_component(entity, TransformState),
                       scene.get_component(entity, Physics2D), 0, dt)


def physics_3d_system(scene: Scene, dt: float) -> None:
    """Turn and move every entity with 3D physics and a transform."""
    for entity in range(len(scene)):
        if scene.has_component(entity, Physics3D) and scene.has_component(entity, TransformState):
            phys = scene.get_component(entity, Physics3D)
            _integrate(scene.get_component(entity, TransformState), phys, phys.turn_pitch, dt)


def camera_system(scene: Scene, entity: int, offset: Vector3) -> tuple[Vector3, Vector3] | None:
    """Camera position and target that follow the entity, or None without a transform."""
    if not scene.has_component(entity, TransformState):
        return None
    position = scene.get_component(entity, TransformState).position
    return position + offset, position


_PLANE_POSITIONS = (
    Vector3(0.0, 50.0, 0.0),
    Vector3(0.0, 50.0, -75.0),
    Vector3(0.0, 50.0, 75.0),
    Vector3(0.0, 50.0, -150.0),
    Vector3(0.0, 50.0, 150.0),
)
# (position, acceleration, max speed) for each boat.
_BOAT_SPECS = (
    (Vector3(0.0, 0.0, 0.0), 20.0, 5.0),
    (Vector3(0.0, 0.0, -75.0), 10.0, 3.0),
    (Vector3(0.0, 0.0, 75.0), 10.0, 4.0),
    (Vector3(0.0, 0.0, -150.0), 15.0, 5.0),
    (Vector3(0.0, 0.0, 150.0), 20.0, 5.0),
)
_TURN_RATE = 0.25


def _add_vehicle(scene: Scene, model: Any, position: Vector3, is_plane: bool,
                 physics_type: type, acceleration: float, max_speed: float) -> int:
    entity = scene.create_entity()
    scene.add_component(entity, Render).model = model
    transform = scene.add_component(entity, TransformState)
    scene.add_component(entity, Inputs).is_plane = is_plane
    phys = scene.add_component(entity, physics_type)
    transform.position = position
    transform.rotation = Quaternion.identity()
    phys.acceleration = acceleration
    phys.max_speed = max_speed
    phys.speed = 0.0
    phys.turn_rate = _TURN_RATE
    phys.velocity = Vector3()
    return entity


def populate_scene(scene: Scene, plane_model: Any, boat_models: Sequence[Any]) -> list[int]:
    """Add five planes then five boats, select the first, and return their ids."""
    if len(boat_models) != len(_BOAT_SPECS):
        raise ValueError(f"expected {len(_BOAT_SPECS)} boat models, got {len(boat_models)}")
    entities = [
        _add_vehicle(scene, plane_model, position, True, Physics3D, 20.0, 5.0)
        for position in _PLANE_POSITIONS
    ]
    entities.extend(
        _add_vehicle(scene, model, position, False, Physics2D, acceleration, max_speed)
        for model, (position, acceleration, max_speed) in zip(boat_models, _BOAT_SPECS)
    )
    if scene.has_component(entities[0], Render):
        scene.get_component(entities[0], Render).selected = True
    return entities