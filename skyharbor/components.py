"""Entity-component model for a fleet of steerable planes and boats."""

from __future__ import annotations

import math
from dataclasses import replace
from typing import Callable, Iterable, Sequence, TypeVar

from skyharbor.flight import Key
from skyharbor.geometry import Quaternion, Vector3

WIDTH = 960
HEIGHT = 540
CAMERA_OFFSET = Vector3(0.0, 50.0, -100.0)

CONTROLS_HELP = (
    "PLANE",
    "Use [W] and [S] to accelerate and decelerate",
    "Use ARROW KEYS to turn the plane and ascend/descend",
    "Use TAB to switch between vehicles",
    "BOAT",
    "Use [W] and [S] to accelerate and decelerate",
    "Use [A] and [D] to turn the boats left and right",
    "Use TAB to switch between vehicles",
)
CONTROLS_HINT = (
    "[C] for controls",
    "[TAB] to switch between entities",
)

# (acceleration, turn rate, max speed, position, scale) for each boat.
BOAT_SPECS = (
    (20.0, 1.0, 5.0, Vector3(0.0, 0.0, -150.0), Vector3(1.0, 1.0, 1.0)),
    (20.0, 1.0, 10.0, Vector3(0.0, 0.0, -75.0), Vector3(0.01, 0.01, 0.01)),
    (10.0, 0.25, 3.0, Vector3(0.0, 0.0, 0.0), Vector3(0.01, 0.01, 0.01)),
    (12.0, 0.25, 6.0, Vector3(0.0, 0.0, 75.0), Vector3(0.01, 0.01, 0.01)),
    (15.0, 1.0, 9.0, Vector3(0.0, 0.0, 150.0), Vector3(0.01, 0.01, 0.01)),
)
PLANE_POSITIONS = (
    Vector3(0.0, 50.0, -150.0),
    Vector3(0.0, 50.0, -75.0),
    Vector3(0.0, 50.0, 0.0),
    Vector3(0.0, 50.0, 75.0),
    Vector3(0.0, 50.0, 150.0),
)

DrawFn = Callable[..., None]
C = TypeVar("C", bound="Component")


def _forward_vector(eulers: Vector3) -> Vector3:
    return Vector3(
        math.cos(eulers.x) * math.sin(eulers.y),
        -math.sin(eulers.x),
        math.cos(eulers.x) * math.cos(eulers.y),
    )


class Component:
    """A piece of behaviour attached to an entity."""

    def __init__(self, entity: Entity) -> None:
        self.entity = entity

    def setup(self) -> None:
        """Prepare the component before the first frame."""

    def cleanup(self) -> None:
        """Release what the component holds."""

    def update(self, dt: float) -> None:
        """Advance the component by one frame."""


class TransformComponent(Component):
    """Position, orientation and scale of an entity."""

    def __init__(self, entity: Entity) -> None:
        super().__init__(entity)
        self.position = Vector3()
        self.euler_angles = Vector3()
        self.scale = Vector3(1.0, 1.0, 1.0)
        self.rotation = Quaternion.from_euler(self.euler_angles)

    def update(self, dt: float) -> None:
        self.rotation = Quaternion.from_euler(self.euler_angles)


class PhysicsComponent(Component):
    """Speed along a forward vector, with yaw and pitch turning."""

    def __init__(self, entity: Entity) -> None:
        super().__init__(entity)
        self.velocity = Vector3()
        self.turn_dir_yaw = 0
        self.turn_dir_pitch = 0
        self.speed = 0.0
        self.acceleration = 20.0
        self.max_speed = 5.0
        self.turn_rate = 1.0
        self.dt = 0.0
        self.forward_vector = Vector3(0.0, 0.0, 1.0)

    def setup(self) -> None:
        self.velocity = Vector3()
        self.turn_dir_yaw = 0
        self.turn_dir_pitch = 0
        self.speed = 0.0
        self.max_speed = 5.0
        self.acceleration = 20.0
        self.forward_vector = Vector3(0.0, 0.0, 1.0)

    def update(self, dt: float) -> None:
        self.dt = dt
        transform = self.entity.get_component(TransformComponent)
        angles = transform.euler_angles
        transform.euler_angles = replace(
            angles,
            x=angles.x + self.turn_dir_pitch * self.turn_rate * dt,
            y=angles.y + self.turn_dir_yaw * self.turn_rate * dt,
        )
        self.forward_vector = _forward_vector(transform.euler_angles)
        self.velocity = self.forward_vector * self.speed
        transform.position = transform.position + self.velocity

    def increment_speed(self) -> None:
        """Accelerate forward, using the time step of the last update."""
        if self.speed < self.max_speed:
            self.speed += self.acceleration * self.dt
        else:
            self.speed = self.max_speed

    def decrement_speed(self) -> None:
        """Accelerate backward, using the time step of the last update."""
        if self.speed > -self.max_speed:
            self.speed -= self.acceleration * self.dt
        else:
            self.speed = -self.max_speed

    def reset_speed(self) -> None:
        self.speed = 0.0

    def increment_yaw(self) -> None:
        """Step the yaw direction up; stepping past +1 stops turning."""
        self.turn_dir_yaw += 1
        if self.turn_dir_yaw > 1:
            self.turn_dir_yaw = 0

    def decrement_yaw(self) -> None:
        """Step the yaw direction down; stepping past -1 stops turning."""
        self.turn_dir_yaw -= 1
        if self.turn_dir_yaw < -1:
            self.turn_dir_yaw = 0

    def increment_pitch(self) -> None:
        self.turn_dir_pitch += 1
        if self.turn_dir_pitch > 1:
            self.turn_dir_pitch = 0

    def decrement_pitch(self) -> None:
        self.turn_dir_pitch -= 1
        if self.turn_dir_pitch < -1:
            self.turn_dir_pitch = 0

    def reset(self) -> None:
        """Stop turning and stop moving."""
        self.turn_dir_pitch = 0
        self.turn_dir_yaw = 0
        self.speed = 0.0


class ActionMap:
    """Named key bindings whose callbacks run when their key is pressed."""

    def __init__(self) -> None:
        self._actions: dict[str, tuple[Key, Callable[[], None]]] = {}

    def __len__(self) -> int:
        return len(self._actions)

    def __contains__(self, name: object) -> bool:
        return name in self._actions

    def bind(self, name: str, key: Key, callback: Callable[[], None]) -> None:
        """Bind a key under a name, replacing any earlier binding of that name."""
        self._actions[name] = (key, callback)

    def poll(self, pressed: Iterable[Key]) -> None:
        """Run the callback of every action whose key is among those pressed."""
        keys = frozenset(pressed)
        for key, callback in list(self._actions.values()):
            if key in keys:
                callback()

    def clear(self) -> None:
        self._actions.clear()


class InputComponent(Component):
    """Feeds the keys pressed this frame to the entity's action map while enabled."""

    def __init__(self, entity: Entity) -> None:
        super().__init__(entity)
        self.enabled = False
        self.inputs = ActionMap()
        self.pressed: frozenset[Key] = frozenset()

    def setup(self) -> None:
        self.enabled = False

    def update(self, dt: float) -> None:
        if self.enabled:
            self.inputs.poll(self.pressed)
        self.pressed = frozenset()

    def cleanup(self) -> None:
        self.inputs.clear()


class RenderComponent(Component):
    """Hands the entity's pose to a draw function every frame."""

    def __init__(self, entity: Entity, draw: DrawFn) -> None:
        super().__init__(entity)
        self.draw = draw
        self.selected = False

    def update(self, dt: float) -> None:
        transform = self.entity.get_component(TransformComponent)
        if transform is None:
            return
        axis, angle = transform.rotation.to_axis_angle()
        self.draw(
            position=transform.position,
            axis=axis,
            angle=angle,
            scale=transform.scale,
            selected=self.selected,
        )


class Entity:
    """An ordered collection of components; the first is always the transform."""

    def __init__(self) -> None:
        self.components: list[Component] = []
        self.selected = False
        self.add_component(TransformComponent)
        self.transform: TransformComponent = self.components[0]  # type: ignore[assignment]

    def add_component(self, component_type: type[Component], *args) -> int:
        """Create a component of the given type and return its index."""
        self.components.append(component_type(self, *args))
        return len(self.components) - 1

    def get_component(self, component_type: type[C]) -> C | None:
        """The first component of the given type, or None."""
        return next(
            (c for c in self.components if isinstance(c, component_type)), None
        )

    def update(self, dt: float) -> None:
        for component in self.components:
            component.update(dt)

    def setup(self) -> None:
        for component in self.components:
            component.setup()

    def cleanup(self) -> None:
        for component in self.components:
            component.cleanup()

    def _mark(self, selected: bool) -> None:
        self.selected = selected
        inputs = self.get_component(InputComponent)
        if inputs is not None:
            inputs.enabled = selected
        render = self.get_component(RenderComponent)
        if render is not None:
            render.selected = selected

    def select(self) -> None:
        """Enable input and highlighting for this entity."""
        self._mark(True)

    def deselect(self) -> None:
        """Disable input and highlighting for this entity."""
        self._mark(False)


class Vehicle(Entity):
    """An entity that is drawn, takes input and moves."""

    def __init__(self, draw: DrawFn) -> None:
        super().__init__()
        self.add_component(RenderComponent, draw)
        self.add_component(InputComponent)
        self.add_component(PhysicsComponent)
        self.input_manager: InputComponent = self.get_component(InputComponent)
        self.physics: PhysicsComponent = self.get_component(PhysicsComponent)

    def _bind(self, bindings: Sequence[tuple[str, Key, Callable[[], None]]]) -> None:
        for name, key, callback in bindings:
            self.input_manager.inputs.bind(name, key, callback)


class Plane(Vehicle):
    """A vehicle steered in yaw and pitch with the arrow keys."""

    def setup(self) -> None:
        p = self.physics
        self._bind((
            ("W", Key.W, p.increment_speed),
            ("S", Key.S, p.decrement_speed),
            ("Left", Key.LEFT, p.increment_yaw),
            ("Right", Key.RIGHT, p.decrement_yaw),
            ("Up", Key.UP, p.increment_pitch),
            ("Down", Key.DOWN, p.decrement_pitch),
            ("SPACE", Key.SPACE, p.reset),
        ))
        super().setup()


class Boat(Vehicle):
    """A vehicle steered in yaw with A and D."""

    def __init__(
        self, draw: DrawFn, acceleration: float, turn_rate: float, max_speed: float
    ) -> None:
        super().__init__(draw)
        self.physics.acceleration = acceleration
        self.physics.turn_rate = turn_rate
        self.physics.max_speed = max_speed

    def setup(self) -> None:
        p = self.physics
        self._bind((
            ("W", Key.W, p.increment_speed),
            ("S", Key.S, p.decrement_speed),
            ("A", Key.A, p.increment_yaw),
            ("D", Key.D, p.decrement_yaw),
            ("SPACE", Key.SPACE, p.reset),
        ))
        super().setup()


def build_fleet(plane_draw: DrawFn, boat_draws: Sequence[DrawFn]) -> list[Entity]:
    """Five boats then five planes, set up, with the first one selected."""
    if len(boat_draws) != len(BOAT_SPECS):
        raise ValueError(f"expected {len(BOAT_SPECS)} boat draw functions, got {len(boat_draws)}")
    entities: list[Entity] = []
    for draw, (acceleration, turn_rate, max_speed, position, scale) in zip(boat_draws, BOAT_SPECS):
        boat = Boat(draw, acceleration, turn_rate, max_speed)
        boat.transform.position = position
        boat.transform.scale = scale
        entities.append(boat)
    for position in PLANE_POSITIONS:
        plane = Plane(plane_draw)
        plane.transform.position = position
        entities.append(plane)
    for entity in entities:
        entity.setup()
    entities[0].select()
    return entities


def cycle_selection(entities: Sequence[Entity], index: int) -> int:
    """Move the selection to the next entity, wrapping round; returns its index."""
    entities[index].deselect()
    index = (index + 1) % len(entities)
    entities[index].select()
    return index