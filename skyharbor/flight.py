"""Plane flight model with keyboard-driven controls and a switchable fleet."""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from enum import Enum, auto
from typing import AbstractSet, Iterable

from skyharbor.geometry import Vector3

_UP = Vector3(0.0, 1.0, 0.0)

CONTROLS = (
    "Use [W] and [S] to accelerate and decelerate",
    "Use [A] and [D] to toggle turn left or turn right",
    "Use [Q] and [E] to accelerate and decelerate vertically",
    "Use ARROW KEYS to move camera up, down, left and right",
    "Use TAB to switch between planes",
)


class Key(Enum):
    W = auto()
    S = auto()
    A = auto()
    D = auto()
    Q = auto()
    E = auto()
    SPACE = auto()
    TAB = auto()
    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()


def forward_vector(rotation: Vector3) -> Vector3:
    """The local forward (+X) direction for the given pitch and yaw in radians."""
    return Vector3(
        math.cos(rotation.x) * math.cos(rotation.y),
        -math.sin(rotation.x),
        math.cos(rotation.x) * -math.sin(rotation.y),
    )


def exceeds_max_forward_velocity(velocity: Vector3, maximum: float) -> bool:
    """True when the horizontal (x, z) speed reaches the maximum."""
    return math.hypot(velocity.x, velocity.z) >= maximum


def format_vector(title: str, vector: Vector3) -> str:
    """Heads-up text for a vector, such as 'Position: 1, 2, 3'."""
    return f"{title}{vector.x:g}, {vector.y:g}, {vector.z:g}"


def move_camera(position: Vector3, held: AbstractSet[Key], speed: float, dt: float) -> Vector3:
    """Move the camera offset with the arrow keys that are held down."""
    step = speed * dt
    x, y = position.x, position.y
    if Key.RIGHT in held:
        x += step
    if Key.LEFT in held:
        x -= step
    if Key.UP in held:
        y += step
    if Key.DOWN in held:
        y -= step
    return replace(position, x=x, y=y)


@dataclass
class Plane:
    """A plane whose speed and heading change once per key press."""

    name: str = ""
    position: Vector3 = Vector3()
    velocity: Vector3 = Vector3()
    forward: Vector3 = Vector3(1.0, 0.0, 0.0)
    rotation: Vector3 = Vector3()
    angle_radian: Vector3 = Vector3()
    speed: float = 0.0
    vertical_speed: float = 0.0
    max_speed: float = 5.0
    turn_rate: float = 1.0
    acceleration: float = 20.0
    turn_left: bool = False
    turn_right: bool = False
    selected: bool = False

    def handle_input(self, pressed: AbstractSet[Key], dt: float) -> None:
        """Apply the keys pressed this frame."""
        boost = self.acceleration * dt
        if Key.W in pressed:
            self.speed += boost
        if Key.S in pressed:
            self.speed -= boost
        if Key.D in pressed:
            if not self.turn_right:
                self.turn_right, self.turn_left = True, False
                self.rotation = replace(self.rotation, y=-self.turn_rate * dt)
            else:
                self.turn_right = False
                self.rotation = replace(self.rotation, y=0.0)
        if Key.A in pressed:
            if not self.turn_left:
                self.turn_left, self.turn_right = True, False
                self.rotation = replace(self.rotation, y=self.turn_rate * dt)
            else:
                self.turn_left = False
                self.rotation = replace(self.rotation, y=0.0)
        if Key.Q in pressed:
            self.vertical_speed += boost
        if Key.E in pressed:
            self.vertical_speed -= boost
        if Key.SPACE in pressed:
            self.speed = 0.0
            self.vertical_speed = 0.0

    def update(self, pressed: AbstractSet[Key], dt: float) -> None:
        """Advance one frame; input is applied only while the plane is selected."""
        if self.selected:
            self.handle_input(pressed, dt)
        self.speed = max(-self.max_speed, min(self.max_speed, self.speed))
        self.angle_radian = self.angle_radian + self.rotation
        self.forward = forward_vector(self.angle_radian)
        self.velocity = self.forward.normalize() * self.speed + _UP * self.vertical_speed
        if self.position.y + self.velocity.y < 0:
            self.position = replace(self.position, y=0.0)
            self.velocity = replace(self.velocity, y=0.0)
            self.vertical_speed = 0.0
        self.position = self.position + self.velocity

    def angle_degrees(self) -> Vector3:
        """The accumulated rotation in degrees."""
        return self.angle_radian * (180.0 / math.pi)


@dataclass
class Fleet:
    """Planes of which exactly one is selected; TAB moves the selection on."""

    planes: list[Plane] = field(default_factory=list)
    index: int = 0

    def __post_init__(self) -> None:
        if not self.planes:
            raise ValueError("a fleet needs at least one plane")
        self.planes = list(self.planes)
        for plane in self.planes:
            plane.selected = False
        self.index %= len(self.planes)
        self.planes[self.index].selected = True

    @classmethod
    def of(cls, names: Iterable[str]) -> Fleet:
        return cls([Plane(name=name) for name in names])

    def current(self) -> Plane:
        return self.planes[self.index]

    def select_next(self) -> Plane:
        """Deselect the current plane and select the next, wrapping round."""
        self.current().selected = False
        self.index = (self.index + 1) % len(self.planes)
        self.current().selected = True
        return self.current()

    def update(self, pressed: AbstractSet[Key], dt: float) -> None:
        """Handle switching, then advance every plane one frame."""
        if Key.TAB in pressed:
            self.select_next()
        for plane in self.planes:
            plane.update(pressed, dt)