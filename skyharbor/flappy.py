"""Side-scrolling plane game: hold space to climb, dodge the pillars."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from skyharbor.geometry import BoundingBox, Vector3

WIDTH = 960
HEIGHT = 540
TITLE = "Flappy Plane"
START_HINT = "Use [SPACE] to start"
CAMERA_OFFSET = Vector3(0.0, 10.0, 100.0)

BASE_SPEED = 0.5
PILLAR_SIZE = Vector3(25.0, 1000.0, 25.0)
PILLAR_CENTERS = (
    Vector3(100.0, -450.0, 0.0),
    Vector3(175.0, 550.0, 0.0),
    Vector3(250.0, -460.0, 0.0),
    Vector3(325.0, 530.0, 0.0),
    Vector3(400.0, -480.0, 0.0),
    Vector3(475.0, 550.0, 0.0),
    Vector3(550.0, -480.0, 0.0),
    Vector3(625.0, 550.0, 0.0),
)

_UP = Vector3(0.0, 1.0, 0.0)
_RIGHT = Vector3(1.0, 0.0, 0.0)
# Approximate extent of the plane model around its origin.
_DEFAULT_HULL = BoundingBox(Vector3(-5.0, -2.0, -5.0), Vector3(5.0, 2.0, 5.0))

_SPEED_STEPS = (
    (1000.0, 0.5),
    (2000.0, 1.0),
    (4000.0, 1.5),
    (8000.0, 2.0),
    (16000.0, 2.5),
    (32000.0, 3.0),
)


def speed_increment(x: float) -> float:
    """Extra forward speed for the distance flown.

    The thresholds are tested from the lowest up and the first match wins,
    so every distance of 1000 or more earns the same increment.
    """
    for threshold, increment in _SPEED_STEPS:
        if x >= threshold:
            return increment
    return 0.0


def pillar_boxes() -> list[BoundingBox]:
    """The bounding boxes of the pillars, in course order."""
    half = PILLAR_SIZE / 2.0
    return [BoundingBox(center - half, center + half) for center in PILLAR_CENTERS]


def format_score(position: Vector3) -> str:
    """The score text: the distance flown along x."""
    return f"{position.x:g}"


@dataclass
class FlappyPlane:
    """A plane that flies right at a rising speed and climbs while space is held."""

    position: Vector3 = Vector3()
    velocity: Vector3 = Vector3()
    speed: float = BASE_SPEED
    vertical_speed: float = 0.0
    max_speed: float = 0.5
    acceleration: float = 0.75
    increment: float = 0.0
    started: bool = False
    reset: bool = False
    hull: BoundingBox = field(default=_DEFAULT_HULL)

    def _handle_input(self, space_held: bool, dt: float) -> None:
        change = self.acceleration * dt
        self.vertical_speed += change if space_held else -change

    def update(self, space_held: bool, dt: float) -> None:
        """Advance one frame.

        Holding space starts the run; a pending reset returns the plane to
        the start line and stops the run, taking precedence over starting.
        """
        if space_held:
            self.started = True
        if self.reset:
            self.reset = False
            self.started = False
            self.position = replace(self.position, x=0.0, y=0.0)

        self._handle_input(space_held, dt)

        self.increment = speed_increment(self.position.x)
        self.speed = BASE_SPEED + self.increment if self.started else 0.0
        self.vertical_speed = max(-self.max_speed, min(self.max_speed, self.vertical_speed))

        self.velocity = _RIGHT * self.speed + _UP * self.vertical_speed
        if self.position.y + self.velocity.y < 0:
            self.position = replace(self.position, y=0.0)
            self.velocity = replace(self.velocity, y=0.0)
            self.vertical_speed = 0.0
        self.position = self.position + self.velocity

    def bounding_box(self) -> BoundingBox:
        """The plane's hull placed at its current position."""
        return self.hull.translated(self.position)

    def check_collision(self, box: BoundingBox) -> bool:
        """True when the plane touches the given box."""
        return self.bounding_box().check_collision(box)