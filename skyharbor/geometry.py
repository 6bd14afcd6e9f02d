"""Small value types for 2D and 3D maths: vectors, quaternions, rectangles and boxes."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Iterator

_EPSILON = 0.000001


@dataclass(frozen=True)
class Vector2:
    """A point or direction in the plane."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vector2) -> Vector2:
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector2) -> Vector2:
        return Vector2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> Vector2:
        return Vector2(self.x * scalar, self.y * scalar)

    __rmul__ = __mul__

    def __neg__(self) -> Vector2:
        return Vector2(-self.x, -self.y)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y


@dataclass(frozen=True)
class Vector3:
    """A point or direction in space."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: Vector3) -> Vector3:
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector3) -> Vector3:
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> Vector3:
        return Vector3(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Vector3:
        return Vector3(self.x / scalar, self.y / scalar, self.z / scalar)

    def __neg__(self) -> Vector3:
        return Vector3(-self.x, -self.y, -self.z)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def length(self) -> float:
        """Euclidean length of the vector."""
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def normalize(self) -> Vector3:
        """Unit vector in the same direction; the zero vector is returned unchanged."""
        length = self.length()
        if length == 0.0:
            return self
        return self / length


@dataclass(frozen=True)
class Quaternion:
    """A rotation stored as (x, y, z, w)."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 1.0

    @classmethod
    def identity(cls) -> Quaternion:
        return cls(0.0, 0.0, 0.0, 1.0)

    @classmethod
    def from_euler(cls, euler: Vector3) -> Quaternion:
        """Build a rotation from (pitch, yaw, roll) angles in radians."""
        x0, x1 = math.cos(euler.x * 0.5), math.sin(euler.x * 0.5)
        y0, y1 = math.cos(euler.y * 0.5), math.sin(euler.y * 0.5)
        z0, z1 = math.cos(euler.z * 0.5), math.sin(euler.z * 0.5)
        return cls(
            x1 * y0 * z0 - x0 * y1 * z1,
            x0 * y1 * z0 + x1 * y0 * z1,
            x0 * y0 * z1 - x1 * y1 * z0,
            x0 * y0 * z0 + x1 * y1 * z1,
        )

    def _normalized(self) -> Quaternion:
        length = math.sqrt(self.x ** 2 + self.y ** 2 + self.z ** 2 + self.w ** 2)
        if length == 0.0:
            length = 1.0
        return Quaternion(self.x / length, self.y / length, self.z / length, self.w / length)

    def to_axis_angle(self) -> tuple[Vector3, float]:
        """Return the rotation axis and the angle in radians."""
        q = self._normalized() if abs(self.w) > 1.0 else self
        angle = 2.0 * math.acos(max(-1.0, min(1.0, q.w)))
        den = math.sqrt(max(0.0, 1.0 - q.w * q.w))
        if den > _EPSILON:
            axis = Vector3(q.x / den, q.y / den, q.z / den)
        else:
            axis = Vector3(1.0, 0.0, 0.0)
        return axis, angle


@dataclass(frozen=True)
class Rectangle:
    """An axis-aligned rectangle with its corner at (x, y)."""

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @property
    def position(self) -> Vector2:
        return Vector2(self.x, self.y)

    def check_collision(self, other: Rectangle) -> bool:
        """True when the interiors of the two rectangles overlap."""
        return (
            self.x < other.x + other.width
            and self.x + self.width > other.x
            and self.y < other.y + other.height
            and self.y + self.height > other.y
        )

    def collision_rect(self, other: Rectangle) -> Rectangle:
        """The overlapping area, or an empty rectangle when there is none."""
        left = max(self.x, other.x)
        right = min(self.x + self.width, other.x + other.width)
        top = max(self.y, other.y)
        bottom = min(self.y + self.height, other.y + other.height)
        if left < right and top < bottom:
            return Rectangle(left, top, right - left, bottom - top)
        return Rectangle()

    def contains_point(self, point: Vector2) -> bool:
        """True when the point lies inside; the far edges are excluded."""
        return (
            self.x <= point.x < self.x + self.width
            and self.y <= point.y < self.y + self.height
        )

    def moved_to(self, position: Vector2) -> Rectangle:
        """A copy of the rectangle with its corner at the given position."""
        return replace(self, x=position.x, y=position.y)


@dataclass(frozen=True)
class BoundingBox:
    """An axis-aligned box between two corners."""

    min: Vector3 = Vector3()
    max: Vector3 = Vector3()

    def check_collision(self, other: BoundingBox) -> bool:
        """True when the boxes overlap or touch."""
        return (
            self.max.x >= other.min.x
            and self.min.x <= other.max.x
            and self.max.y >= other.min.y
            and self.min.y <= other.max.y
            and self.max.z >= other.min.z
            and self.min.z <= other.max.z
        )

    def translated(self, offset: Vector3) -> BoundingBox:
        """A copy of the box moved by the given offset."""
        return BoundingBox(self.min + offset, self.max + offset)