"""Shared geometric value types: points, bounds, axes and directions.

Coordinates are stored in the program's native units (mm or inch).  Z is
vertical; larger Z values are further away from the workpiece.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Union

import numpy as np

from ..gcode.gcode_writer import fmt


class Direction(Enum):
    """Rotation direction, used for spindles and arc moves."""
    CLOCKWISE = "clockwise"
    COUNTERCLOCKWISE = "counterclockwise"

    def __str__(self) -> str:
        return self.value


class Axis(Enum):
    """Axis an arc turns around; ``Z`` is a conventional top-down arc."""
    X = "X"
    Y = "Y"
    Z = "Z"

    def __str__(self) -> str:
        return self.value


class ToolPathCompensation(Enum):
    """How a declared path is offset by the radius of the tool.

    ``NONE`` cuts on the declared path, ``INNER`` keeps the tool inside it
    (holes, pockets) and ``OUTER`` keeps the tool outside it (cutting out
    pieces of an exact external size).
    """
    NONE = "none"
    INNER = "inner"
    OUTER = "outer"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Vector2:
    """A point in the XY plane."""
    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vector2) -> Vector2:
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector2) -> Vector2:
        return Vector2(self.x - other.x, self.y - other.y)

    def __mul__(self, other: Union[Vector2, float]) -> Vector2:
        if isinstance(other, Vector2):
            return Vector2(self.x * other.x, self.y * other.y)
        return Vector2(self.x * other, self.y * other)

    def distance_to(self, other: Vector2) -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def angle(self) -> float:
        """Polar angle in radians, clockwise from the positive Y axis."""
        return math.atan2(-self.x, -self.y) + math.pi

    def angle_degrees(self) -> float:
        return math.degrees(self.angle())

    def add_x(self, value: float) -> Vector2:
        return Vector2(self.x + value, self.y)

    def add_y(self, value: float) -> Vector2:
        return Vector2(self.x, self.y + value)

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)

    def __str__(self) -> str:
        return f"{{x: {fmt(self.x)}, y: {fmt(self.y)}}}"


@dataclass(frozen=True)
class Vector3:
    """A point in 3D space."""
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: Vector3) -> Vector3:
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector3) -> Vector3:
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, other: Union[Vector3, float]) -> Vector3:
        if isinstance(other, Vector3):
            return Vector3(self.x * other.x, self.y * other.y, self.z * other.z)
        return Vector3(self.x * other, self.y * other, self.z * other)

    def distance_to(self, other: Vector3) -> float:
        return math.sqrt(
            (self.x - other.x) ** 2
            + (self.y - other.y) ** 2
            + (self.z - other.z) ** 2
        )

    def xy(self) -> Vector2:
        return Vector2(self.x, self.y)

    def xz(self) -> Vector2:
        return Vector2(self.x, self.z)

    def yz(self) -> Vector2:
        return Vector2(self.y, self.z)

    def add_x(self, value: float) -> Vector3:
        return Vector3(self.x + value, self.y, self.z)

    def add_y(self, value: float) -> Vector3:
        return Vector3(self.x, self.y + value, self.z)

    def add_z(self, value: float) -> Vector3:
        return Vector3(self.x, self.y, self.z + value)

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def __str__(self) -> str:
        return f"{{x: {fmt(self.x)}, y: {fmt(self.y)}, z: {fmt(self.z)}}}"


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned box described by a min and a max corner.

    An empty box has ``+inf`` as min and ``-inf`` as max on every axis so
    that folding with :meth:`union` needs no first-element special case.
    """
    min: Vector3
    max: Vector3

    @classmethod
    def empty(cls) -> Bounds:
        return cls(
            Vector3(math.inf, math.inf, math.inf),
            Vector3(-math.inf, -math.inf, -math.inf),
        )

    @classmethod
    def from_size(cls, x: float, y: float, z: float) -> Bounds:
        """Box from the origin to ``(x, y, z)``."""
        return cls(Vector3(), Vector3(x, y, z))

    @classmethod
    def from_array(cls, array: np.ndarray) -> Bounds:
        """Inverse of :meth:`as_array`."""
        (xmin, ymin, zmin), (xmax, ymax, zmax) = np.asarray(array, dtype=float)
        return cls(
            Vector3(float(xmin), float(ymin), float(zmin)),
            Vector3(float(xmax), float(ymax), float(zmax)),
        )

    @classmethod
    def fold(cls, boxes: Iterable[Bounds]) -> Bounds:
        result = cls.empty()
        for box in boxes:
            result = result.union(box)
        return result

    def as_array(self) -> np.ndarray:
        """``[[xmin, ymin, zmin], [xmax, ymax, zmax]]``."""
        return np.array([self.min.as_tuple(), self.max.as_tuple()], dtype=float)

    @property
    def is_empty(self) -> bool:
        """True when no axis has ever been updated."""
        lo, hi = self.as_array()
        return bool(np.all(lo > hi))

    def size(self) -> Vector3:
        return self.max - self.min

    def union(self, other: Bounds) -> Bounds:
        a = self.as_array()
        b = other.as_array()
        return Bounds.from_array(np.stack([np.minimum(a[0], b[0]), np.maximum(a[1], b[1])]))
