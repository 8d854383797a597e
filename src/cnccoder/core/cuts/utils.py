"""Helpers shared across cut kinds."""

from __future__ import annotations

import math
from typing import Callable, Protocol

from shapely.geometry import Point

from ...gcode.gcode_writer import fmt
from ..errors import InvalidGeometryError
from ..geometry import Axis, Bounds, Vector2, Vector3
from ..tool import Tool
from ..units import Units

# Tolerance on the from/center and to/center distances of an arc
ARC_TOLERANCE = 1e-4


class CutContext(Protocol):
    """What a cut needs to know about where it is executed."""

    @property
    def tool(self) -> Tool: ...

    @property
    def units(self) -> Units: ...

    @property
    def z_safe(self) -> float: ...

    @property
    def z_tool_change(self) -> float: ...


def check_step(max_step_z: float) -> float:
    """Return ``|max_step_z|``, refusing a zero step."""
    step = abs(max_step_z)
    if step == 0.0:
        raise InvalidGeometryError("max_step_z must not be zero")
    return step


def layer_count(depth: float, step: float,
                rounding: Callable[[float], float] = math.floor) -> int:
    """Number of full *step* layers in *depth*, never negative."""
    return max(int(rounding(depth / step)), 0)


def validate_arc(start: Vector3, end: Vector3, center: Vector3, units: Units) -> None:
    """Raise if *start* and *end* are not on the same circle around *center*."""
    from_distance = start.distance_to(center)
    to_distance = end.distance_to(center)
    if abs(from_distance - to_distance) > ARC_TOLERANCE:
        label = units.label()
        raise InvalidGeometryError(
            f"Arc distances from/center ({fmt(from_distance)} {label}) and "
            f"to/center ({fmt(to_distance)} {label}) must be equal"
        )


def in_plane(point: Vector3, axis: Axis) -> tuple[float, float]:
    """Project *point* onto the plane normal to *axis*."""
    if axis is Axis.X:
        return (point.y, point.z)
    if axis is Axis.Y:
        return (point.x, point.z)
    return (point.x, point.y)


def arc_bounds(start: Vector3, end: Vector3, center: Vector3, axis: Axis) -> Bounds:
    """Bounds of an arc approximated by its full circle.

    The circle of the center is taken on the two in-plane axes and the
    start/end span on the axis of rotation.
    """
    radius = start.distance_to(center)
    footprint = Point(in_plane(center, axis))
    if radius > 0:
        footprint = footprint.buffer(radius)
    xmin, ymin, xmax, ymax = footprint.bounds
    lo = min(getattr(start, axis.value.lower()), getattr(end, axis.value.lower()))
    hi = max(getattr(start, axis.value.lower()), getattr(end, axis.value.lower()))
    if axis is Axis.X:
        return Bounds(Vector3(lo, xmin, ymin), Vector3(hi, xmax, ymax))
    if axis is Axis.Y:
        return Bounds(Vector3(xmin, lo, ymin), Vector3(xmax, hi, ymax))
    return Bounds(Vector3(xmin, ymin, lo), Vector3(xmax, ymax, hi))


def compensate(start: Vector3, size: Vector2, offset: float) -> tuple[Vector3, Vector2]:
    """Move *start* by ``+offset`` on X/Y and shrink *size* by twice that."""
    return start.add_x(offset).add_y(offset), size.add_x(-2 * offset).add_y(-2 * offset)
