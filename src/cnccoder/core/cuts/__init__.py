"""Cut kinds and their convenience constructors.

Each cut is an immutable geometry record with ``bounds()`` and
``to_instructions(context)``.  The constructors below pick the tool path
compensation that matches the usual intent of the operation.
"""

from __future__ import annotations

import warnings
from typing import Sequence, Union

from ..geometry import Axis, Direction, ToolPathCompensation, Vector2, Vector3
from .arc import Arc
from .area import Area
from .circle import Circle
from .frame import Frame
from .line import Line
from .path import Arc2D, Line2D, Path, PathSegment, Segment

Cut = Union[Arc, Circle, Frame, Area, Line, Path]

CUT_TYPES = (Arc, Circle, Frame, Area, Line, Path)


def circle(start: Vector3, end_z: float, radius: float, max_step_z: float) -> Circle:
    """Circle cut with its center on the declared radius."""
    return Circle(start, end_z, radius, max_step_z, ToolPathCompensation.NONE)


def circle_inner(start: Vector3, end_z: float, radius: float, max_step_z: float) -> Circle:
    """Hole of exactly ``radius``; the tool stays inside."""
    return Circle(start, end_z, radius, max_step_z, ToolPathCompensation.INNER)


def circle_outer(start: Vector3, end_z: float, radius: float, max_step_z: float) -> Circle:
    """Round boss of exactly ``radius``; the tool stays outside."""
    return Circle(start, end_z, radius, max_step_z, ToolPathCompensation.OUTER)


def drill(start: Vector3, end_z: float) -> Circle:
    return Circle(start, end_z, 0.0, 0.0, ToolPathCompensation.NONE)


def arc(from_point: Vector3, to_point: Vector3, center: Vector3, axis: Axis,
        direction: Direction) -> Arc:
    return Arc(from_point, to_point, center, axis, direction)


def line(from_point: Vector3, to_point: Vector3) -> Line:
    return Line(from_point, to_point)


def path(start: Vector3, segments: Sequence[PathSegment], end_z: float,
         max_step_z: float) -> Path:
    return Path(start, tuple(segments), end_z, max_step_z)


def frame(start: Vector3, size: Vector2, end_z: float, max_step_z: float) -> Frame:
    return Frame(start, size, end_z, max_step_z, ToolPathCompensation.NONE)


def frame_inner(start: Vector3, size: Vector2, end_z: float, max_step_z: float) -> Frame:
    return Frame(start, size, end_z, max_step_z, ToolPathCompensation.INNER)


def frame_outer(start: Vector3, size: Vector2, end_z: float, max_step_z: float) -> Frame:
    return Frame(start, size, end_z, max_step_z, ToolPathCompensation.OUTER)


def plane(start: Vector3, size: Vector2, end_z: float, max_step_z: float) -> Area:
    """Face the whole area, running the tool past its edges."""
    return Area(start, size, end_z, max_step_z, ToolPathCompensation.OUTER)


def pocket(start: Vector3, size: Vector2, end_z: float, max_step_z: float) -> Area:
    """Clear a rectangular pocket without cutting into its walls."""
    return Area(start, size, end_z, max_step_z, ToolPathCompensation.INNER)


def plane_with_slope(start: Vector3, size: Vector2, end_z: float, end_z_stop: float,
                     max_step_z: float) -> Area:
    """Plane with a floor sloping from ``end_z`` to ``end_z_stop`` along X.

    .. deprecated:: 0.1.0
        Only slopes along X; use :func:`plane` for flat floors.
    """
    warnings.warn(
        "plane_with_slope only slopes along X and will be removed in a future release",
        DeprecationWarning,
        stacklevel=2,
    )
    return Area(start, size, end_z, max_step_z, ToolPathCompensation.OUTER, end_z_stop)


__all__ = [
    "Arc", "Area", "Circle", "Frame", "Line", "Path",
    "Arc2D", "Line2D", "PathSegment", "Segment",
    "Cut", "CUT_TYPES",
    "circle", "circle_inner", "circle_outer", "drill", "arc", "line", "path",
    "frame", "frame_inner", "frame_outer", "plane", "pocket", "plane_with_slope",
]
