"""Free-form profiles made of lines, arcs and waypoints."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Union

from shapely.geometry import GeometryCollection, LineString, Point

from ...gcode.gcode_writer import fmt
from ..geometry import Axis, Bounds, Direction, Vector2, Vector3
from ..instructions import G0, G1, G2, G3, G17, Comment, Empty, Instruction, plane_for_axis
from ..units import Units
from .utils import CutContext, check_step, layer_count, validate_arc


@dataclass(frozen=True)
class Line2D:
    from_point: Vector2
    to_point: Vector2


@dataclass(frozen=True)
class Arc2D:
    from_point: Vector2
    to_point: Vector2
    center: Vector2
    axis: Axis = Axis.Z
    direction: Direction = Direction.CLOCKWISE

    def radius(self) -> float:
        return max(
            self.from_point.distance_to(self.center),
            self.to_point.distance_to(self.center),
        )


# A bare Vector2 is a waypoint reached with a straight move
PathSegment = Union[Line2D, Arc2D, Vector2]


class Segment:
    """Constructors for path segments."""

    @staticmethod
    def line(from_point: Vector2, to_point: Vector2) -> Line2D:
        return Line2D(from_point, to_point)

    @staticmethod
    def arc_x(from_point: Vector2, to_point: Vector2, center: Vector2,
              direction: Direction) -> Arc2D:
        return Arc2D(from_point, to_point, center, Axis.X, direction)

    @staticmethod
    def arc_y(from_point: Vector2, to_point: Vector2, center: Vector2,
              direction: Direction) -> Arc2D:
        return Arc2D(from_point, to_point, center, Axis.Y, direction)

    @staticmethod
    def arc_z(from_point: Vector2, to_point: Vector2, center: Vector2,
              direction: Direction) -> Arc2D:
        return Arc2D(from_point, to_point, center, Axis.Z, direction)

    @staticmethod
    def point(x: float, y: float) -> Vector2:
        return Vector2(x, y)

    @staticmethod
    def points(points: Sequence[Vector2]) -> list[Vector2]:
        return list(points)


def _segment_start(segment: PathSegment) -> Vector2:
    return segment if isinstance(segment, Vector2) else segment.from_point


def _segment_end(segment: PathSegment) -> Vector2:
    return segment if isinstance(segment, Vector2) else segment.to_point


def _footprint(segment: PathSegment):
    if isinstance(segment, Arc2D):
        center = Point(segment.center.as_tuple())
        radius = segment.radius()
        return center.buffer(radius) if radius > 0 else center
    if isinstance(segment, Line2D):
        return LineString([segment.from_point.as_tuple(), segment.to_point.as_tuple()])
    return Point(segment.as_tuple())


@dataclass(frozen=True)
class Path:
    """Profile following ``segments`` once per layer while descending.

    Segment coordinates are relative to ``start_point``.  Within a layer
    the Z descent is shared between segments in proportion to their
    length, arcs counting their chord.
    """
    start_point: Vector3
    segments: tuple[PathSegment, ...]
    end_z: float
    max_step_z: float

    def __post_init__(self):
        object.__setattr__(self, "segments", tuple(self.segments))

    def bounds(self) -> Bounds:
        if not self.segments:
            return Bounds.empty()
        xmin, ymin, xmax, ymax = GeometryCollection(
            [_footprint(s) for s in self.segments]
        ).bounds
        s = self.start_point
        return Bounds(
            Vector3(s.x + xmin, s.y + ymin, min(s.z, self.end_z)),
            Vector3(s.x + xmax, s.y + ymax, max(s.z, self.end_z)),
        )

    def distances(self) -> list[float]:
        """Length of every segment measured from where the previous one ended.

        The first segment is measured from its own start point, not from the
        path origin ``(0, 0)``, so a path that begins away from the origin
        does not spend part of its descent on a move it never makes.
        """
        result = []
        last = _segment_start(self.segments[0]) if self.segments else None
        for segment in self.segments:
            end = _segment_end(segment)
            result.append(last.distance_to(end))
            last = end
        return result

    def to_instructions(self, context: CutContext) -> list[Instruction]:
        if not self.segments:
            return []

        step = check_step(self.max_step_z)
        s = self.start_point
        first = _segment_start(self.segments[0])

        instructions: list[Instruction] = [
            Empty(),
            Comment(f"Cut path at: x = {fmt(s.x)}, y = {fmt(s.y)}"),
            G0(z=context.z_safe),
            G0(x=s.x + first.x, y=s.y + first.y),
            G1(z=s.z, f=context.tool.feed_rate),
        ]

        distances = self.distances()
        layer_start = s.z
        for _ in range(layer_count(s.z - self.end_z, step)):
            layer_end = layer_start - step
            instructions += self._layer(context.units, layer_start, layer_end, distances)
            layer_start = layer_end

        instructions += self._layer(context.units, self.end_z, self.end_z, distances)
        instructions.append(G0(z=context.z_safe))
        return instructions

    def _layer(self, units: Units, start_z: float, end_z: float,
               distances: list[float]) -> list[Instruction]:
        total = sum(distances)
        depth = start_z - end_z
        last_index = len(self.segments) - 1
        s = self.start_point

        instructions: list[Instruction] = []
        from_z = start_z
        for index, segment in enumerate(self.segments):
            if index == last_index:
                to_z = end_z
            elif total > 0:
                to_z = from_z - distances[index] / total * depth
            else:
                to_z = from_z

            if isinstance(segment, Arc2D):
                validate_arc(
                    Vector3(segment.from_point.x, segment.from_point.y),
                    Vector3(segment.to_point.x, segment.to_point.y),
                    Vector3(segment.center.x, segment.center.y),
                    units,
                )
                move = G2 if segment.direction is Direction.CLOCKWISE else G3
                offset = segment.center - segment.from_point
                instructions += [
                    G1(x=s.x + segment.from_point.x, y=s.y + segment.from_point.y, z=from_z),
                    plane_for_axis(segment.axis),
                    move(
                        x=s.x + segment.to_point.x,
                        y=s.y + segment.to_point.y,
                        z=to_z,
                        i=offset.x,
                        j=offset.y,
                    ),
                    G17(),
                ]
            elif isinstance(segment, Line2D):
                instructions += [
                    G1(x=s.x + segment.from_point.x, y=s.y + segment.from_point.y, z=from_z),
                    G1(x=s.x + segment.to_point.x, y=s.y + segment.to_point.y, z=to_z),
                ]
            else:
                instructions.append(G1(x=s.x + segment.x, y=s.y + segment.y, z=to_z))

            from_z = to_z
        return instructions
