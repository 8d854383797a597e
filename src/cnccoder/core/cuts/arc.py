"""Single arc or helix move between two points."""

from __future__ import annotations

from dataclasses import dataclass

from ...gcode.gcode_writer import fmt
from ..geometry import Axis, Bounds, Direction, Vector3
from ..instructions import G0, G1, G2, G3, G17, Comment, Empty, Instruction, plane_for_axis
from .utils import CutContext, arc_bounds, validate_arc


@dataclass(frozen=True)
class Arc:
    """Arc from ``from_point`` to ``to_point`` turning around ``center``.

    ``axis`` is the axis the arc turns around; ``Axis.Z`` gives a
    conventional top-down arc.  Both end points must lie at the same
    distance from the center.
    """
    from_point: Vector3
    to_point: Vector3
    center: Vector3
    axis: Axis = Axis.Z
    direction: Direction = Direction.CLOCKWISE

    def radius(self) -> float:
        return max(
            self.from_point.distance_to(self.center),
            self.to_point.distance_to(self.center),
        )

    def bounds(self) -> Bounds:
        return arc_bounds(self.from_point, self.to_point, self.center, self.axis)

    def to_instructions(self, context: CutContext) -> list[Instruction]:
        validate_arc(self.from_point, self.to_point, self.center, context.units)

        start, end = self.from_point, self.to_point
        feed = context.tool.feed_rate
        offset = self.center - start
        move = G2 if self.direction is Direction.CLOCKWISE else G3

        return [
            Empty(),
            Comment(
                f"Cut arc {self.direction} at axis {self.axis}, "
                f"from: x = {fmt(start.x)}, y = {fmt(start.y)}, z = {fmt(start.z)}, "
                f"to:  x = {fmt(end.x)}, y = {fmt(end.y)}, z = {fmt(end.z)}"
            ),
            G0(z=context.z_safe),
            G0(x=start.x, y=start.y),
            G1(z=start.z, f=feed),
            plane_for_axis(self.axis),
            move(x=end.x, y=end.y, z=end.z, i=offset.x, j=offset.y, k=offset.z, f=feed),
            G17(),
            G0(z=context.z_safe),
        ]
