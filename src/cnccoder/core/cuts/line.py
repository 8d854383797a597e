"""Straight 3D cut between two points."""

from __future__ import annotations

from dataclasses import dataclass

from ...gcode.gcode_writer import fmt
from ..geometry import Bounds, Vector3
from ..instructions import G0, G1, Comment, Empty, Instruction
from .utils import CutContext


@dataclass(frozen=True)
class Line:
    from_point: Vector3
    to_point: Vector3

    def bounds(self) -> Bounds:
        a, b = self.from_point, self.to_point
        return Bounds(
            Vector3(min(a.x, b.x), min(a.y, b.y), min(a.z, b.z)),
            Vector3(max(a.x, b.x), max(a.y, b.y), max(a.z, b.z)),
        )

    def to_instructions(self, context: CutContext) -> list[Instruction]:
        a, b = self.from_point, self.to_point
        return [
            Empty(),
            Comment(
                f"Cut line from: x = {fmt(a.x)}, y = {fmt(a.y)}, z = {fmt(a.z)}, "
                f"to:  x = {fmt(b.x)}, y = {fmt(b.y)}, z = {fmt(b.z)}"
            ),
            G0(z=context.z_safe),
            G0(x=a.x, y=a.y),
            G1(z=a.z, f=context.tool.feed_rate),
            G1(x=b.x, y=b.y, z=b.z),
            G0(z=context.z_safe),
        ]
