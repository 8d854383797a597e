"""Circular holes: spiral bores and straight drills."""

from __future__ import annotations

import math
from dataclasses import dataclass

from ...gcode.gcode_writer import fmt
from ..errors import InvalidGeometryError
from ..geometry import Bounds, ToolPathCompensation, Vector3
from ..instructions import G0, G1, G2, Comment, Empty, Instruction
from .utils import CutContext, check_step, layer_count

# Cut radii below this are drilled straight down
DRILL_THRESHOLD = 0.001

# Radius reduction of the last pass so it does not retrace the entry mark
FINISHING_OFFSET = 0.001


@dataclass(frozen=True)
class Circle:
    """Hole of ``radius`` centred on ``start_point``, cut down to ``end_z``.

    The cut radius is the declared radius adjusted by the tool radius
    according to ``compensation``.  A cut radius of (almost) zero turns
    the circle into a drill.
    """
    start_point: Vector3
    end_z: float
    radius: float
    max_step_z: float
    compensation: ToolPathCompensation = ToolPathCompensation.NONE

    def cut_radius(self, tool_radius: float) -> float:
        if self.compensation is ToolPathCompensation.INNER:
            return self.radius - tool_radius
        if self.compensation is ToolPathCompensation.OUTER:
            return self.radius + tool_radius
        return self.radius

    def bounds(self) -> Bounds:
        c = self.start_point
        return Bounds(
            Vector3(c.x - self.radius, c.y - self.radius, self.end_z),
            Vector3(c.x + self.radius, c.y + self.radius, c.z),
        )

    def to_instructions(self, context: CutContext) -> list[Instruction]:
        tool = context.tool
        r = self.cut_radius(tool.radius)
        c = self.start_point

        if 0.0 <= r < DRILL_THRESHOLD:
            return [
                Empty(),
                Comment(f"Drill hole at: x = {fmt(c.x)}, y = {fmt(c.y)}"),
                G0(z=context.z_safe),
                G0(x=c.x, y=c.y),
                G1(z=self.end_z, f=tool.feed_rate),
                G0(z=context.z_safe),
            ]

        if r < 0.0:
            label = context.units.label()
            raise InvalidGeometryError(
                f"Unable to cut circle, tool is {fmt(abs(r) * 2)} {label} too wide "
                f"(tool diameter is {fmt(tool.diameter)} {label})"
            )

        step = check_step(self.max_step_z)
        x = c.x - r

        instructions: list[Instruction] = [
            Empty(),
            Comment(f"Cut hole at: x = {fmt(c.x)}, y = {fmt(c.y)}"),
            G0(z=context.z_safe),
            G0(x=x, y=c.y),
            G1(z=c.z, f=tool.feed_rate),
        ]

        # Spiral down one full turn per layer
        for index in range(layer_count(c.z - self.end_z, step)):
            z = max(c.z - index * step, self.end_z)
            instructions.append(G2(x=x, z=z, i=r))

        instructions += [
            G2(x=x, z=self.end_z, i=r),
            G2(x=x, z=self.end_z, i=r - FINISHING_OFFSET),
            G0(z=context.z_safe),
        ]
        return instructions
