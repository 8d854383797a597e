"""Filled rectangular areas: planing and pockets."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from ...gcode.gcode_writer import fmt
from ..geometry import Bounds, ToolPathCompensation, Vector2, Vector3
from ..instructions import G0, G1, Comment, Empty, Instruction
from .frame import check_tool_fits, compensated
from .utils import CutContext, check_step, layer_count

# Raster pass spacing as a fraction of the tool radius, leaves ~10% overlap
PASS_SPACING = 1.8

# Clearance above the cut floor when returning to the start corner
LIFT = 0.5


@dataclass(frozen=True)
class Area:
    """Rectangle cleared layer by layer with a back-and-forth raster.

    ``end_z_stop`` is the depth reached on the far X side of the area; when
    it differs from ``end_z`` the floor is sloped.  It defaults to
    ``end_z`` (a flat floor).
    """
    start_point: Vector3
    size: Vector2
    end_z: float
    max_step_z: float
    compensation: ToolPathCompensation = ToolPathCompensation.NONE
    end_z_stop: Optional[float] = None

    @property
    def stop_z(self) -> float:
        return self.end_z if self.end_z_stop is None else self.end_z_stop

    def bounds(self) -> Bounds:
        s = self.start_point
        return Bounds(
            Vector3(s.x, s.y, min(self.end_z, self.stop_z)),
            Vector3(s.x + self.size.x, s.y + self.size.y, s.z),
        )

    def to_instructions(self, context: CutContext) -> list[Instruction]:
        check_tool_fits(self.size, context, "plane area")
        step = check_step(self.max_step_z)
        tool_radius = context.tool.radius
        start, size = compensated(self.start_point, self.size, self.compensation, tool_radius)
        z_safe = context.z_safe

        instructions: list[Instruction] = [
            Empty(),
            Comment(f"Do planing at: x = {fmt(start.x)}, y = {fmt(start.y)}, size = {size}"),
            G0(z=z_safe),
            G0(x=start.x, y=start.y),
            G1(z=start.z, f=context.tool.feed_rate),
        ]

        depth = max(abs(start.z - self.end_z), abs(start.z - self.stop_z))
        layers = layer_count(depth, step, rounding=math.ceil)

        for index in range(1, layers):
            level = start.z - index * step
            instructions += self._layer(
                start, size,
                min(max(level, self.end_z), z_safe),
                min(max(level, self.stop_z), z_safe),
                tool_radius,
            )

        instructions += self._layer(
            start, size, min(self.end_z, z_safe), min(self.stop_z, z_safe), tool_radius
        )
        instructions.append(G0(z=z_safe))
        return instructions

    @staticmethod
    def _layer(start: Vector3, size: Vector2, end_z: float, stop_z: float,
               tool_radius: float) -> list[Instruction]:
        right = start.x + size.x

        # Perimeter first, then the raster inside it
        instructions: list[Instruction] = [
            G1(x=right, z=stop_z),
            G1(y=start.y + size.y),
            G1(x=start.x, z=end_z),
            G1(y=start.y),
        ]

        if tool_radius > 0 and size.x > tool_radius * 2:
            passes = max(math.ceil(size.y / (tool_radius * PASS_SPACING)), 1)
            pass_y = size.y / passes
            for index in range(passes):
                instructions.append(G1(y=start.y + index * pass_y))
                if index % 2 == 0:
                    instructions.append(G1(x=right, z=stop_z))
                else:
                    instructions.append(G1(x=start.x, z=end_z))

        lift = max(end_z, stop_z) + LIFT
        instructions += [
            G0(z=lift),
            G0(x=start.x, y=start.y, z=lift),
            G1(z=end_z),
        ]
        return instructions
