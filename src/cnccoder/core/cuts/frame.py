"""Rectangular perimeter contour."""

from __future__ import annotations

from dataclasses import dataclass

from ...gcode.gcode_writer import fmt
from ..errors import InvalidGeometryError
from ..geometry import Bounds, ToolPathCompensation, Vector2, Vector3
from ..instructions import G0, G1, Comment, Empty, Instruction
from .utils import CutContext, check_step, compensate, layer_count


def check_tool_fits(size: Vector2, context: CutContext, action: str) -> None:
    """Raise when the tool is wider than *size* on X or Y."""
    diameter = context.tool.diameter
    label = context.units.label()
    for axis, length in (("x", size.x), ("y", size.y)):
        if length < diameter:
            raise InvalidGeometryError(
                f"Unable to {action}, tool is {fmt(diameter - length)} {label} "
                f"wider than {axis} dimension (tool diameter is {fmt(diameter)} {label})"
            )


def compensated(start: Vector3, size: Vector2, compensation: ToolPathCompensation,
                tool_radius: float) -> tuple[Vector3, Vector2]:
    """Offset a rectangle inwards or outwards by the tool radius."""
    if compensation is ToolPathCompensation.INNER:
        return compensate(start, size, tool_radius)
    if compensation is ToolPathCompensation.OUTER:
        return compensate(start, size, -tool_radius)
    return start, size


@dataclass(frozen=True)
class Frame:
    """Rectangle outline starting at the ``start_point`` corner.

    Each layer goes once around the rectangle while Z descends in
    proportion to the length of every side, so the outline is cut as one
    continuous helix.
    """
    start_point: Vector3
    size: Vector2
    end_z: float
    max_step_z: float
    compensation: ToolPathCompensation = ToolPathCompensation.NONE

    def bounds(self) -> Bounds:
        s = self.start_point
        return Bounds(
            Vector3(s.x, s.y, self.end_z),
            Vector3(s.x + self.size.x, s.y + self.size.y, s.z),
        )

    def to_instructions(self, context: CutContext) -> list[Instruction]:
        check_tool_fits(self.size, context, "cut frame")
        step = check_step(self.max_step_z)
        start, size = compensated(
            self.start_point, self.size, self.compensation, context.tool.radius
        )

        instructions: list[Instruction] = [
            Empty(),
            Comment(f"Cut frame: x = {fmt(start.x)}, y = {fmt(start.y)}, size = {size}"),
            G0(z=context.z_safe),
            G0(x=start.x, y=start.y),
            G1(z=start.z, f=context.tool.feed_rate),
        ]

        layer_start = start.z
        for _ in range(layer_count(abs(start.z - self.end_z), step)):
            layer_end = layer_start - step
            instructions += self._layer(start, size, layer_start, layer_end)
            layer_start = layer_end

        instructions += self._layer(start, size, self.end_z, self.end_z)
        instructions += [
            G1(x=start.x + size.x),
            G0(z=context.z_safe),
            G0(x=start.x, y=start.y),
        ]
        return instructions

    @staticmethod
    def _layer(start: Vector3, size: Vector2, start_z: float, end_z: float) -> list[Instruction]:
        perimeter = (size.x + size.y) * 2.0
        delta_z = end_z - start_z
        x_step = size.x / perimeter * delta_z if perimeter else 0.0
        y_step = size.y / perimeter * delta_z if perimeter else 0.0
        return [
            G1(x=start.x + size.x, z=start_z + x_step),
            G1(y=start.y + size.y, z=start_z + x_step + y_step),
            G1(x=start.x, z=start_z + 2 * x_step + y_step),
            G1(y=start.y, z=end_z),
        ]
