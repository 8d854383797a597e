"""Cutting tool definitions.

A :class:`Tool` is used as the key that groups cuts into one tool change
block, so equality and hashing compare the exact bit pattern of every float
field.  Two tools whose feed rates differ by 1e-9 are different tools and
get separate tool changes; declare a tool once and reuse the instance when
cuts should share a tool change.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, fields
from enum import Enum
from typing import Optional

from ..gcode.gcode_writer import fmt
from .geometry import Direction
from .units import Units


class ToolShape(Enum):
    CYLINDRICAL = "cylindrical"
    BALLNOSE = "ballnose"
    CONICAL = "conical"


@dataclass(frozen=True, eq=False)
class Tool:
    """A cutting tool definition.

    Measurements are in ``units``; ``feed_rate`` is units per minute and
    ``spindle_speed`` is rpm.  ``angle`` is only set for conical tools, whose
    ``length`` is derived from the angle and diameter.
    """
    shape: ToolShape
    units: Units
    length: float
    diameter: float
    direction: Direction = Direction.CLOCKWISE
    spindle_speed: float = 10000.0
    feed_rate: float = 500.0
    angle: Optional[float] = None

    @classmethod
    def cylindrical(
        cls,
        units: Units,
        length: float,
        diameter: float,
        direction: Direction,
        spindle_speed: float,
        feed_rate: float,
    ) -> Tool:
        return cls(ToolShape.CYLINDRICAL, units, length, diameter,
                   direction, spindle_speed, feed_rate)

    @classmethod
    def ballnose(
        cls,
        units: Units,
        length: float,
        diameter: float,
        direction: Direction,
        spindle_speed: float,
        feed_rate: float,
    ) -> Tool:
        return cls(ToolShape.BALLNOSE, units, length, diameter,
                   direction, spindle_speed, feed_rate)

    @classmethod
    def conical(
        cls,
        units: Units,
        angle: float,
        diameter: float,
        direction: Direction,
        spindle_speed: float,
        feed_rate: float,
    ) -> Tool:
        """Conical (v-bit) tool; *angle* is the full tip angle in degrees."""
        length = (diameter / 2.0) / math.tan(math.radians(angle) / 2.0)
        return cls(ToolShape.CONICAL, units, length, diameter,
                   direction, spindle_speed, feed_rate, angle)

    @property
    def radius(self) -> float:
        return self.diameter / 2.0

    def _key(self) -> tuple:
        key = []
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, (int, float)) and not isinstance(value, bool):
                value = float(value).hex()
            key.append(value)
        return tuple(key)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tool):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __str__(self) -> str:
        u = self.units.symbol
        parts = [f"type = {self.shape.value.capitalize()}"]
        if self.angle is not None:
            parts.append(f"angle = {fmt(self.angle)}°")
        parts += [
            f"diameter = {fmt(self.diameter)}{u}",
            f"length = {fmt(self.length)}{u}",
            f"direction = {self.direction}",
            f"spindle_speed = {fmt(self.spindle_speed)} rpm",
            f"feed_rate = {fmt(self.feed_rate)}{u}/min",
        ]
        return ", ".join(parts)
