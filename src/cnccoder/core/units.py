"""Unit system enum and conversion helpers."""

from enum import Enum


class Units(Enum):
    METRIC = "metric"
    IMPERIAL = "imperial"

    def to_mm(self, value: float) -> float:
        if self is Units.METRIC:
            return value
        return value * 25.4

    def from_mm(self, value: float) -> float:
        if self is Units.METRIC:
            return value
        return value / 25.4

    def label(self) -> str:
        return "in" if self is Units.IMPERIAL else "mm"

    @property
    def symbol(self) -> str:
        """Suffix used in human readable measurements (``4 mm``, ``1"``)."""
        return '"' if self is Units.IMPERIAL else " mm"

    @property
    def gcode_modal(self) -> str:
        """G-code modal group 6 word."""
        return "G20" if self is Units.IMPERIAL else "G21"

    def default_z_end(self) -> float:
        """Default bottom depth for a cut, 0.1 mm expressed in this unit."""
        return self.from_mm(0.1)

    def default_z_max_step(self) -> float:
        """Default maximum depth per pass, 1 mm expressed in this unit."""
        return self.from_mm(1.0)
