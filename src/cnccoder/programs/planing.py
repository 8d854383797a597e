"""Ready-made program: plane the top of a rectangular workpiece."""

from __future__ import annotations

from dataclasses import dataclass

from ..core import cuts
from ..core.geometry import Vector2, Vector3
from ..core.program import Program
from ..core.tool import Tool
from ..core.units import Units


@dataclass
class PlaningMeasurements:
    """Size of the surface to plane and the depths to plane it at."""

    x_length: float = 10.0
    y_length: float = 10.0
    z_start: float = 5.0
    z_end: float = -0.1
    z_max_step: float = 1.0
    units: Units = Units.METRIC

    @classmethod
    def for_units(cls, units: Units) -> PlaningMeasurements:
        """The default measurements converted from mm to *units*."""
        return cls(
            x_length=units.from_mm(10.0),
            y_length=units.from_mm(10.0),
            z_start=units.from_mm(5.0),
            z_end=units.from_mm(-0.1),
            z_max_step=units.from_mm(1.0),
            units=units,
        )


def planing(tool: Tool, measurements: PlaningMeasurements, name: str = "planing") -> Program:
    """Program planing the area ``x_length`` by ``y_length`` from ``z_start`` to ``z_end``.

    The tool runs a tool radius past every edge so the whole surface is
    cut.  The safe height is 2 mm and the tool change height 50 mm above
    ``z_start``.
    """
    units = measurements.units
    program = Program(
        units,
        measurements.z_start + units.from_mm(2.0),
        measurements.z_start + units.from_mm(50.0),
        name=name,
    )
    program.context(tool).append_cut(cuts.plane(
        Vector3(-tool.radius, -tool.radius, measurements.z_start),
        Vector2(
            measurements.x_length + tool.diameter,
            measurements.y_length + tool.diameter,
        ),
        measurements.z_end,
        measurements.z_max_step,
    ))
    return program
