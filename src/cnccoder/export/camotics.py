"""CAMotics simulation project files.

A ``.camotics`` project lists the tools, the workpiece box and the G-code
files to simulate, so a compiled program can be previewed before cutting.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Optional, Sequence, Union

from ..core.geometry import Bounds, Vector3
from ..core.program import Program
from ..core.tool import Tool, ToolShape
from ..core.units import Units


class ResolutionMode(Enum):
    HIGH = "high"
    LOW = "low"
    MANUAL = "manual"


class CamoticsToolShape(Enum):
    CYLINDRICAL = "cylindrical"
    BALLNOSE = "ballnose"
    CONICAL = "conical"

    @classmethod
    def from_shape(cls, shape: ToolShape) -> CamoticsToolShape:
        return cls(shape.value)


@dataclass
class CamoticsTool:
    units: Units
    length: float
    diameter: float
    number: int
    shape: CamoticsToolShape
    angle: Optional[float] = None

    @classmethod
    def from_tool(cls, tool: Tool, number: int) -> CamoticsTool:
        return cls(
            units=tool.units,
            length=tool.length,
            diameter=tool.diameter,
            number=number,
            shape=CamoticsToolShape.from_shape(tool.shape),
            angle=tool.angle if tool.shape is ToolShape.CONICAL else None,
        )

    def to_dict(self) -> dict:
        data = {"units": self.units.value}
        if self.angle is not None:
            data["angle"] = self.angle
        data.update({
            "length": self.length,
            "diameter": self.diameter,
            "number": self.number,
            "shape": self.shape.value,
        })
        return data


@dataclass
class Workpiece:
    automatic: bool = False
    margin: float = 0.0
    bounds: Bounds = field(default_factory=lambda: Bounds(Vector3(), Vector3()))

    def to_dict(self) -> dict:
        lo, hi = self.bounds.as_array().tolist()
        return {
            "automatic": self.automatic,
            "margin": self.margin,
            "bounds": {"min": lo, "max": hi},
        }


@dataclass
class Camotics:
    """A CAMotics project.  ``name`` is only used for the G-code file name."""

    name: str
    units: Units
    resolution_mode: ResolutionMode
    resolution: float
    tools: dict[int, CamoticsTool]
    workpiece: Workpiece
    files: list[str]

    @classmethod
    def new(
        cls,
        name: str,
        tools: Union[Mapping[int, Tool], Sequence[Tool]],
        bounds: Bounds,
        resolution: float,
        units: Units = Units.METRIC,
    ) -> Camotics:
        """Project for *tools*.

        *tools* maps tool numbers to tools; a plain sequence is numbered
        from 1 in the order given.
        """
        if not isinstance(tools, Mapping):
            tools = dict(enumerate(tools, start=1))
        if bounds.is_empty:
            bounds = Bounds(Vector3(), Vector3())
        return cls(
            name=name,
            units=units,
            resolution_mode=ResolutionMode.MANUAL,
            resolution=resolution,
            tools={n: CamoticsTool.from_tool(t, n) for n, t in sorted(tools.items())},
            workpiece=Workpiece(automatic=False, margin=0.0, bounds=bounds),
            files=[f"{name}.gcode"],
        )

    @classmethod
    def from_program(cls, program: Program, resolution: float) -> Camotics:
        """Project for *program*, with tools keyed by their ``T`` number in the G-code."""
        numbered = {program.tool_ordering(t): t for t in program.tools()}
        return cls.new(program.name, numbered, program.bounds(), resolution, program.units)

    def to_dict(self) -> dict:
        return {
            "units": self.units.value,
            "resolution-mode": self.resolution_mode.value,
            "resolution": self.resolution,
            "tools": {str(n): tool.to_dict() for n, tool in self.tools.items()},
            "workpiece": self.workpiece.to_dict(),
            "files": list(self.files),
        }

    def to_json_string(self) -> str:
        return json.dumps(self.to_dict(), indent=2)
