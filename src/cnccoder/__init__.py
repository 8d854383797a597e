"""cnccoder: compile declarative CNC cuts into G-code programs."""

from .core import cuts
from .core.cuts import Segment
from .core.errors import CncCoderError, InvalidGeometryError, MergeError, SafetyError
from .core.geometry import Axis, Bounds, Direction, ToolPathCompensation, Vector2, Vector3
from .core.operation import Context, Operation
from .core.program import Program, ToolContext
from .core.tool import Tool, ToolShape
from .core.tool_ordering import ToolOrdering
from .core.units import Units
from .export.filesystem import write_project

__version__ = "0.1.0"

__all__ = [
    "cuts", "Segment",
    "CncCoderError", "InvalidGeometryError", "MergeError", "SafetyError",
    "Axis", "Bounds", "Direction", "ToolPathCompensation", "Vector2", "Vector3",
    "Context", "Operation", "Program", "ToolContext",
    "Tool", "ToolShape", "ToolOrdering", "Units", "write_project",
]
