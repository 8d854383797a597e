"""Default program heights and tool definitions.

These are conservative starting points in millimetres; adjust them to the
machine, tooling and material in use.
"""

from ..core.geometry import Direction
from ..core.tool import Tool, ToolShape
from ..core.units import Units

DEFAULT_Z_SAFE = 50.0
DEFAULT_Z_TOOL_CHANGE = 100.0

# CAMotics simulation resolution
DEFAULT_RESOLUTION = 0.5

DEFAULT_SPINDLE_SPEED = 10000.0
DEFAULT_FEED_RATE = 500.0


def default_tool(shape: ToolShape = ToolShape.CYLINDRICAL) -> Tool:
    """A metric starter tool of the given *shape*."""
    if shape is ToolShape.CONICAL:
        return Tool.conical(
            Units.METRIC, 90.0, 16.0, Direction.CLOCKWISE,
            DEFAULT_SPINDLE_SPEED, DEFAULT_FEED_RATE,
        )
    if shape is ToolShape.BALLNOSE:
        return Tool.ballnose(
            Units.METRIC, 5.0, 2.0, Direction.CLOCKWISE,
            DEFAULT_SPINDLE_SPEED, DEFAULT_FEED_RATE,
        )
    return Tool.cylindrical(
        Units.METRIC, 30.0, 6.0, Direction.CLOCKWISE,
        DEFAULT_SPINDLE_SPEED, DEFAULT_FEED_RATE,
    )
