"""Program: the top-level container that compiles cuts into G-code.

A program keeps one :class:`~cnccoder.core.operation.Context` per tool so
that all cuts made with a tool run after a single tool change.  Cuts are
added through the :class:`ToolContext` handle returned by
:meth:`Program.context`::

    program = Program(Units.METRIC, z_safe=10.0, z_tool_change=50.0)
    tool = Tool.cylindrical(Units.METRIC, 20.0, 10.0, Direction.CLOCKWISE, 20000.0, 5000.0)
    program.context(tool).append_cut(
        cuts.plane(Vector3(0.0, 0.0, 3.0), Vector2(100.0, 100.0), 0.0, 1.0)
    )
    print(program.to_gcode())
"""

from __future__ import annotations

import getpass
import logging
import socket
import sys
import threading
from datetime import datetime
from typing import Callable, Optional, TypeVar, Union

from ..gcode.gcode_writer import fmt, scale
from ..gcode.validate import validate_program
from .cuts import Cut
from .errors import MergeError, SafetyError
from .geometry import Bounds, Direction
from .instructions import (
    G0, G4, G17, M2, M3, M4, M5, M6, PLANE_SELECTS, S,
    Comment, Empty, Instruction, Message, units_code,
)
from .operation import Context, Operation
from .tool import Tool
from .tool_ordering import ToolOrdering
from .units import Units

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Spindle settle dwell: 3 s when stopped up to 20 s at 50 000 rpm
DWELL_RPM_RANGE = (0.0, 50000.0)
DWELL_SECONDS_RANGE = (3.0, 20.0)


def _current_user() -> str:
    try:
        user = getpass.getuser()
    except (KeyError, OSError):
        user = "unknown"
    return f"{user}@{socket.gethostname()}"


class ToolContext:
    """Handle to the operations of one tool inside a program.

    Every call goes through the owning program's lock, so handles can be
    shared between threads.
    """

    def __init__(self, program: Program, tool: Tool):
        self._program = program
        self._tool = tool

    def _context(self) -> Context:
        return self._program._contexts[self._tool]

    @property
    def tool(self) -> Tool:
        return self._tool

    @property
    def units(self) -> Units:
        with self._program._lock:
            return self._context().units

    @property
    def z_safe(self) -> float:
        with self._program._lock:
            return self._context().z_safe

    @property
    def z_tool_change(self) -> float:
        with self._program._lock:
            return self._context().z_tool_change

    @property
    def operations(self) -> list[Operation]:
        with self._program._lock:
            return self._context().operations

    def append(self, operation: Union[Operation, Cut, Comment, Message, Empty]) -> None:
        with self._program._lock:
            self._context().append(operation)

    def append_cut(self, cut: Cut) -> None:
        with self._program._lock:
            self._context().append_cut(cut)

    def bounds(self) -> Bounds:
        with self._program._lock:
            return self._context().bounds()

    def to_instructions(self) -> list[Instruction]:
        with self._program._lock:
            return self._context().to_instructions()

    def merge(self, other: ToolContext) -> None:
        """Append the operations of *other*, see :meth:`Context.merge`."""
        with other._program._lock:
            source = other._context()
            snapshot = Context(
                source.units, source.tool, source.z_safe, source.z_tool_change,
                source.operations,
            )
        with self._program._lock:
            self._context().merge(snapshot)


class Program:
    """A CNC program made of per-tool contexts.

    ``created_on``, ``created_by`` and ``generator`` are only used for the
    header comments; they default to the current time, ``user@host`` and the
    command line that is running, and can be fixed for reproducible output.
    """

    def __init__(
        self,
        units: Units,
        z_safe: float,
        z_tool_change: float,
        name: str = "Untitled",
        description: str = "",
        created_on: Optional[datetime] = None,
        created_by: Optional[str] = None,
        generator: Optional[str] = None,
    ):
        self.units = units
        self.z_safe = z_safe
        self.z_tool_change = z_tool_change
        self.name = name
        self.description = description
        self.created_on = created_on if created_on is not None else datetime.now()
        self.created_by = created_by if created_by is not None else _current_user()
        self.generator = generator if generator is not None else " ".join(sys.argv)

        self._lock = threading.RLock()
        self._contexts: dict[Tool, Context] = {}
        self._ordering = ToolOrdering()

    @classmethod
    def new_empty_from(cls, program: Program) -> Program:
        """New program with the settings of *program* but none of its tools."""
        return cls(
            program.units,
            program.z_safe,
            program.z_tool_change,
            name=program.name,
            description=program.description,
            created_on=program.created_on,
            created_by=program.created_by,
            generator=program.generator,
        )

    # ------------------------------------------------------------------
    # Contexts and tools
    # ------------------------------------------------------------------

    def _ensure_context(self, tool: Tool) -> Context:
        with self._lock:
            context = self._contexts.get(tool)
            if context is None:
                context = Context(self.units, tool, self.z_safe, self.z_tool_change)
                self._contexts[tool] = context
                self._ordering.auto_ordering(tool)
                logger.debug("Created context for tool: %s", tool)
            return context

    def context(self, tool: Tool) -> ToolContext:
        """Handle for adding operations made with *tool*."""
        self._ensure_context(tool)
        return ToolContext(self, tool)

    def extend(self, tool: Tool, action: Callable[[Context], T]) -> T:
        """Run *action* on the context of *tool* while holding the lock."""
        with self._lock:
            return action(self._ensure_context(tool))

    def tool_ordering(self, tool: Tool) -> Optional[int]:
        with self._lock:
            return self._ordering.ordering(tool)

    def set_tool_ordering(self, tool: Tool, ordering: int) -> None:
        with self._lock:
            self._ordering.set_ordering(tool, ordering)

    def tools(self) -> list[Tool]:
        """Tools in the order their tool changes are made."""
        with self._lock:
            return self._ordering.tools_ordered()

    def operation_count(self) -> int:
        with self._lock:
            return sum(len(c.operations) for c in self._contexts.values())

    def bounds(self) -> Bounds:
        with self._lock:
            return Bounds.fold(
                self._contexts[tool].bounds()
                for tool in self.tools()
                if tool in self._contexts
            )

    def merge(self, other: Program) -> None:
        """Add the tools and operations of *other* to this program.

        Both travel heights become the lower of the two programs' values.
        Tool numbers are folded together in first-use order: tools new to
        this program take the next free number, and explicit numbers set on
        *other* are not carried over.

        Raises
        ------
        MergeError:
            If the programs use different units.
        """
        with other._lock:
            units = other.units
            z_safe, z_tool_change = other.z_safe, other.z_tool_change
            sources = [
                Context(c.units, c.tool, c.z_safe, c.z_tool_change, c.operations)
                for c in (other._contexts[t] for t in other.tools() if t in other._contexts)
            ]

        with self._lock:
            if self.units is not units:
                raise MergeError("Failed to merge due to mismatching units")
            self.z_safe = min(self.z_safe, z_safe)
            self.z_tool_change = min(self.z_tool_change, z_tool_change)
            for source in sources:
                self._ensure_context(source.tool).merge(source)
            logger.debug("Merged %d tool context(s) from %s", len(sources), other.name)

    # ------------------------------------------------------------------
    # Compilation
    # ------------------------------------------------------------------

    def _header(self, bounds: Bounds) -> list[Instruction]:
        u = self.units.symbol
        header: list[Instruction] = [Comment(f"Name: {self.name}")]
        if self.description:
            header.append(Comment(f"Description: {' '.join(self.description.splitlines())}"))
        header += [
            Comment(f"Created on: {self.created_on:%Y-%m-%d %H:%M:%S}"),
            Comment(f"Created by: {self.created_by}"),
            Comment(f"Generator: {self.generator}"),
        ]

        if bounds.is_empty:
            header.append(Comment("Workarea: empty"))
        else:
            size = bounds.size()
            header.append(Comment(
                f"Workarea: size_x = {fmt(size.x)}{u}, size_y = {fmt(size.y)}{u}, "
                f"size_z = {fmt(size.z)}{u}, min_x = {fmt(bounds.min.x)}{u}, "
                f"min_y = {fmt(bounds.min.y)}{u}, max_z = {fmt(bounds.max.z)}{u}, "
                f"z_safe = {fmt(self.z_safe)}{u}, z_tool_change = {fmt(self.z_tool_change)}{u}"
            ))
        return header

    def _tool_change(self, tool: Tool, context: Context) -> list[Instruction]:
        return [
            Empty(),
            Comment(f"Tool change: {tool}"),
            units_code(context.units),
            G0(z=context.z_tool_change),
            M5(),
            M6(self._ordering.ordering(tool)),
            S(tool.spindle_speed),
            M3() if tool.direction is Direction.CLOCKWISE else M4(),
            G4(scale(tool.spindle_speed, *DWELL_RPM_RANGE, *DWELL_SECONDS_RANGE)),
        ]

    def to_instructions(self) -> list[Instruction]:
        """Compile the program.

        Raises
        ------
        SafetyError:
            If the tool change height is below the safe height, or the safe
            height is below the top of the work.
        InvalidGeometryError:
            If a cut cannot be made with its tool.
        """
        with self._lock:
            result = validate_program(self)
            for issue in result.issues:
                if issue.severity == "warning":
                    logger.warning(issue.message)
            if result.has_errors:
                raise SafetyError(result.errors[0].message)

            raw = self._header(self.bounds())
            raw += [Empty(), G17(), units_code(self.units)]

            for tool in self.tools():
                context = self._contexts.get(tool)
                if context is None or not context.operations:
                    continue
                raw += self._tool_change(tool, context)
                raw += context.to_instructions()

            raw += [G0(z=self.z_tool_change), Empty(), M2()]

        instructions = deduplicate(raw)
        logger.debug(
            "Compiled %s: %d raw instructions, %d after deduplication",
            self.name, len(raw), len(instructions),
        )
        return instructions

    def to_gcode(self) -> str:
        return "\n".join(i.to_gcode() for i in self.to_instructions())


def deduplicate(instructions: list[Instruction]) -> list[Instruction]:
    """Drop lines repeating the previous line, and re-selections of the active plane."""
    result: list[Instruction] = []
    plane = None
    last = None
    for instruction in instructions:
        if isinstance(instruction, PLANE_SELECTS):
            if type(instruction) is plane:
                continue
            plane = type(instruction)

        text = instruction.to_gcode()
        if result and text == last:
            continue
        result.append(instruction)
        last = text
    return result
