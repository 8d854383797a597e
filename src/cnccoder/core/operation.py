"""Operations and the per-tool context they are collected in.

An Operation is one entry of a program: a cut, or a comment, message or
blank line passed through unchanged.  Operations made with the same tool
are grouped in a :class:`Context` so the program needs one tool change
per tool.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from .cuts import CUT_TYPES, Cut
from .errors import MergeError
from .geometry import Bounds
from .instructions import Comment, Empty, Instruction, Message
from .tool import Tool
from .units import Units

PASS_THROUGH = (Comment, Message, Empty)


@dataclass(frozen=True)
class Operation:
    """A cut, or a Comment/Message/Empty emitted as is."""

    item: Union[Cut, Comment, Message, Empty]

    def __post_init__(self):
        if not isinstance(self.item, CUT_TYPES + PASS_THROUGH):
            raise TypeError(f"Unsupported operation: {self.item!r}")

    @property
    def is_cut(self) -> bool:
        return isinstance(self.item, CUT_TYPES)

    def bounds(self) -> Bounds:
        if self.is_cut:
            return self.item.bounds()
        return Bounds.empty()

    def to_instructions(self, context: Context) -> list[Instruction]:
        if self.is_cut:
            return self.item.to_instructions(context)
        return [self.item]


@dataclass
class Context:
    """Operations made with one tool, plus the heights to travel at."""

    units: Units
    tool: Tool
    z_safe: float
    z_tool_change: float
    _operations: list[Operation] = field(default_factory=list, repr=False)

    @property
    def operations(self) -> list[Operation]:
        return list(self._operations)

    def append(self, operation: Union[Operation, Cut, Comment, Message, Empty]) -> None:
        if not isinstance(operation, Operation):
            operation = Operation(operation)
        self._operations.append(operation)

    def append_cut(self, cut: Cut) -> None:
        self.append(Operation(cut))

    def bounds(self) -> Bounds:
        return Bounds.fold(op.bounds() for op in self._operations)

    def merge(self, other: Context) -> None:
        """Append the operations of *other* and take over its heights.

        Raises
        ------
        MergeError:
            If the units or tools of the two contexts differ.
        """
        if self.units is not other.units:
            raise MergeError("Failed to merge due to mismatching units")
        if self.tool != other.tool:
            raise MergeError("Failed to merge due to mismatching tools")

        self.z_safe = other.z_safe
        self.z_tool_change = other.z_tool_change
        self._operations.extend(other._operations)

    def to_instructions(self) -> list[Instruction]:
        instructions: list[Instruction] = []
        for op in self._operations:
            instructions += op.to_instructions(self)
        return instructions
