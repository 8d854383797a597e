"""Program validation and sanity checks.

Checks a program's travel heights against the work it contains before any
G-code is generated.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .gcode_writer import fmt

if TYPE_CHECKING:
    from ..core.program import Program


@dataclass
class ValidationIssue:
    """A single validation problem found in the program."""

    severity: str  # "error" or "warning"
    message: str


@dataclass
class ValidationResult:
    """Result of validating a program."""

    issues: list[ValidationIssue] = field(default_factory=list)

    @property
    def errors(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == "error"]

    @property
    def has_errors(self) -> bool:
        return any(i.severity == "error" for i in self.issues)

    @property
    def has_warnings(self) -> bool:
        return any(i.severity == "warning" for i in self.issues)

    @property
    def is_ok(self) -> bool:
        return len(self.issues) == 0


def validate_program(program: Program) -> ValidationResult:
    """Check *program* for unsafe heights and suspicious settings.

    Checks performed:
    - Tool change height is not below the safe height
    - Safe height is above everything that will be cut
    - Tools have a positive feed rate and spindle speed
    - The program contains at least one operation
    """
    result = ValidationResult()
    label = program.units.label()

    if program.z_tool_change < program.z_safe:
        result.issues.append(ValidationIssue(
            "error",
            f"z_tool_change ({fmt(program.z_tool_change)} {label}) must be "
            f"greater than or equal to z_safe ({fmt(program.z_safe)} {label})",
        ))

    bounds = program.bounds()
    if not bounds.is_empty and program.z_safe < bounds.max.z:
        result.issues.append(ValidationIssue(
            "error",
            f"z_safe ({fmt(program.z_safe)} {label}) must be greater than or "
            f"equal to the highest point of the work ({fmt(bounds.max.z)} {label})",
        ))

    for tool in program.tools():
        if tool.feed_rate <= 0:
            result.issues.append(ValidationIssue(
                "warning", f"Feed rate {fmt(tool.feed_rate)} is not positive for tool: {tool}",
            ))
        if tool.spindle_speed <= 0:
            result.issues.append(ValidationIssue(
                "warning", f"Spindle speed {fmt(tool.spindle_speed)} is not positive for tool: {tool}",
            ))

    if program.operation_count() == 0:
        result.issues.append(ValidationIssue(
            "warning",
            "Program has no operations, only a header will be generated",
        ))

    return result
