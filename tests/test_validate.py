"""Tests for program validation."""

import pytest

from cnccoder.core import cuts
from cnccoder.core.geometry import Direction, Vector3
from cnccoder.core.instructions import Comment
from cnccoder.core.program import Program
from cnccoder.core.tool import Tool
from cnccoder.core.units import Units
from cnccoder.gcode.validate import ValidationIssue, ValidationResult, validate_program


def _line(z: float = 1.0):
    return cuts.line(Vector3(0.0, 0.0, z), Vector3(5.0, 0.0, 0.0))


class TestValidation:
    def test_valid_program_passes(self, program, tool):
        program.context(tool).append_cut(_line())
        result = validate_program(program)
        assert result.is_ok

    def test_tool_change_below_safe_height(self, tool):
        program = Program(Units.METRIC, 20.0, 10.0)
        program.context(tool).append_cut(_line())
        result = validate_program(program)
        assert result.has_errors
        assert result.errors[0].message == (
            "z_tool_change (10 mm) must be greater than or equal to z_safe (20 mm)"
        )

    def test_safe_height_below_work(self, tool):
        program = Program(Units.METRIC, 0.5, 50.0)
        program.context(tool).append_cut(_line(z=1.0))
        result = validate_program(program)
        assert result.has_errors
        assert "highest point of the work (1 mm)" in result.errors[0].message

    def test_imperial_labels(self):
        tool = Tool.cylindrical(Units.IMPERIAL, 1.0, 0.125, Direction.CLOCKWISE, 8000.0, 20.0)
        program = Program(Units.IMPERIAL, 1.0, 0.5)
        program.context(tool).append_cut(_line(z=0.1))
        result = validate_program(program)
        assert result.errors[0].message == (
            "z_tool_change (0.5 in) must be greater than or equal to z_safe (1 in)"
        )

    def test_pass_through_operations_do_not_raise_the_work(self, tool):
        program = Program(Units.METRIC, 0.0, 0.0)
        program.context(tool).append(Comment("only a note"))
        assert not validate_program(program).has_errors

    @pytest.mark.parametrize("feed, speed", [(0.0, 5000.0), (400.0, 0.0), (-1.0, -1.0)])
    def test_non_positive_feed_or_speed_warns(self, program, feed, speed):
        tool = Tool.cylindrical(Units.METRIC, 50.0, 4.0, Direction.CLOCKWISE, speed, feed)
        program.context(tool).append_cut(_line())
        result = validate_program(program)
        assert result.has_warnings
        assert not result.has_errors

    def test_empty_program_warns(self, program):
        result = validate_program(program)
        assert result.has_warnings
        assert not result.has_errors
        assert "no operations" in result.issues[0].message

    def test_validation_does_not_add_tools(self, program, tool):
        program.set_tool_ordering(tool, 1)
        validate_program(program)
        assert program.operation_count() == 0
        assert program.bounds().is_empty


class TestValidationResult:
    def test_empty_result_is_ok(self):
        result = ValidationResult()
        assert result.is_ok
        assert not result.has_errors
        assert not result.has_warnings

    def test_errors_are_filtered(self):
        result = ValidationResult([
            ValidationIssue("warning", "w"),
            ValidationIssue("error", "e"),
        ])
        assert [i.message for i in result.errors] == ["e"]
        assert result.has_errors
        assert result.has_warnings
        assert not result.is_ok
