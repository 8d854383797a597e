"""Tests for program assembly, tool changes and G-code output."""

import logging
import threading
from datetime import datetime

import pytest

from cnccoder.core import cuts
from cnccoder.core.cuts import Segment
from cnccoder.core.errors import InvalidGeometryError, MergeError, SafetyError
from cnccoder.core.geometry import Axis, Direction, Vector2, Vector3
from cnccoder.core.instructions import G0, G1, G2, G17, G18, Comment, Empty, Message
from cnccoder.core.operation import Context, Operation
from cnccoder.core.program import Program, deduplicate
from cnccoder.core.tool import Tool
from cnccoder.core.units import Units

HEADER = [
    ";(Name: test)",
    ";(Created on: 2024-01-02 03:04:05)",
    ";(Created by: tester@host)",
    ";(Generator: cnccoder test)",
]


def _path(start=Vector3(0.0, 0.0, 3.0), to=Vector2(-28.0, -30.0)):
    return cuts.path(start, [Segment.line(Vector2(0.0, 0.0), to)], -0.1, 1.0)


def _line():
    return cuts.line(Vector3(0.0, 0.0, 1.0), Vector3(5.0, 5.0, 0.0))


class TestCompile:
    def test_single_path(self, program, tool):
        program.context(tool).append_cut(_path())

        assert program.to_gcode().split("\n") == HEADER + [
            ";(Workarea: size_x = 28 mm, size_y = 30 mm, size_z = 3.1 mm, "
            "min_x = -28 mm, min_y = -30 mm, max_z = 3 mm, "
            "z_safe = 10 mm, z_tool_change = 50 mm)",
            "",
            "G17",
            "G21",
            "",
            ";(Tool change: type = Cylindrical, diameter = 4 mm, length = 50 mm, "
            "direction = clockwise, spindle_speed = 5000 rpm, feed_rate = 400 mm/min)",
            "G21",
            "G0 Z50",
            "M5",
            "T1 M6",
            "S5000",
            "M3",
            "G4 P4.7",
            "",
            ";(Cut path at: x = 0, y = 0)",
            "G0 Z10",
            "G0 X0 Y0",
            "G1 Z3 F400",
            "G1 X0 Y0 Z3",
            "G1 X-28 Y-30 Z2",
            "G1 X0 Y0 Z2",
            "G1 X-28 Y-30 Z1",
            "G1 X0 Y0 Z1",
            "G1 X-28 Y-30 Z0",
            "G1 X0 Y0 Z-0.1",
            "G1 X-28 Y-30 Z-0.1",
            "G0 Z10",
            "G0 Z50",
            "",
            "M2",
        ]

    def test_compiling_twice_gives_same_output(self, program, tool):
        program.context(tool).append_cut(_path())
        assert program.to_gcode() == program.to_gcode()

    def test_empty_program(self, program, caplog):
        with caplog.at_level(logging.WARNING, logger="cnccoder.core.program"):
            lines = program.to_gcode().split("\n")

        assert lines == HEADER + [";(Workarea: empty)", "", "G17", "G21", "G0 Z50", "", "M2"]
        assert "Program has no operations" in caplog.text

    def test_description_is_one_line(self, program):
        program.description = "first line\nsecond line"
        lines = program.to_gcode().split("\n")
        assert lines[1] == ";(Description: first line second line)"

    def test_pass_through_operations(self, program, tool):
        ctx = program.context(tool)
        ctx.append(Comment("clamp the stock"))
        ctx.append(Message("Check the clamps"))

        lines = program.to_gcode().split("\n")
        assert ";(Workarea: empty)" in lines
        assert lines[-5:] == [";(clamp the stock)", "(MSG,Check the clamps)", "G0 Z50", "", "M2"]

    def test_counterclockwise_spindle(self, program):
        ccw = Tool.cylindrical(Units.METRIC, 50.0, 4.0, Direction.COUNTERCLOCKWISE, 5000.0, 400.0)
        program.context(ccw).append_cut(_line())
        lines = program.to_gcode().split("\n")
        assert "M4" in lines
        assert "M3" not in lines

    def test_imperial(self):
        program = Program(
            Units.IMPERIAL, 0.5, 2.0, name="inch",
            created_on=datetime(2024, 1, 1), created_by="a@b", generator="g",
        )
        tool = Tool.cylindrical(Units.IMPERIAL, 2.0, 0.25, Direction.CLOCKWISE, 8000.0, 20.0)
        program.context(tool).append_cut(
            cuts.line(Vector3(0.0, 0.0, 0.1), Vector3(1.0, 0.0, 0.0))
        )
        lines = program.to_gcode().split("\n")
        assert "G20" in lines
        assert "G21" not in lines
        assert lines[4].startswith(';(Workarea: size_x = 1", size_y = 0"')

    def test_geometry_errors_propagate(self, program, tool):
        program.context(tool).append_cut(
            cuts.frame(Vector3(0.0, 0.0, 0.0), Vector2(3.0, 10.0), -1.0, 1.0)
        )
        with pytest.raises(InvalidGeometryError, match="wider than x dimension"):
            program.to_instructions()

    def test_plane_reselection_is_dropped(self, program, tool):
        program.context(tool).append_cut(cuts.arc(
            Vector3(0.0, 0.0, 1.0), Vector3(10.0, 0.0, 1.0), Vector3(5.0, 0.0, 1.0),
            Axis.Z, Direction.CLOCKWISE,
        ))
        lines = program.to_gcode().split("\n")
        assert lines.count("G17") == 1

    def test_other_plane_is_restored(self, program, tool):
        program.context(tool).append_cut(cuts.arc(
            Vector3(0.0, 0.0, 0.0), Vector3(10.0, 0.0, 0.0), Vector3(5.0, 0.0, 0.0),
            Axis.Y, Direction.CLOCKWISE,
        ))
        lines = program.to_gcode().split("\n")
        arc_at = lines.index("G18")
        assert lines[arc_at + 1].startswith("G2 ")
        assert lines[arc_at + 2] == "G17"


class TestSafety:
    def test_tool_change_below_safe_height(self, tool):
        program = Program(Units.METRIC, 50.0, 10.0)
        program.context(tool).append_cut(_line())
        with pytest.raises(SafetyError, match="z_tool_change"):
            program.to_gcode()

    def test_safe_height_below_work(self, tool):
        program = Program(Units.METRIC, 2.0, 50.0)
        program.context(tool).append_cut(_path())
        with pytest.raises(SafetyError) as exc:
            program.to_gcode()
        assert str(exc.value) == (
            "z_safe (2 mm) must be greater than or equal to the highest point "
            "of the work (3 mm)"
        )

    def test_safe_height_equal_to_work_is_allowed(self, tool):
        program = Program(Units.METRIC, 3.0, 3.0)
        program.context(tool).append_cut(_path())
        assert program.to_gcode().endswith("M2")


class TestTools:
    def test_tool_changes_follow_first_use(self, program, tool, other_tool):
        program.context(tool).append_cut(_line())
        program.context(other_tool).append_cut(_line())

        lines = program.to_gcode().split("\n")
        assert lines.index("T1 M6") < lines.index("T2 M6")
        assert program.tools() == [tool, other_tool]
        assert program.tool_ordering(other_tool) == 2

    def test_explicit_ordering(self, program, tool, other_tool):
        program.context(tool).append_cut(_line())
        program.context(other_tool).append_cut(_line())
        program.set_tool_ordering(other_tool, 1)

        assert program.tools() == [other_tool, tool]
        lines = program.to_gcode().split("\n")
        first_change = next(line for line in lines if line.startswith(";(Tool change"))
        assert "Ballnose" in first_change
        assert lines.index("T1 M6") < lines.index("T2 M6")

    def test_tool_without_operations_is_skipped(self, program, tool, other_tool):
        program.context(other_tool)
        program.context(tool).append_cut(_line())

        lines = program.to_gcode().split("\n")
        assert "T1 M6" not in lines
        assert "T2 M6" in lines

    def test_unknown_tool_has_no_ordering(self, program, tool):
        assert program.tool_ordering(tool) is None

    def test_context_is_reused(self, program, tool):
        program.context(tool).append_cut(_line())
        program.context(tool).append_cut(_line())
        assert len(program.context(tool).operations) == 2
        assert program.operation_count() == 2

    def test_context_inherits_program_heights(self, program, tool):
        ctx = program.context(tool)
        assert ctx.units is Units.METRIC
        assert ctx.z_safe == 10.0
        assert ctx.z_tool_change == 50.0

    def test_extend(self, program, tool):
        def add(ctx):
            ctx.append_cut(_line())
            return len(ctx.operations)

        assert program.extend(tool, add) == 1
        assert program.operation_count() == 1


class TestMerge:
    def test_context_merge(self, context, tool):
        other = Context(Units.METRIC, tool, 20.0, 60.0)
        other.append_cut(_line())
        context.append(Comment("first"))

        context.merge(other)

        assert len(context.operations) == 2
        assert context.z_safe == 20.0
        assert context.z_tool_change == 60.0

    def test_context_merge_mismatching_units(self, context, tool):
        with pytest.raises(MergeError, match="mismatching units"):
            context.merge(Context(Units.IMPERIAL, tool, 10.0, 50.0))

    def test_context_merge_mismatching_tools(self, context, other_tool):
        with pytest.raises(MergeError, match="mismatching tools"):
            context.merge(Context(Units.METRIC, other_tool, 10.0, 50.0))

    def test_tool_context_merge(self, program, tool):
        source = Program.new_empty_from(program)
        source.context(tool).append_cut(_line())
        source.context(tool).append_cut(_line())

        program.context(tool).merge(source.context(tool))

        assert program.operation_count() == 2
        assert source.operation_count() == 2

    def test_program_merge(self, program, tool, other_tool):
        program.context(tool).append_cut(_line())
        other = Program(Units.METRIC, 5.0, 40.0)
        other.context(other_tool).append_cut(_line())
        other.context(tool).append_cut(_line())

        program.merge(other)

        assert program.z_safe == 5.0
        assert program.z_tool_change == 40.0
        assert program.tools() == [tool, other_tool]
        assert len(program.context(tool).operations) == 2
        assert program.operation_count() == 3

    def test_program_merge_keeps_lower_heights(self, program, tool):
        program.merge(Program(Units.METRIC, 20.0, 80.0))
        assert program.z_safe == 10.0
        assert program.z_tool_change == 50.0

    def test_program_merge_numbers_new_tools_in_first_use_order(
        self, program, tool, other_tool
    ):
        program.context(tool).append_cut(_line())
        other = Program(Units.METRIC, 10.0, 50.0)
        other.context(other_tool).append_cut(_line())
        other.set_tool_ordering(other_tool, 5)

        program.merge(other)

        assert program.tool_ordering(tool) == 1
        assert program.tool_ordering(other_tool) == 2

    def test_program_merge_mismatching_units(self, program):
        with pytest.raises(MergeError, match="mismatching units"):
            program.merge(Program(Units.IMPERIAL, 1.0, 2.0))


class TestNewEmptyFrom:
    def test_copies_settings_but_not_tools(self, program, tool):
        program.context(tool).append_cut(_line())
        copy = Program.new_empty_from(program)

        assert copy.units is program.units
        assert (copy.z_safe, copy.z_tool_change) == (10.0, 50.0)
        assert copy.name == "test"
        assert copy.created_on == program.created_on
        assert copy.tools() == []
        assert copy.operation_count() == 0


class TestOperation:
    def test_rejects_other_objects(self):
        with pytest.raises(TypeError):
            Operation("G1 X1")

    def test_pass_through_has_no_bounds(self):
        assert Operation(Comment("x")).bounds().is_empty
        assert not Operation(Empty()).is_cut

    def test_append_wraps_items(self, context):
        context.append(_line())
        context.append(Operation(Message("hi")))
        assert [op.is_cut for op in context.operations] == [True, False]

    def test_operations_is_a_copy(self, context):
        context.append_cut(_line())
        context.operations.clear()
        assert len(context.operations) == 1


class TestThreads:
    def test_concurrent_appends(self, program, tool, other_tool):
        def worker(t):
            ctx = program.context(t)
            for _ in range(50):
                ctx.append_cut(_line())

        threads = [
            threading.Thread(target=worker, args=(tool if i % 2 else other_tool,))
            for i in range(8)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert program.operation_count() == 400
        assert sorted(program.tool_ordering(t) for t in (tool, other_tool)) == [1, 2]


class TestDeduplicate:
    def test_consecutive_duplicates(self):
        assert deduplicate([G0(z=1.0), G0(z=1.0), G1(x=1.0)]) == [G0(z=1.0), G1(x=1.0)]

    def test_duplicates_compare_rendered_text(self):
        assert deduplicate([G1(z=1.0), G1(z=1.0001)]) == [G1(z=1.0)]

    def test_non_adjacent_duplicates_are_kept(self):
        moves = [G1(x=1.0), G1(x=2.0), G1(x=1.0)]
        assert deduplicate(moves) == moves

    def test_blank_lines(self):
        assert deduplicate([Empty(), Empty(), Comment("a")]) == [Empty(), Comment("a")]

    def test_plane_selection(self):
        arc = G2(x=1.0, i=0.5)
        other_arc = G2(x=2.0, i=0.5)
        assert deduplicate([G17(), arc, G17(), G18(), other_arc, G17()]) == [
            G17(), arc, G18(), other_arc, G17(),
        ]
