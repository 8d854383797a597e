"""Tests for writing projects to disk."""

import json
import logging

import pytest

from cnccoder.core import cuts
from cnccoder.core.errors import SafetyError
from cnccoder.core.geometry import Vector3
from cnccoder.core.program import Program
from cnccoder.core.units import Units
from cnccoder.export.filesystem import write_project


class TestWriteProject:
    def test_writes_both_files(self, program, tool, tmp_path, caplog):
        program.context(tool).append_cut(
            cuts.line(Vector3(0.0, 0.0, 1.0), Vector3(5.0, 0.0, 0.0))
        )
        out = tmp_path / "out"

        with caplog.at_level(logging.INFO, logger="cnccoder.export.filesystem"):
            camotics_path, gcode_path = write_project(program, 0.5, out)

        assert camotics_path == out / "test.camotics"
        assert gcode_path == out / "test.gcode"
        assert gcode_path.read_text(encoding="utf-8") == program.to_gcode()
        project = json.loads(camotics_path.read_text(encoding="utf-8"))
        assert project["files"] == ["test.gcode"]
        assert project["resolution"] == 0.5
        assert "Wrote" in caplog.text

    def test_accepts_string_directory(self, program, tool, tmp_path):
        program.context(tool).append_cut(
            cuts.line(Vector3(0.0, 0.0, 1.0), Vector3(5.0, 0.0, 0.0))
        )
        _, gcode_path = write_project(program, 0.5, str(tmp_path))
        assert gcode_path.parent == tmp_path

    def test_failed_compile_writes_nothing(self, tool, tmp_path):
        program = Program(Units.METRIC, 50.0, 10.0, name="unsafe")
        program.context(tool).append_cut(
            cuts.line(Vector3(0.0, 0.0, 1.0), Vector3(5.0, 0.0, 0.0))
        )
        with pytest.raises(SafetyError):
            write_project(program, 0.5, tmp_path / "out")
        assert not (tmp_path / "out").exists()
