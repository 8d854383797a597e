"""Tests for the command line entry point."""

import json

import pytest

from cnccoder.__main__ import _build_parser, main
from cnccoder.config.settings import AppSettings


class TestParser:
    def test_command_is_required(self):
        with pytest.raises(SystemExit):
            _build_parser().parse_args([])

    def test_planing_options(self):
        args = _build_parser().parse_args(
            ["-vv", "planing", "--x-length", "100", "--units", "imperial"]
        )
        assert args.verbose == 2
        assert args.x_length == 100.0
        assert args.units == "imperial"
        assert args.y_length is None


class TestPlaningCommand:
    def test_writes_project(self, home, tmp_path, capsys):
        out = tmp_path / "out"
        assert main(["planing", "--name", "job", "-o", str(out), "--x-length", "40"]) == 0

        gcode = (out / "job.gcode").read_text(encoding="utf-8")
        assert gcode.startswith(";(Name: job)")
        assert "T1 M6" in gcode
        project = json.loads((out / "job.camotics").read_text(encoding="utf-8"))
        assert project["tools"]["1"]["diameter"] == 6.0

        printed = capsys.readouterr().out
        assert "Tool: type = Cylindrical, diameter = 6 mm" in printed
        assert "job.gcode" in printed

    def test_tool_options(self, home, tmp_path):
        out = tmp_path / "out"
        assert main([
            "planing", "-o", str(out),
            "--tool-diameter", "10", "--spindle-speed", "12000", "--feed-rate", "800",
        ]) == 0
        gcode = (out / "planing.gcode").read_text(encoding="utf-8")
        assert "S12000" in gcode
        assert "G1 Z5 F800" in gcode

    def test_settings_provide_defaults(self, home, tmp_path):
        out = tmp_path / "from-settings"
        AppSettings(default_units="imperial", default_resolution=0.01,
                    output_dir=str(out)).save()

        assert main(["planing"]) == 0

        gcode = (out / "planing.gcode").read_text(encoding="utf-8")
        assert "G20" in gcode.split("\n")
        project = json.loads((out / "planing.camotics").read_text(encoding="utf-8"))
        assert project["units"] == "imperial"
        assert project["resolution"] == 0.01

    def test_error_returns_one(self, home, tmp_path, capsys):
        out = tmp_path / "out"
        assert main(["planing", "-o", str(out), "--z-max-step", "0"]) == 1
        assert "Error: max_step_z must not be zero" in capsys.readouterr().err
        assert not out.exists()
