"""CLI entry point: ``python -m cnccoder planing --x-length 100 --y-length 50``"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .config.defaults import default_tool
from .config.settings import AppSettings
from .core.errors import CncCoderError
from .core.geometry import Direction
from .core.tool import Tool
from .core.units import Units
from .export.filesystem import write_project
from .programs.planing import PlaningMeasurements, planing


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="cnccoder",
        description="Generate G-code and CAMotics projects for common CNC jobs.",
    )
    p.add_argument("-v", "--verbose", action="count", default=0,
                   help="Log progress (-vv for debug output)")
    sub = p.add_subparsers(dest="command", required=True)

    pl = sub.add_parser("planing", help="Plane the top of a rectangular workpiece")
    pl.add_argument("--name", default="planing",
                    help="Program name, used for the output files (default: planing)")
    pl.add_argument("--units", choices=[u.value for u in Units], default=None,
                    help="Working units (default: from settings)")

    # Workpiece
    pl.add_argument("--x-length", type=float, default=None,
                    help="Length of the surface along X (default: 10 mm)")
    pl.add_argument("--y-length", type=float, default=None,
                    help="Length of the surface along Y (default: 10 mm)")
    pl.add_argument("--z-start", type=float, default=None,
                    help="Current top of the workpiece (default: 5 mm)")
    pl.add_argument("--z-end", type=float, default=None,
                    help="Height to plane down to (default: -0.1 mm)")
    pl.add_argument("--z-max-step", type=float, default=None,
                    help="Maximum depth per layer (default: 1 mm)")

    # Tool
    pl.add_argument("--tool-diameter", type=float, default=None,
                    help="Cylindrical tool diameter (default: 6 mm)")
    pl.add_argument("--tool-length", type=float, default=None,
                    help="Cylindrical tool length (default: 30 mm)")
    pl.add_argument("--spindle-speed", type=float, default=None,
                    help="Spindle speed in rpm (default: 10000)")
    pl.add_argument("--feed-rate", type=float, default=None,
                    help="Feed rate in units per minute (default: 500 mm/min)")

    # Output
    pl.add_argument("--resolution", type=float, default=None,
                    help="CAMotics simulation resolution (default: from settings)")
    pl.add_argument("-o", "--output-dir", type=Path, default=None,
                    help="Directory to write the files to (default: from settings)")

    return p


def _pick(value, default):
    return default if value is None else value


def _run_planing(args: argparse.Namespace, settings: AppSettings) -> int:
    units = Units(args.units) if args.units else settings.units
    defaults = PlaningMeasurements.for_units(units)
    measurements = PlaningMeasurements(
        x_length=_pick(args.x_length, defaults.x_length),
        y_length=_pick(args.y_length, defaults.y_length),
        z_start=_pick(args.z_start, defaults.z_start),
        z_end=_pick(args.z_end, defaults.z_end),
        z_max_step=_pick(args.z_max_step, defaults.z_max_step),
        units=units,
    )

    base = default_tool()
    tool = Tool.cylindrical(
        units,
        _pick(args.tool_length, units.from_mm(base.length)),
        _pick(args.tool_diameter, units.from_mm(base.diameter)),
        Direction.CLOCKWISE,
        _pick(args.spindle_speed, base.spindle_speed),
        _pick(args.feed_rate, units.from_mm(base.feed_rate)),
    )
    print(f"Tool: {tool}")

    program = planing(tool, measurements, name=args.name)
    camotics_path, gcode_path = write_project(
        program,
        _pick(args.resolution, settings.default_resolution),
        _pick(args.output_dir, Path(settings.output_dir)),
    )
    print(f"Wrote {gcode_path}")
    print(f"Wrote {camotics_path}")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    level = {0: logging.WARNING, 1: logging.INFO}.get(args.verbose, logging.DEBUG)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    settings = AppSettings.load()

    try:
        if args.command == "planing":
            return _run_planing(args, settings)
    except (CncCoderError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    return 1


if __name__ == "__main__":
    sys.exit(main())
