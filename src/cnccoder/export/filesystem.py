"""Write compiled programs to disk."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Union

from ..core.program import Program
from .camotics import Camotics

logger = logging.getLogger(__name__)


def _write_synced(path: Path, text: str) -> None:
    with path.open("w", encoding="utf-8") as fh:
        fh.write(text)
        fh.flush()
        os.fsync(fh.fileno())


def write_project(
    program: Program,
    resolution: float,
    directory: Union[str, Path] = ".",
) -> tuple[Path, Path]:
    """Write ``<name>.camotics`` and ``<name>.gcode`` into *directory*.

    The program is compiled before anything is written, so a program that
    fails validation leaves no files behind.

    Returns
    -------
    tuple[Path, Path]
        Paths of the project file and the G-code file.
    """
    gcode = program.to_gcode()
    camotics = Camotics.from_program(program, resolution)

    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    camotics_path = directory / f"{program.name}.camotics"
    gcode_path = directory / f"{program.name}.gcode"

    _write_synced(camotics_path, camotics.to_json_string())
    _write_synced(gcode_path, gcode)

    logger.info("Wrote %s and %s", camotics_path, gcode_path)
    return camotics_path, gcode_path
