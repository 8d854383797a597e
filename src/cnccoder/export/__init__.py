"""Writers for compiled programs and simulation projects."""

from .camotics import Camotics, CamoticsTool, CamoticsToolShape, ResolutionMode, Workpiece
from .filesystem import write_project

__all__ = [
    "Camotics", "CamoticsTool", "CamoticsToolShape", "ResolutionMode", "Workpiece",
    "write_project",
]
