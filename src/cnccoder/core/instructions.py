"""Machine instructions produced by cuts and program assembly.

Every instruction is an immutable record that renders to exactly one line
of G-code through :meth:`to_gcode`.  Parameters left as ``None`` are not
written.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Union

from ..gcode.gcode_writer import comment, fmt, message, words

if TYPE_CHECKING:
    from .geometry import Axis
    from .units import Units


@dataclass(frozen=True)
class G0:
    """Rapid move."""
    x: Optional[float] = None
    y: Optional[float] = None
    z: Optional[float] = None

    def to_gcode(self) -> str:
        return words("G0", ("X", self.x), ("Y", self.y), ("Z", self.z))


@dataclass(frozen=True)
class G1:
    """Linear move at feed rate ``f``."""
    x: Optional[float] = None
    y: Optional[float] = None
    z: Optional[float] = None
    f: Optional[float] = None

    def to_gcode(self) -> str:
        return words("G1", ("X", self.x), ("Y", self.y), ("Z", self.z), ("F", self.f))


def _arc_gcode(code: str, arc: Union[G2, G3]) -> str:
    params = [("X", arc.x), ("Y", arc.y), ("Z", arc.z)]
    if arc.r is not None:
        params.append(("R", arc.r))
    else:
        params += [("I", arc.i), ("J", arc.j), ("K", arc.k)]
    params += [("P", arc.p), ("F", arc.f)]
    return words(code, *params)


@dataclass(frozen=True)
class G2:
    """Clockwise arc.  A radius ``r`` takes precedence over ``i``/``j``/``k``."""
    x: Optional[float] = None
    y: Optional[float] = None
    z: Optional[float] = None
    i: Optional[float] = None
    j: Optional[float] = None
    k: Optional[float] = None
    r: Optional[float] = None
    p: Optional[float] = None
    f: Optional[float] = None

    def to_gcode(self) -> str:
        return _arc_gcode("G2", self)


@dataclass(frozen=True)
class G3:
    """Counterclockwise arc, same parameters as :class:`G2`."""
    x: Optional[float] = None
    y: Optional[float] = None
    z: Optional[float] = None
    i: Optional[float] = None
    j: Optional[float] = None
    k: Optional[float] = None
    r: Optional[float] = None
    p: Optional[float] = None
    f: Optional[float] = None

    def to_gcode(self) -> str:
        return _arc_gcode("G3", self)


@dataclass(frozen=True)
class G4:
    """Dwell for ``p`` seconds."""
    p: float

    def to_gcode(self) -> str:
        return words("G4", ("P", self.p))


@dataclass(frozen=True)
class G17:
    """Select the XY plane."""

    def to_gcode(self) -> str:
        return "G17"


@dataclass(frozen=True)
class G18:
    """Select the XZ plane."""

    def to_gcode(self) -> str:
        return "G18"


@dataclass(frozen=True)
class G19:
    """Select the YZ plane."""

    def to_gcode(self) -> str:
        return "G19"


@dataclass(frozen=True)
class G20:
    """Inch mode."""

    def to_gcode(self) -> str:
        return "G20"


@dataclass(frozen=True)
class G21:
    """Millimetre mode."""

    def to_gcode(self) -> str:
        return "G21"


@dataclass(frozen=True)
class G43:
    """Tool length offset from tool table entry ``h``."""
    h: int

    def to_gcode(self) -> str:
        return f"G43 H{self.h}"


@dataclass(frozen=True)
class F:
    """Set feed rate."""
    x: float

    def to_gcode(self) -> str:
        return f"F{fmt(self.x)}"


@dataclass(frozen=True)
class S:
    """Set spindle speed."""
    x: float

    def to_gcode(self) -> str:
        return f"S{fmt(self.x)}"


@dataclass(frozen=True)
class M0:
    """Pause."""

    def to_gcode(self) -> str:
        return "M0"


@dataclass(frozen=True)
class M2:
    """End of program."""

    def to_gcode(self) -> str:
        return "M2"


@dataclass(frozen=True)
class M3:
    """Spindle on, clockwise."""

    def to_gcode(self) -> str:
        return "M3"


@dataclass(frozen=True)
class M4:
    """Spindle on, counterclockwise."""

    def to_gcode(self) -> str:
        return "M4"


@dataclass(frozen=True)
class M5:
    """Spindle stop."""

    def to_gcode(self) -> str:
        return "M5"


@dataclass(frozen=True)
class M6:
    """Manual tool change to tool ``t``."""
    t: int

    def to_gcode(self) -> str:
        return f"T{self.t} M6"


@dataclass(frozen=True)
class Empty:
    """Blank line."""

    def to_gcode(self) -> str:
        return ""


@dataclass(frozen=True)
class Comment:
    text: str

    def to_gcode(self) -> str:
        return comment(self.text)


@dataclass(frozen=True)
class Message:
    text: str

    def to_gcode(self) -> str:
        return message(self.text)


Instruction = Union[
    G0, G1, G2, G3, G4, G17, G18, G19, G20, G21, G43,
    F, S, M0, M2, M3, M4, M5, M6, Empty, Comment, Message,
]

PLANE_SELECTS = (G17, G18, G19)


def units_code(units: Units) -> Union[G20, G21]:
    """Units selection instruction for a :class:`~cnccoder.core.units.Units`."""
    return G20() if units.gcode_modal == "G20" else G21()


def plane_for_axis(axis: Axis) -> Union[G17, G18, G19]:
    """Plane normal to *axis*: X -> YZ (G19), Y -> XZ (G18), Z -> XY (G17)."""
    return {"X": G19, "Y": G18, "Z": G17}[axis.value]()


def to_gcode(instructions: list[Instruction]) -> str:
    return "\n".join(i.to_gcode() for i in instructions)
