"""Low-level G-code line formatting helpers."""

from __future__ import annotations

from typing import Optional

PRECISION = 3


def round_precision(value: float, decimals: int = PRECISION) -> float:
    """Round *value* to the emitted precision, normalising ``-0.0`` to ``0.0``."""
    return round(value, decimals) + 0.0


def fmt(value: float, decimals: int = PRECISION) -> str:
    """Format a float for G-code, stripping trailing zeros."""
    text = f"{round_precision(value, decimals):.{decimals}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def scale(x: float, in_min: float, in_max: float, out_min: float, out_max: float) -> float:
    """Map *x* linearly from ``[in_min, in_max]`` onto ``[out_min, out_max]``."""
    return (x - in_min) * (out_max - out_min) / (in_max - in_min) + out_min


def words(code: str, *params: tuple[str, Optional[float]]) -> str:
    """Join *code* with the ``(letter, value)`` parameters that are set.

    Parameters are written in the order given; ``None`` values are skipped.
    """
    parts = [code]
    for letter, value in params:
        if value is not None:
            parts.append(f"{letter}{fmt(value)}")
    return " ".join(parts)


def comment(text: str) -> str:
    """Wrap *text* in a Grbl-style ``;(...)`` comment."""
    if not text:
        return ""
    # Nested parentheses would terminate the comment early
    cleaned = text.replace("(", "").replace(")", "")
    return f";({cleaned})"


def message(text: str) -> str:
    """Operator message shown by the controller."""
    cleaned = text.replace("(", "").replace(")", "")
    return f"(MSG,{cleaned})"
