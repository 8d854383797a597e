"""Exceptions raised while compiling cuts and programs."""


class CncCoderError(Exception):
    """Base class for all errors raised by cnccoder."""


class InvalidGeometryError(CncCoderError, ValueError):
    """A cut cannot be made as declared with the selected tool."""


class SafetyError(CncCoderError):
    """Travel heights would let the tool collide with the workpiece."""


class MergeError(CncCoderError):
    """Two contexts or programs cannot be combined."""
