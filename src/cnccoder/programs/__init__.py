"""Ready-made programs for common jobs."""

from .planing import PlaningMeasurements, planing

__all__ = ["PlaningMeasurements", "planing"]
