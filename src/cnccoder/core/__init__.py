"""Geometry, tools, cuts and program assembly."""
