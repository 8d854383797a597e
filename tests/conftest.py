"""Shared fixtures."""

from datetime import datetime

import pytest

from cnccoder.core.geometry import Direction
from cnccoder.core.operation import Context
from cnccoder.core.program import Program
from cnccoder.core.tool import Tool
from cnccoder.core.units import Units


@pytest.fixture
def tool() -> Tool:
    """4 mm end mill at 5000 rpm and 400 mm/min."""
    return Tool.cylindrical(Units.METRIC, 50.0, 4.0, Direction.CLOCKWISE, 5000.0, 400.0)


@pytest.fixture
def other_tool() -> Tool:
    return Tool.ballnose(Units.METRIC, 20.0, 2.0, Direction.CLOCKWISE, 10000.0, 500.0)


@pytest.fixture
def context(tool) -> Context:
    """Context with a safe height of 10 mm and a tool change height of 50 mm."""
    return Context(Units.METRIC, tool, 10.0, 50.0)


@pytest.fixture
def program() -> Program:
    return Program(
        Units.METRIC,
        10.0,
        50.0,
        name="test",
        created_on=datetime(2024, 1, 2, 3, 4, 5),
        created_by="tester@host",
        generator="cnccoder test",
    )


@pytest.fixture
def home(tmp_path, monkeypatch):
    """Point the home directory (and so the settings file) at a temp dir."""
    monkeypatch.setenv("HOME", str(tmp_path))
    return tmp_path
