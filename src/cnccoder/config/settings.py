"""Application preferences (persisted to disk)."""

from __future__ import annotations

import json
from dataclasses import dataclass, asdict
from pathlib import Path

from ..core.units import Units
from .defaults import DEFAULT_RESOLUTION


@dataclass
class AppSettings:
    """User preferences, serialized to ~/.cnccoder/settings.json."""

    default_units: str = Units.METRIC.value
    default_resolution: float = DEFAULT_RESOLUTION
    output_dir: str = "."

    @property
    def units(self) -> Units:
        return Units(self.default_units)

    @staticmethod
    def _path() -> Path:
        return Path.home() / ".cnccoder" / "settings.json"

    def save(self) -> None:
        p = self._path()
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(asdict(self), indent=2))

    @classmethod
    def load(cls) -> "AppSettings":
        p = cls._path()
        if p.exists():
            data = json.loads(p.read_text())
            return cls(**{k: v for k, v in data.items() if k in cls.__dataclass_fields__})
        return cls()
