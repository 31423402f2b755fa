"""
Runtime tunable parameters with JSON persistence.

The web interface and CLI share one Parameters instance. Values
change request limits and rendering only; simulation rules live
in config.py and never change at runtime.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass
from pathlib import Path

from rover_sim.config import (
    DEFAULT_BATTERY,
    MAX_COMMANDS,
    MAX_GRID_CELLS,
    RENDER_CELL_PX,
    RENDER_QUALITY,
)

logger = logging.getLogger(__name__)

PARAMS_FILE = Path(os.environ.get("ROVER_SIM_PARAMS", Path.cwd() / "rover_params.json"))


# Fields are at least 1 unless listed here
_MINIMUMS = {"default_battery": 0}
_MAXIMUMS = {"render_quality": 100}


def _in_range(key: str, value) -> bool:
    return _MINIMUMS.get(key, 1) <= value <= _MAXIMUMS.get(key, value)


@dataclass
class Parameters:
    """Runtime tunable parameters."""

    # Request limits (web layer rejects anything larger)
    max_grid_cells: int = MAX_GRID_CELLS
    max_commands: int = MAX_COMMANDS

    # Session defaults
    default_battery: int = DEFAULT_BATTERY

    # Renderer
    render_cell_px: int = RENDER_CELL_PX
    render_quality: int = RENDER_QUALITY

    def update(self, **kwargs):
        """Update parameters from dict (e.g., from web API)."""
        for key, value in kwargs.items():
            if hasattr(self, key):
                expected_type = type(getattr(self, key))
                try:
                    coerced = expected_type(value)
                except (TypeError, ValueError):
                    logger.warning(f"Invalid value for {key}: {value}")
                    continue
                if not _in_range(key, coerced):
                    logger.warning(f"Invalid value for {key}: {value}")
                    continue
                setattr(self, key, coerced)
            else:
                logger.warning(f"Unknown parameter: {key}")

    def save(self, path: Path | None = None):
        """Persist to JSON file."""
        path = Path(path) if path is not None else PARAMS_FILE
        with open(path, "w") as f:
            json.dump(asdict(self), f, indent=2)
        logger.info(f"Parameters saved to {path}")

    @classmethod
    def load(cls, path: Path | None = None) -> Parameters:
        """Load from JSON file, or return defaults."""
        path = Path(path) if path is not None else PARAMS_FILE
        if path.exists():
            try:
                with open(path) as f:
                    data = json.load(f)
                params = cls()
                params.update(**data)
                logger.info(f"Parameters loaded from {path}")
                return params
            except (OSError, ValueError, TypeError) as e:
                logger.warning(f"Failed to load {path}: {e}, using defaults")
        return cls()

    def to_dict(self) -> dict:
        """Convert to dict for JSON API."""
        return asdict(self)
