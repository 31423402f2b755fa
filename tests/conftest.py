"""Shared fixtures."""

import pytest

from rover_sim.robot import Orientation, Pose
from rover_sim.terrain import TerrainMap

# Two-row map used throughout the README examples
SAMPLE_GRID = [
    ["Fe", "Fe", "Se"],
    ["W", "Si", "Obs"],
]


@pytest.fixture
def sample_grid():
    return [list(row) for row in SAMPLE_GRID]


@pytest.fixture
def sample_terrain(sample_grid):
    return TerrainMap(sample_grid)


@pytest.fixture
def open_terrain():
    """4x4, no obstacles."""
    return TerrainMap([["Fe"] * 4 for _ in range(4)])


@pytest.fixture
def start_east():
    return Pose(0, 0, Orientation.EAST)


@pytest.fixture
def sample_request(sample_grid):
    return {
        "terrain": sample_grid,
        "battery": 50,
        "commands": ["F", "S", "R", "F"],
        "initialPosition": {"location": {"x": 0, "y": 0}, "facing": "East"},
    }
