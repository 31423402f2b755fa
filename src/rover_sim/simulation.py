"""
Simulation entry points and input validation.

Everything arriving from outside (HTTP body, JSON file, CLI) goes
through the validators here before any command runs. Malformed
input raises ValidationError; a run that merely stalls does not.

Wire input for a simulation:
    {
        "terrain": [["Fe", "Fe", "Se"], ["W", "Si", "Obs"]],
        "battery": 50,
        "commands": ["F", "S", "R", "F"],
        "initialPosition": {"location": {"x": 0, "y": 0}, "facing": "East"}
    }
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from rover_sim.config import COMMAND_SYMBOLS, FACINGS, TERRAIN_TYPES
from rover_sim.control import CommandInterpreter
from rover_sim.mission import MissionPlanner
from rover_sim.planning import PathResult, Pathfinder
from rover_sim.robot import Command, Orientation, Pose, SimulationResult
from rover_sim.strategies import BackoffPolicy
from rover_sim.terrain import TerrainMap

logger = logging.getLogger(__name__)


class ValidationError(ValueError):
    """Malformed input. Raised before any command is executed."""


# =============================================================================
# Validators
# =============================================================================


def validate_terrain(grid) -> TerrainMap:
    """Check shape and alphabet; return a read-only TerrainMap."""
    if isinstance(grid, TerrainMap):
        return grid
    if not isinstance(grid, (list, tuple)) or len(grid) == 0:
        raise ValidationError("Terrain must be a non-empty 2D array")

    first = grid[0]
    row_length = len(first) if isinstance(first, (list, tuple)) else 0
    if not row_length or any(
        not isinstance(row, (list, tuple)) or len(row) != row_length for row in grid
    ):
        raise ValidationError("Terrain must be a valid 2D array with consistent row lengths")

    for row in grid:
        for cell in row:
            if not isinstance(cell, str) or cell not in TERRAIN_TYPES:
                raise ValidationError(f"Terrain cells must be one of: {', '.join(TERRAIN_TYPES)}")

    return TerrainMap(grid)


def validate_battery(battery) -> int:
    """Non-negative whole number; integral floats (e.g. 50.0) are accepted."""
    if isinstance(battery, bool) or not isinstance(battery, (int, float)) or battery < 0:
        raise ValidationError("Battery must be a non-negative number")
    if isinstance(battery, float):
        if not battery.is_integer():
            raise ValidationError("Battery must be a whole number")
        battery = int(battery)
    return battery


def validate_commands(commands) -> list[Command]:
    if not isinstance(commands, (list, tuple)) or len(commands) == 0:
        raise ValidationError("Commands must be a non-empty array")
    try:
        return [Command.parse(c) for c in commands]
    except ValueError:
        raise ValidationError(f"Commands must be one of: {', '.join(COMMAND_SYMBOLS)}") from None


def validate_position(position, terrain: TerrainMap) -> Pose:
    """
    Parse and check a starting pose.

    Accepts a Pose, the simulation wire shape
    {"location": {"x", "y"}, "facing"}, or the flat shape
    {"x", "y", "facing"} used by path and mission requests.
    """
    if position is None:
        raise ValidationError("Initial position is required")

    if isinstance(position, Pose):
        x, y, facing = position.x, position.y, position.facing.value
    elif isinstance(position, Mapping):
        location = position.get("location", position)
        if not isinstance(location, Mapping) or not _is_int(location.get("x")) or not _is_int(location.get("y")):
            raise ValidationError("Initial position must have valid x and y coordinates")
        x, y = location["x"], location["y"]
        facing = position.get("facing")
    else:
        raise ValidationError("Initial position must be an object with location and facing")

    if facing not in FACINGS:
        raise ValidationError(
            "Initial position must have a valid facing direction (North, South, East, West)"
        )
    if not terrain.in_bounds(x, y):
        raise ValidationError("Initial position is out of terrain bounds")
    if terrain.is_obstacle(x, y):
        raise ValidationError("Initial position cannot be an obstacle")

    return Pose(x, y, Orientation(facing))


def validate_target(target, terrain: TerrainMap) -> tuple[int, int]:
    """Path target as (x, y): in bounds and not an obstacle."""
    if isinstance(target, Mapping):
        x, y = target.get("x"), target.get("y")
    elif isinstance(target, (list, tuple)) and len(target) == 2:
        x, y = target
    else:
        raise ValidationError("Target must have valid x and y coordinates")

    if not _is_int(x) or not _is_int(y):
        raise ValidationError("Target must have valid x and y coordinates")
    if not terrain.in_bounds(x, y):
        raise ValidationError("Target position is out of terrain bounds")
    if terrain.is_obstacle(x, y):
        raise ValidationError("Target position cannot be an obstacle")
    return (x, y)


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


# =============================================================================
# Entry points
# =============================================================================


def run_simulation(terrain, battery, commands, initial_position, backoff: BackoffPolicy | None = None) -> SimulationResult:
    """
    Validate input, then execute commands on a fresh robot.

    Raises:
        ValidationError: Malformed terrain, battery, commands or position.
    """
    terrain_map = validate_terrain(terrain)
    battery = validate_battery(battery)
    commands = validate_commands(commands)
    pose = validate_position(initial_position, terrain_map)

    interpreter = CommandInterpreter(terrain_map, battery, pose, backoff=backoff)
    return interpreter.run(commands)


def run_simulation_request(payload) -> dict:
    """Wire in, wire out: request dict to result dict."""
    if not isinstance(payload, Mapping):
        raise ValidationError("Input is required")
    result = run_simulation(
        payload.get("terrain"),
        payload.get("battery"),
        payload.get("commands"),
        payload.get("initialPosition"),
    )
    return result.to_dict()


def find_path(terrain, start, target, battery: int) -> PathResult:
    """
    Battery-feasible shortest command sequence from start to target.

    The target is NOT checked; call validate_target first for
    untrusted input.
    """
    terrain_map = validate_terrain(terrain)
    if not isinstance(start, Pose):
        start = validate_position(start, terrain_map)
    x, y = (target["x"], target["y"]) if isinstance(target, Mapping) else target
    return Pathfinder(terrain_map).find_path(start, (x, y), battery)


def generate_mission_plan(terrain, start, battery: int) -> PathResult:
    """Plan legs and samples covering every terrain type on the map."""
    terrain_map = validate_terrain(terrain)
    if not isinstance(start, Pose):
        start = validate_position(start, terrain_map)
    return MissionPlanner(terrain_map).generate(start, battery)
