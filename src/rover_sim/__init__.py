"""
Grid rover simulator.

Layers:
- terrain: read-only world model
- robot: poses, commands, result snapshots
- control: command execution and run loop
- strategies: obstacle backoff
- planning: battery-aware A*
- mission: multi-leg sample collection
- web: HTTP interface (needs aiohttp, imported separately)
"""

from .control import CommandInterpreter, RobotState
from .mission import MissionPlanner
from .planning import PathResult, Pathfinder
from .robot import Command, Orientation, Pose, SimulationResult
from .session import RoverSession
from .simulation import (
    ValidationError,
    find_path,
    generate_mission_plan,
    run_simulation,
    run_simulation_request,
)
from .terrain import TerrainMap

__all__ = [
    "Command",
    "CommandInterpreter",
    "MissionPlanner",
    "Orientation",
    "PathResult",
    "Pathfinder",
    "Pose",
    "RobotState",
    "RoverSession",
    "SimulationResult",
    "TerrainMap",
    "ValidationError",
    "find_path",
    "generate_mission_plan",
    "run_simulation",
    "run_simulation_request",
]
