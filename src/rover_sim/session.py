"""
Interactive session - Terrain plus a live robot, owned by the caller.

Front-ends that step the robot one command at a time (web API,
interactive tools) keep one RoverSession each instead of module
level state. Dry runs, paths and mission plans never touch the
live robot; execute() and apply() do.
"""

from __future__ import annotations

import logging

from rover_sim.config import DEFAULT_BATTERY, DEFAULT_POSITION, DEFAULT_TERRAIN
from rover_sim.control import CommandInterpreter, RobotState
from rover_sim.mission import MissionPlanner
from rover_sim.planning import PathResult, Pathfinder
from rover_sim.robot import Command, Pose, SimulationResult
from rover_sim.simulation import (
    validate_battery,
    validate_commands,
    validate_position,
    validate_target,
    validate_terrain,
)

logger = logging.getLogger(__name__)


class RoverSession:
    """
    Terrain, initial configuration and a live robot.

    Usage:
        session = RoverSession()                     # default 3x2 terrain
        session.execute("F")
        plan = session.plan_mission()
        session.apply(plan.commands)
        session.status()

    Raises ValidationError from the constructor, reset() and
    set_terrain() on bad input; the session is left unchanged.
    """

    def __init__(self, terrain=DEFAULT_TERRAIN, battery=DEFAULT_BATTERY, initial_position=DEFAULT_POSITION):
        self.terrain = validate_terrain(terrain)
        self.initial_battery = validate_battery(battery)
        self.initial_pose = validate_position(initial_position, self.terrain)
        self.robot = self._new_robot()

    def _new_robot(self) -> RobotState:
        return RobotState(self.terrain, self.initial_battery, self.initial_pose)

    # =========================================================================
    # Live robot
    # =========================================================================

    def execute(self, command) -> bool:
        """Execute one command on the live robot."""
        command = validate_commands([command])[0]
        ok = self.robot.execute_command(command)
        if not ok:
            logger.warning(
                f"Session: {command.value} failed (battery={self.robot.battery}, "
                f"backoff={self.robot.backoff_index})"
            )
        return ok

    def apply(self, commands) -> SimulationResult:
        """Execute a sequence on the live robot, halting on failure."""
        return self.robot.execute_commands(validate_commands(commands))

    def reset(self, battery=None, initial_position=None) -> None:
        """Fresh robot, optionally with a new battery and start pose."""
        new_battery = self.initial_battery if battery is None else validate_battery(battery)
        new_pose = self.initial_pose if initial_position is None else validate_position(initial_position, self.terrain)
        self.initial_battery = new_battery
        self.initial_pose = new_pose
        self.robot = self._new_robot()
        logger.info(
            f"Session reset: ({new_pose.x}, {new_pose.y}) {new_pose.facing.value} battery={new_battery}"
        )

    def set_terrain(self, grid) -> None:
        """Replace the terrain; the initial pose must still be valid on it."""
        terrain = validate_terrain(grid)
        pose = validate_position(self.initial_pose, terrain)
        self.terrain = terrain
        self.initial_pose = pose
        self.robot = self._new_robot()
        logger.info(f"Session terrain set: {terrain.width}x{terrain.height}")

    # =========================================================================
    # Read-only planning
    # =========================================================================

    def run(self, commands) -> SimulationResult:
        """Dry run from the initial configuration."""
        interpreter = CommandInterpreter(self.terrain, self.initial_battery, self.initial_pose)
        return interpreter.run(validate_commands(commands))

    def find_path(self, target) -> PathResult:
        """Path from the live robot's pose with its current battery."""
        target = validate_target(target, self.terrain)
        return Pathfinder(self.terrain).find_path(self.robot.pose, target, self.robot.battery)

    def plan_mission(self) -> PathResult:
        return MissionPlanner(self.terrain).generate(self.robot.pose, self.robot.battery)

    @property
    def pose(self) -> Pose:
        return self.robot.pose

    def status(self) -> dict:
        """Live robot state in wire format plus session details."""
        data = self.robot.snapshot().to_dict()
        data["BackoffIndex"] = self.robot.backoff_index
        data["Terrain"] = [list(row) for row in self.terrain.rows]
        return data

    def commands_to_cells(self, commands: list[Command]) -> list[tuple[int, int]]:
        """Cells a path passes through from the live pose (for rendering)."""
        pose = self.robot.pose
        cells = [pose.cell]
        for command in commands:
            if command is Command.TURN_LEFT:
                pose = pose.turned_left()
            elif command is Command.TURN_RIGHT:
                pose = pose.turned_right()
            elif command.is_move:
                pose = pose.step(forward=command is Command.MOVE_FORWARD)
                cells.append(pose.cell)
        return cells
