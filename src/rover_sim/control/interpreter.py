"""
Command interpreter - Runs a full command sequence.

This is the run loop that:
1. Builds a fresh RobotState for the run
2. Feeds it commands one at a time
3. Stops at the first command that can't be carried out
4. Returns a snapshot of whatever was reached

A stalled run (empty battery, backoff exhausted) is a normal
result, never an exception.
"""

from __future__ import annotations

import logging

from rover_sim.robot import Command, Pose, SimulationResult
from rover_sim.strategies import BackoffPolicy
from rover_sim.terrain import TerrainMap

from .robot_state import RobotState

logger = logging.getLogger(__name__)


class CommandInterpreter:
    """
    Executes command sequences on its own RobotState.

    Usage:
        interpreter = CommandInterpreter(terrain, battery=50, pose=start)
        result = interpreter.run([Command.MOVE_FORWARD, Command.SAMPLE])

        if interpreter.halted_at is not None:
            print(f"stopped at command #{interpreter.halted_at}")
    """

    def __init__(self, terrain: TerrainMap, battery: int, pose: Pose, backoff: BackoffPolicy | None = None):
        self.robot = RobotState(terrain, battery, pose, backoff=backoff)
        self.halted_at: int | None = None
        self.executed = 0

    def run(self, commands: list[Command]) -> SimulationResult:
        """Execute commands in order; the failing command is not applied."""
        start = self.robot.pose
        logger.info(
            f"Run: {len(commands)} commands from ({start.x}, {start.y}) "
            f"{start.facing.value} battery={self.robot.battery}"
        )

        for index, command in enumerate(commands):
            if not self.robot.execute_command(command):
                self.halted_at = index
                logger.warning(
                    f"Run halted at command #{index} ({Command.parse(command).value}): "
                    f"battery={self.robot.battery} backoff={self.robot.backoff_index}"
                )
                break
            self.executed += 1
            logger.debug(
                f"#{index} {Command.parse(command).value} -> ({self.robot.pose.x}, {self.robot.pose.y}) "
                f"{self.robot.pose.facing.value} battery={self.robot.battery}"
            )

        result = self.robot.snapshot()
        logger.info(
            f"Run complete: {self.executed}/{len(commands)} commands, "
            f"battery={result.battery}, samples={len(result.samples)}"
        )
        return result
