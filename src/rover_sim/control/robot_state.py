"""
Robot state - Battery, pose, samples and visit history.

Executes one command at a time against a read-only TerrainMap.
A RobotState is created per run, mutated in place, and reduced
to a SimulationResult snapshot at the end.

Battery rules:
- A command's cost is paid before its effect is applied.
- If the battery can't cover a command, ExtendPanels runs instead
  (the requested command is dropped). With less than 1 unit even
  that is impossible and the command fails.
- A blocked move pays nothing itself; the backoff maneuver that
  replaces it pays for its own commands.
"""

from __future__ import annotations

import logging

from rover_sim.config import EXTEND_PANELS_GAIN, OBSTACLE
from rover_sim.robot import Command, Pose, SimulationResult
from rover_sim.strategies.backoff import BackoffPolicy, FixedBackoffPolicy
from rover_sim.terrain import TerrainMap

logger = logging.getLogger(__name__)


class RobotState:
    """
    Live robot on a terrain map.

    Usage:
        robot = RobotState(terrain, battery=50, pose=Pose(0, 0, Orientation.EAST))
        robot.execute_command(Command.MOVE_FORWARD)
        result = robot.execute_commands([Command.SAMPLE, Command.TURN_RIGHT])
    """

    def __init__(self, terrain: TerrainMap, battery: int, pose: Pose, backoff: BackoffPolicy | None = None):
        self.terrain = terrain
        self.battery = battery
        self.pose = pose
        self.samples: list[str] = []
        self.backoff_index = 0
        self.backoff = backoff or FixedBackoffPolicy()

        # dict keeps first-visit order and gives O(1) membership
        self._visited: dict[tuple[int, int], None] = {pose.cell: None}

    @property
    def visited_cells(self) -> list[tuple[int, int]]:
        return list(self._visited)

    def execute_commands(self, commands) -> SimulationResult:
        """Run commands in order, stopping at the first one that fails."""
        for command in commands:
            if not self.execute_command(command):
                break
        return self.snapshot()

    def execute_command(self, command) -> bool:
        """
        Execute one command.

        Args:
            command: Command or its symbol ("F", "B", "L", "R", "S", "E").

        Returns:
            False if the command could not be carried out and the
            sequence must halt.

        Raises:
            ValueError: Unknown command symbol.
        """
        command = Command.parse(command)

        if self.battery < command.cost:
            if self.battery >= 1:
                logger.debug(
                    f"Battery {self.battery} < {command.cost} for {command.value}, "
                    f"extending panels instead"
                )
                return self.execute_command(Command.EXTEND_PANELS)
            logger.debug(f"Battery empty, cannot execute {command.value}")
            return False

        if command.is_move:
            return self._move(forward=command is Command.MOVE_FORWARD)
        if command is Command.TURN_LEFT:
            return self._turn(self.pose.turned_left(), command)
        if command is Command.TURN_RIGHT:
            return self._turn(self.pose.turned_right(), command)
        if command is Command.SAMPLE:
            return self._sample()
        return self._extend_panels()

    def snapshot(self) -> SimulationResult:
        """Immutable copy of the current state."""
        return SimulationResult(
            visited_cells=tuple(self._visited),
            samples=tuple(self.samples),
            battery=self.battery,
            final_pose=self.pose,
        )

    # =========================================================================
    # Command handlers
    # =========================================================================

    def _move(self, forward: bool) -> bool:
        target = self.pose.step(forward)
        if self.terrain.is_obstacle(target.x, target.y):
            logger.debug(f"Move to ({target.x}, {target.y}) blocked, backing off")
            return self.backoff.recover(self)

        cost = Command.MOVE_FORWARD.cost
        self.battery -= cost
        self.pose = target
        self._visited.setdefault(target.cell)
        self.backoff_index = 0
        return True

    def _turn(self, turned: Pose, command: Command) -> bool:
        self.battery -= command.cost
        self.pose = turned
        return True

    def _sample(self) -> bool:
        self.battery -= Command.SAMPLE.cost
        cell = self.terrain.cell_at(self.pose.x, self.pose.y)
        if cell != OBSTACLE:
            self.samples.append(cell)
        return True

    def _extend_panels(self) -> bool:
        self.battery -= Command.EXTEND_PANELS.cost
        self.battery += EXTEND_PANELS_GAIN
        return True
