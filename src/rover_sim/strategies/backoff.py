"""
Obstacle backoff strategies.

Called by RobotState when a move is blocked by an obstacle or the
map edge. The policy picks an escape maneuver and runs it through
the robot's normal command execution, so every sub-command pays
its own battery cost and may itself trigger further backoff.

The round-robin position is RobotState.backoff_index; it resets
to 0 after any successful move.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

from rover_sim.config import BACKOFF_SEQUENCES
from rover_sim.robot import Command, parse_commands

if TYPE_CHECKING:
    from rover_sim.control.robot_state import RobotState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BackoffStrategy:
    """Fixed escape command sequence."""

    commands: tuple[Command, ...]

    def __str__(self) -> str:
        return "".join(c.value for c in self.commands)


class BackoffPolicy(ABC):
    """Base class for blocked-move recovery."""

    @abstractmethod
    def recover(self, robot: RobotState) -> bool:
        """
        Attempt an escape maneuver in place of a blocked move.

        Args:
            robot: Robot whose move was blocked. Mutated in place.

        Returns:
            True if the maneuver counts as a successful substitute
            for the blocked move, False if the run must halt.
        """
        ...


class FixedBackoffPolicy(BackoffPolicy):
    """
    Try a fixed list of maneuvers, one per blocked move, in order.

    The strategy index is consumed whether or not the maneuver
    succeeds. Once every strategy has been used without an
    intervening successful move, recovery fails immediately and
    costs no battery.
    """

    def __init__(self, sequences=BACKOFF_SEQUENCES):
        self.strategies = tuple(
            BackoffStrategy(tuple(parse_commands(seq))) for seq in sequences
        )

    def __len__(self) -> int:
        return len(self.strategies)

    def recover(self, robot: RobotState) -> bool:
        index = robot.backoff_index
        if index >= len(self.strategies):
            logger.debug(f"Backoff exhausted after {index} strategies")
            return False

        strategy = self.strategies[index]
        robot.backoff_index = index + 1
        logger.debug(
            f"Backoff strategy {index + 1}/{len(self.strategies)}: {strategy} "
            f"at ({robot.pose.x}, {robot.pose.y}) battery={robot.battery}"
        )

        for command in strategy.commands:
            if not robot.execute_command(command):
                logger.debug(f"Backoff strategy {index + 1} failed on {command.value}")
                return False
        return True
