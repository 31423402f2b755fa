"""
Battery-aware A* over (x, y, facing).

Every command is one search step. Moves and turns also carry a
battery delta, and a step that would leave the battery at or
below zero is never taken, so any path found can be executed
without the robot's automatic recharge kicking in.

Search nodes are poses, not (pose, battery) pairs: the battery
stored for a pose is the one it was first (or best) reached with.
ExtendPanels is generated as an edge, but as a self-loop it can
never lower a pose's g-score, so returned paths contain only
moves and turns.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from rover_sim.config import BATTERY_DELTAS
from rover_sim.robot import Command, Pose
from rover_sim.terrain import TerrainMap

from .priority_queue import PriorityQueue

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PathResult:
    """Outcome of a path search or mission plan."""

    commands: tuple[Command, ...]
    battery: int  # Battery after the last command (unchanged on failure)
    success: bool
    final_pose: Pose | None = None  # Arrival pose, None on failure

    @classmethod
    def failed(cls, battery: int, commands=()) -> PathResult:
        return cls(commands=tuple(commands), battery=battery, success=False)

    def __len__(self) -> int:
        return len(self.commands)

    def to_dict(self) -> dict:
        """Wire format: {"commands", "battery", "success"}."""
        return {
            "commands": [c.value for c in self.commands],
            "battery": self.battery,
            "success": self.success,
        }


class Pathfinder:
    """
    Shortest command sequence between two cells.

    Usage:
        pathfinder = Pathfinder(terrain)
        result = pathfinder.find_path(Pose(0, 0, Orientation.EAST), (2, 0), battery=50)
        if result.success:
            robot.execute_commands(result.commands)

    The target is assumed to be in bounds and not an obstacle;
    see simulation.validate_target.
    """

    def __init__(self, terrain: TerrainMap):
        self.terrain = terrain

    def find_path(self, start: Pose, target: tuple[int, int], battery: int) -> PathResult:
        tx, ty = target

        frontier: PriorityQueue[Pose] = PriorityQueue()
        g_score: dict[Pose, int] = {start: 0}
        batteries: dict[Pose, int] = {start: battery}
        came_from: dict[Pose, tuple[Pose, Command]] = {}
        closed: set[Pose] = set()

        frontier.push(start, start.manhattan(tx, ty))
        expanded = 0

        while frontier:
            current, _ = frontier.pop()
            if current in closed:
                continue  # Stale entry, a better one was already expanded

            if current.x == tx and current.y == ty:
                commands = self._reconstruct(came_from, current)
                logger.debug(
                    f"Path ({start.x}, {start.y}) -> ({tx}, {ty}): "
                    f"{len(commands)} steps, {expanded} expanded"
                )
                return PathResult(
                    commands=commands,
                    battery=batteries[current],
                    success=True,
                    final_pose=current,
                )

            closed.add(current)
            expanded += 1

            for command, neighbor in self._neighbors(current):
                if neighbor in closed:
                    continue

                new_battery = batteries[current] + BATTERY_DELTAS[command.value]
                if new_battery <= 0:
                    continue

                tentative = g_score[current] + 1
                if neighbor not in g_score or tentative < g_score[neighbor]:
                    came_from[neighbor] = (current, command)
                    g_score[neighbor] = tentative
                    batteries[neighbor] = new_battery
                    frontier.push(neighbor, tentative + neighbor.manhattan(tx, ty))

        logger.debug(f"No path ({start.x}, {start.y}) -> ({tx}, {ty}) after {expanded} expanded")
        return PathResult.failed(battery)

    def _neighbors(self, pose: Pose) -> list[tuple[Command, Pose]]:
        """Edges out of a pose, in a fixed order: L, R, F, B, E."""
        moves = [
            (Command.TURN_LEFT, pose.turned_left()),
            (Command.TURN_RIGHT, pose.turned_right()),
        ]

        forward = pose.step(forward=True)
        if not self.terrain.is_obstacle(forward.x, forward.y):
            moves.append((Command.MOVE_FORWARD, forward))

        backward = pose.step(forward=False)
        if not self.terrain.is_obstacle(backward.x, backward.y):
            moves.append((Command.MOVE_BACKWARD, backward))

        moves.append((Command.EXTEND_PANELS, pose))
        return moves

    @staticmethod
    def _reconstruct(came_from: dict[Pose, tuple[Pose, Command]], end: Pose) -> tuple[Command, ...]:
        commands = []
        node = end
        while node in came_from:
            node, command = came_from[node]
            commands.append(command)
        commands.reverse()
        return tuple(commands)
