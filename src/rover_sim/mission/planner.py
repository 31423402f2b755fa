"""
Mission planner - One sample of every terrain type.

Chains Pathfinder legs with sample actions:
1. List the non-obstacle terrain types on the map
2. Order them by Manhattan distance from the START pose to their
   nearest cell (computed once, not updated as the plan advances)
3. For each type, path to its closest reachable cell and sample
4. Stop at the first type that can't be reached or sampled

A failed plan still returns the commands built so far; they form
a valid partial mission.
"""

from __future__ import annotations

import logging

from rover_sim.config import EXTEND_PANELS_GAIN, SAMPLE_COST
from rover_sim.robot import Command, Pose
from rover_sim.planning import Pathfinder, PathResult
from rover_sim.terrain import TerrainMap

logger = logging.getLogger(__name__)


class MissionPlanner:
    """
    Builds a sample-collection plan without moving a robot.

    Usage:
        planner = MissionPlanner(terrain)
        plan = planner.generate(Pose(0, 0, Orientation.EAST), battery=50)
        if not plan.success and plan.commands:
            ...  # usable partial plan
    """

    def __init__(self, terrain: TerrainMap, pathfinder: Pathfinder | None = None):
        self.terrain = terrain
        self.pathfinder = pathfinder or Pathfinder(terrain)

    def visit_order(self, start: Pose) -> list[str]:
        """Terrain types by distance from start to their nearest cell."""
        distances = {
            terrain_type: min(start.manhattan(x, y) for x, y in self.terrain.locations_of(terrain_type))
            for terrain_type in self.terrain.terrain_types()
        }
        # Stable sort: equal distances keep map order
        return sorted(distances, key=distances.__getitem__)

    def generate(self, start: Pose, battery: int) -> PathResult:
        commands: list[Command] = []
        pose = start

        order = self.visit_order(start)
        # Moves never leave the start's connected region
        reachable = self.terrain.reachable_from(start.x, start.y)
        logger.info(f"Mission: {len(order)} terrain types, order={order}, battery={battery}")

        for terrain_type in order:
            leg = self._best_leg(pose, terrain_type, battery, reachable)
            if leg is None:
                logger.info(f"Mission: no reachable {terrain_type} from ({pose.x}, {pose.y}) battery={battery}")
                return PathResult.failed(battery, commands)

            commands.extend(leg.commands)
            battery = leg.battery

            if battery >= SAMPLE_COST:
                commands.append(Command.SAMPLE)
                battery -= SAMPLE_COST
            elif battery >= 1:
                commands.extend((Command.EXTEND_PANELS, Command.SAMPLE))
                battery += EXTEND_PANELS_GAIN - Command.EXTEND_PANELS.cost - SAMPLE_COST
            else:
                logger.info(f"Mission: battery empty before sampling {terrain_type}")
                return PathResult.failed(battery, commands)

            pose = leg.final_pose
            logger.info(
                f"Mission: {terrain_type} at ({pose.x}, {pose.y}) in {len(leg)} steps, "
                f"battery={battery}"
            )

        return PathResult(
            commands=tuple(commands),
            battery=battery,
            success=True,
            final_pose=pose,
        )

    def _best_leg(self, pose: Pose, terrain_type: str, battery: int, reachable=None) -> PathResult | None:
        """Shortest successful path to any cell of the type (first wins ties).

        Cells outside `reachable` are skipped, and so is any cell whose
        Manhattan distance already rules out beating the best leg so far.
        """
        best = None
        for location in self.terrain.locations_of(terrain_type):
            if reachable is not None and location not in reachable:
                continue
            if best is not None and pose.manhattan(*location) >= len(best):
                continue
            path = self.pathfinder.find_path(pose, location, battery)
            if path.success and (best is None or len(path) < len(best)):
                best = path
        return best
