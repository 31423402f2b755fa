"""
Simulation result - Immutable snapshot of a finished (or halted) run.
"""

from __future__ import annotations

from dataclasses import dataclass

from .pose import Pose


@dataclass(frozen=True)
class SimulationResult:
    """What the robot reached before the sequence ended or halted."""

    visited_cells: tuple[tuple[int, int], ...]  # First-visit order, start included
    samples: tuple[str, ...]  # Collection order, duplicates kept
    battery: int
    final_pose: Pose

    def to_dict(self) -> dict:
        """Wire format. Field names are part of the public contract."""
        return {
            "VisitedCells": [{"X": x, "Y": y} for x, y in self.visited_cells],
            "SamplesCollected": list(self.samples),
            "Battery": self.battery,
            "FinalPosition": self.final_pose.to_dict(),
        }
