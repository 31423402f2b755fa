"""
Pose - position on the grid plus facing.

Coordinates follow the terrain rows: x grows East (column),
y grows South (row). North is "up" (y - 1).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Orientation(str, Enum):
    """Facing direction. Values are the wire names."""

    NORTH = "North"
    EAST = "East"
    SOUTH = "South"
    WEST = "West"

    def right(self) -> Orientation:
        """Next direction clockwise (N -> E -> S -> W -> N)."""
        return _CLOCKWISE[(_CLOCKWISE.index(self) + 1) % 4]

    def left(self) -> Orientation:
        """Next direction counter-clockwise."""
        return _CLOCKWISE[(_CLOCKWISE.index(self) + 3) % 4]

    @property
    def delta(self) -> tuple[int, int]:
        """(dx, dy) of one step forward."""
        return _DELTAS[self]


_CLOCKWISE = (Orientation.NORTH, Orientation.EAST, Orientation.SOUTH, Orientation.WEST)

_DELTAS = {
    Orientation.NORTH: (0, -1),
    Orientation.EAST: (1, 0),
    Orientation.SOUTH: (0, 1),
    Orientation.WEST: (-1, 0),
}


@dataclass(frozen=True)
class Pose:
    """Robot cell and facing."""

    x: int
    y: int
    facing: Orientation

    @property
    def cell(self) -> tuple[int, int]:
        return (self.x, self.y)

    def step(self, forward: bool = True) -> Pose:
        """Pose one cell forward (or backward), facing unchanged."""
        dx, dy = self.facing.delta
        sign = 1 if forward else -1
        return Pose(self.x + sign * dx, self.y + sign * dy, self.facing)

    def turned_left(self) -> Pose:
        return Pose(self.x, self.y, self.facing.left())

    def turned_right(self) -> Pose:
        return Pose(self.x, self.y, self.facing.right())

    def manhattan(self, x: int, y: int) -> int:
        """Grid distance to (x, y), ignoring facing."""
        return abs(self.x - x) + abs(self.y - y)

    def to_dict(self) -> dict:
        """Wire format: {"Location": {"X", "Y"}, "Facing"}."""
        return {
            "Location": {"X": self.x, "Y": self.y},
            "Facing": self.facing.value,
        }
