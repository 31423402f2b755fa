"""
Terrain map - Read-only queries over the terrain grid.

The grid is caller-supplied and never modified. Rows are indexed
by y, columns by x: cell (x, y) is grid[y][x].
"""

from __future__ import annotations

from collections import deque

from rover_sim.config import OBSTACLE


class TerrainMap:
    """
    Bounds and obstacle queries over a rectangular terrain grid.

    Usage:
        terrain = TerrainMap([["Fe", "Fe", "Se"], ["W", "Si", "Obs"]])
        terrain.is_obstacle(2, 1)   # True
        terrain.is_obstacle(3, 0)   # True (out of bounds)
        terrain.cell_at(1, 1)       # "Si"

    Shape is not checked here; see simulation.validate_terrain.
    """

    def __init__(self, grid):
        # Private copy so a caller mutating their lists can't affect a run
        self._rows: tuple[tuple[str, ...], ...] = tuple(tuple(row) for row in grid)
        self.height = len(self._rows)
        self.width = len(self._rows[0]) if self._rows else 0

    @property
    def rows(self) -> tuple[tuple[str, ...], ...]:
        return self._rows

    @property
    def cell_count(self) -> int:
        return self.width * self.height

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def cell_at(self, x: int, y: int) -> str:
        """Terrain type at (x, y). Raises IndexError when out of bounds."""
        if not self.in_bounds(x, y):
            raise IndexError(f"Cell ({x}, {y}) is outside {self.width}x{self.height} terrain")
        return self._rows[y][x]

    def is_obstacle(self, x: int, y: int) -> bool:
        """True for obstacle cells and anything off the map."""
        if not self.in_bounds(x, y):
            return True
        return self._rows[y][x] == OBSTACLE

    def terrain_types(self) -> list[str]:
        """Distinct non-obstacle types, in row-major first-appearance order."""
        seen: dict[str, None] = {}
        for row in self._rows:
            for cell in row:
                if cell != OBSTACLE:
                    seen.setdefault(cell)
        return list(seen)

    def locations_of(self, terrain_type: str) -> list[tuple[int, int]]:
        """All (x, y) cells of a type, row-major."""
        return [
            (x, y)
            for y, row in enumerate(self._rows)
            for x, cell in enumerate(row)
            if cell == terrain_type
        ]

    def reachable_from(self, x: int, y: int) -> set[tuple[int, int]]:
        """Cells connected to (x, y) through 4-neighbour non-obstacle steps."""
        if self.is_obstacle(x, y):
            return set()
        seen = {(x, y)}
        queue = deque(seen)
        while queue:
            cx, cy = queue.popleft()
            for nx, ny in ((cx + 1, cy), (cx - 1, cy), (cx, cy + 1), (cx, cy - 1)):
                if (nx, ny) not in seen and not self.is_obstacle(nx, ny):
                    seen.add((nx, ny))
                    queue.append((nx, ny))
        return seen

    def __repr__(self) -> str:
        return f"TerrainMap({self.width}x{self.height})"
