"""
Terrain visualizer - Renders the grid and robot as a JPEG.

One square per cell colored by terrain type, with overlays for
visited cells, a planned path and the robot's heading.
"""

from __future__ import annotations

import cv2
import numpy as np

from rover_sim.config import RENDER_CELL_PX, RENDER_QUALITY, TERRAIN_COLORS
from rover_sim.robot import Pose

from .terrain_map import TerrainMap


# Colors (BGR)
_WHITE = (255, 255, 255)
_BLACK = (0, 0, 0)
_GRID = (40, 40, 40)
_PATH = (0, 220, 255)


class TerrainVisualizer:
    """Renders a TerrainMap and robot state as an OpenCV image."""

    def __init__(self, cell_px: int = RENDER_CELL_PX, quality: int = RENDER_QUALITY):
        self.cell_px = cell_px
        self.quality = quality

    def render(
        self,
        terrain: TerrainMap,
        pose: Pose | None = None,
        visited: list[tuple[int, int]] = (),
        path_cells: list[tuple[int, int]] = (),
    ) -> bytes:
        """Render terrain with overlays.

        Args:
            terrain: Map to draw.
            pose: Robot pose (None = no robot marker).
            visited: Cells to dim as already visited.
            path_cells: Cells of a planned path, drawn as a polyline.

        Returns:
            JPEG bytes.
        """
        return self._encode(self.draw(terrain, pose, visited, path_cells), self.quality)

    def draw(self, terrain: TerrainMap, pose=None, visited=(), path_cells=()) -> np.ndarray:
        """Same as render() but returns the BGR image."""
        px = self.cell_px
        image = np.zeros((terrain.height * px, terrain.width * px, 3), dtype=np.uint8)

        for y, row in enumerate(terrain.rows):
            for x, cell in enumerate(row):
                color = TERRAIN_COLORS.get(cell, _WHITE)
                cv2.rectangle(image, (x * px, y * px), ((x + 1) * px - 1, (y + 1) * px - 1), color, -1)

        for x, y in visited:
            self._dim_cell(image, x, y)

        self._draw_grid(image, terrain)

        if len(path_cells) > 1:
            points = np.array([self._center(x, y) for x, y in path_cells], dtype=np.int32)
            cv2.polylines(image, [points], False, _PATH, max(1, px // 12))

        for y, row in enumerate(terrain.rows):
            for x, cell in enumerate(row):
                cv2.putText(
                    image, cell, (x * px + 4, y * px + px // 3),
                    cv2.FONT_HERSHEY_SIMPLEX, px / 120, _WHITE, 1,
                )

        if pose is not None:
            self._draw_robot(image, pose)

        return image

    # ── Drawing helpers ─────────────────────────────────────────

    def _center(self, x: int, y: int) -> tuple[int, int]:
        half = self.cell_px // 2
        return (x * self.cell_px + half, y * self.cell_px + half)

    def _dim_cell(self, image: np.ndarray, x: int, y: int) -> None:
        px = self.cell_px
        region = image[y * px:(y + 1) * px, x * px:(x + 1) * px]
        region[:] = (region * 0.5).astype(np.uint8)

    def _draw_grid(self, image: np.ndarray, terrain: TerrainMap) -> None:
        px = self.cell_px
        for x in range(1, terrain.width):
            cv2.line(image, (x * px, 0), (x * px, terrain.height * px), _GRID, 1)
        for y in range(1, terrain.height):
            cv2.line(image, (0, y * px), (terrain.width * px, y * px), _GRID, 1)

    def _draw_robot(self, image: np.ndarray, pose: Pose) -> None:
        cx, cy = self._center(pose.x, pose.y)
        radius = self.cell_px // 3
        cv2.circle(image, (cx, cy), radius, _WHITE, -1)
        dx, dy = pose.facing.delta  # Image y grows down, same as grid y
        tip = (cx + dx * radius, cy + dy * radius)
        cv2.arrowedLine(image, (cx, cy), tip, _BLACK, 2, tipLength=0.5)

    @staticmethod
    def _encode(image: np.ndarray, quality: int = 80) -> bytes:
        ret, jpeg = cv2.imencode(
            ".jpg", image, [cv2.IMWRITE_JPEG_QUALITY, quality],
        )
        if not ret:
            return b""
        return jpeg.tobytes()

