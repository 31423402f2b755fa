"""
Terrain layer - Read-only world model.

- TerrainMap: bounds, obstacle and terrain-type queries
- TerrainVisualizer (terrain.visualizer): JPEG rendering, needs OpenCV
"""

from .terrain_map import TerrainMap

__all__ = ["TerrainMap"]
