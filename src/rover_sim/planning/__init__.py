"""
Planning layer - Battery-aware path search.

- Pathfinder: A* over (x, y, facing)
- PathResult: {commands, battery, success} outcome
- PriorityQueue: heapq frontier with deterministic tie-breaking
"""

from .priority_queue import PriorityQueue
from .pathfinder import PathResult, Pathfinder

__all__ = ["PriorityQueue", "PathResult", "Pathfinder"]
