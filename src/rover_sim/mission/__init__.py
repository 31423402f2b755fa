"""
Mission layer - Multi-leg sample collection planning.
"""

from .planner import MissionPlanner

__all__ = ["MissionPlanner"]
