"""
Robot layer - Value types shared by execution and planning.

Contains:
- Orientation, Pose: where the robot is and which way it faces
- Command: the six-symbol command alphabet and its battery costs
- SimulationResult: snapshot returned by a run
"""

from .pose import Orientation, Pose
from .commands import Command, parse_commands
from .result import SimulationResult

__all__ = ["Orientation", "Pose", "Command", "parse_commands", "SimulationResult"]
