"""
Control Layer - Execution.

- RobotState: executes one command at a time
- CommandInterpreter: runs a whole sequence, halting on failure
"""

from .robot_state import RobotState
from .interpreter import CommandInterpreter

__all__ = ["RobotState", "CommandInterpreter"]
