"""
Robot command alphabet and fixed battery costs.
"""

from __future__ import annotations

from enum import Enum

from rover_sim.config import COMMAND_COSTS


class Command(str, Enum):
    """Robot command. Values are the wire symbols."""

    MOVE_FORWARD = "F"
    MOVE_BACKWARD = "B"
    TURN_LEFT = "L"
    TURN_RIGHT = "R"
    SAMPLE = "S"
    EXTEND_PANELS = "E"

    @property
    def cost(self) -> int:
        """Battery units paid before the command takes effect."""
        return COMMAND_COSTS[self.value]

    @property
    def is_move(self) -> bool:
        return self in (Command.MOVE_FORWARD, Command.MOVE_BACKWARD)

    @classmethod
    def parse(cls, symbol) -> Command:
        """Command from a symbol like "F" (raises ValueError if unknown)."""
        if isinstance(symbol, cls):
            return symbol
        try:
            return cls(symbol)
        except ValueError:
            raise ValueError(f"Unknown command: {symbol!r}") from None


def parse_commands(symbols) -> list[Command]:
    """Parse a sequence of symbols into commands."""
    return [Command.parse(s) for s in symbols]
