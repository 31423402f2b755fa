"""
Swappable strategy implementations (Strategy pattern).

Each strategy type has an ABC and one or more implementations.
Pass the desired implementation to RobotState.
"""

from .backoff import (
    BackoffPolicy,
    BackoffStrategy,
    FixedBackoffPolicy,
)

__all__ = ["BackoffPolicy", "BackoffStrategy", "FixedBackoffPolicy"]
