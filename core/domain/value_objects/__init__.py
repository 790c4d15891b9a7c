"""Domain value objects."""

from .value_objects import ExecutionID, Money

__all__ = [
    "ExecutionID",
    "Money",
]
