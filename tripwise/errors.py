"""
Exception types raised by TripWise.

The core (sequence, route building and itinerary walking) raises these
immediately at the point of violation and never retries. Host code is
expected to catch them and turn them into user-facing messages.
"""

from __future__ import annotations


class TripwiseError(Exception):
    """Base class for every error raised by the package."""


class IndexOutOfRange(TripwiseError, IndexError):
    """A positional access fell outside the valid bounds of a sequence."""

    def __init__(self, index: int, size: int, operation: str) -> None:
        self.index = index
        self.size = size
        self.operation = operation
        super().__init__(f"{operation}: index {index} out of range for sequence of size {size}")


class EmptyInput(TripwiseError, ValueError):
    """An operation that needs at least one element was given none."""


class EmptyRoute(EmptyInput):
    """A walk was requested over a route with no waypoints."""


class InvalidStartIndex(TripwiseError, IndexError):
    """A walk was requested from a position that does not exist in the route."""

    def __init__(self, index: int, size: int) -> None:
        self.index = index
        self.size = size
        super().__init__(f"start index {index} is not in [0, {size})")


class EdgeWeightError(TripwiseError):
    """An edge weight provider could not supply distance/duration for a leg."""


class DatabaseFormatError(TripwiseError, ValueError):
    """The waypoint database file could not be parsed."""
