"""
Data types shared across TripWise.

A :class:`Waypoint` is a named stop with a fixed coordinate, an expected
visit duration and a visit cost. The ``edge_*_to_next`` fields describe
the leg to the waypoint's successor in a particular route and are
rewritten by :func:`tripwise.routing.enrich_route` whenever that
successor changes.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Tuple

Coordinate = Tuple[float, float]


def validate_coordinate(coord: Coordinate) -> Coordinate:
    """Check that ``coord`` is a finite ``(lat, lon)`` pair in degrees.

    Returns the coordinate as a tuple of floats, raising ``ValueError``
    otherwise.
    """
    lat, lon = float(coord[0]), float(coord[1])
    if not (math.isfinite(lat) and math.isfinite(lon)):
        raise ValueError(f"Coordinate must be finite, got ({lat}, {lon})")
    if not -90.0 <= lat <= 90.0:
        raise ValueError(f"Latitude {lat} outside [-90, 90]")
    if not -180.0 <= lon <= 180.0:
        raise ValueError(f"Longitude {lon} outside [-180, 180]")
    return lat, lon


@dataclass(eq=False)
class Waypoint:
    """A named geographic stop.

    Waypoints compare by identity: two instances sharing a name are
    still distinct route elements. ``coordinate`` cannot be reassigned
    once set.
    """

    name: str
    coordinate: Coordinate
    visit_duration: float = 0.0
    visit_cost: float = 0.0
    edge_distance_to_next: float = 0.0
    edge_duration_to_next: float = 0.0

    def __post_init__(self) -> None:
        if self.visit_duration < 0:
            raise ValueError(f"{self.name}: visit duration must be non-negative")
        if self.visit_cost < 0:
            raise ValueError(f"{self.name}: visit cost must be non-negative")

    def __setattr__(self, key: str, value: Any) -> None:
        if key == "coordinate":
            if "coordinate" in self.__dict__:
                raise AttributeError("Waypoint coordinate is immutable once set")
            value = (value[0], value[1])
        super().__setattr__(key, value)

    @property
    def lat(self) -> float:
        return self.coordinate[0]

    @property
    def lon(self) -> float:
        return self.coordinate[1]
