"""
Itinerary selection for TripWise.

Given an ordered route, a starting waypoint and budget/time ceilings,
``walk_itinerary`` follows the route (wrapping from the last waypoint
back to the first) and keeps visiting waypoints while both running
totals stay within their ceilings. The entry that was appended when the
loop stopped is then dropped, so the walk ends on the last waypoint
visited before a ceiling was exceeded.

The walk is made of ``SelectedStop`` snapshots, so editing the route
afterwards does not change an itinerary already produced.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from tripwise.errors import EmptyRoute, InvalidStartIndex
from tripwise.models import Coordinate, Waypoint
from tripwise.sequence import OrderedSequence

SECONDS_PER_DAY = 24 * 3600


@dataclass(frozen=True)
class SelectedStop:
    name: str
    visit_duration: float
    visit_cost: float
    edge_distance_to_next: float
    edge_duration_to_next: float
    # locates the stop on a map; names are not unique
    coordinate: Optional[Coordinate] = None

    @classmethod
    def from_waypoint(cls, waypoint: Waypoint) -> "SelectedStop":
        return cls(
            name=waypoint.name,
            visit_duration=waypoint.visit_duration,
            visit_cost=waypoint.visit_cost,
            edge_distance_to_next=waypoint.edge_distance_to_next,
            edge_duration_to_next=waypoint.edge_duration_to_next,
            coordinate=waypoint.coordinate,
        )


@dataclass(frozen=True)
class WalkSummary:
    total_cost: float
    total_duration: float  # visits plus travel
    total_distance: float


def walk_itinerary(
    route: OrderedSequence[Waypoint],
    start_index: int,
    budget_ceiling: float,
    time_ceiling: float,
) -> List[SelectedStop]:
    """Select the budget- and time-bounded walk over ``route``.

    Args:
        route: Ordered route, treated as circular.
        start_index: Position of the first waypoint to visit.
        budget_ceiling: Maximum accumulated visit cost.
        time_ceiling: Maximum accumulated visit plus travel duration.

    Returns:
        The visited stops in order. Never longer than the route: after
        one full cycle the walk stops even if both ceilings still hold.

    Raises:
        EmptyRoute: If ``route`` has no waypoints.
        InvalidStartIndex: If ``start_index`` is not a valid position.
    """
    n = route.size()
    if n == 0:
        raise EmptyRoute("Cannot walk an empty route")
    if start_index < 0 or start_index >= n:
        raise InvalidStartIndex(start_index, n)

    walk: List[SelectedStop] = []
    budget_used = 0.0
    time_used = 0.0
    index = start_index
    iterations = 0
    # n + 1 iterations cover one full cycle plus the entry dropped below
    while budget_used <= budget_ceiling and time_used <= time_ceiling and iterations <= n:
        waypoint = route.get(index)
        walk.append(SelectedStop.from_waypoint(waypoint))
        budget_used += waypoint.visit_cost
        time_used += waypoint.visit_duration + waypoint.edge_duration_to_next
        index = (index + 1) % n
        iterations += 1
    if walk:
        walk.pop()
    return walk


def summarise_walk(walk: Sequence[SelectedStop]) -> WalkSummary:
    """Total cost, duration and travelled distance of a walk."""
    return WalkSummary(
        total_cost=sum(stop.visit_cost for stop in walk),
        total_duration=sum(stop.visit_duration + stop.edge_duration_to_next for stop in walk),
        total_distance=sum(stop.edge_distance_to_next for stop in walk),
    )


def day_to_sec(days: float) -> float:
    return days * SECONDS_PER_DAY


def sec_to_day(seconds: float) -> float:
    return seconds / SECONDS_PER_DAY


def meter_to_km(meters: float) -> float:
    return meters / 1000.0


def format_itinerary_text(walk: Sequence[SelectedStop], currency: str = "USD") -> str:
    """Format the walk and its totals for display or messaging.

    Durations are expected in seconds and distances in meters.
    """
    if not walk:
        return "No stop fits within the given budget and time."
    lines = ["Here is your itinerary:\n"]
    for i, stop in enumerate(walk, start=1):
        lines.append(
            f"{i}. {stop.name}: spend {sec_to_day(stop.visit_duration):.2f} day(s), "
            f"budget {stop.visit_cost:.2f} {currency}"
        )
    summary = summarise_walk(walk)
    lines.append(f"\nTotal budget: {summary.total_cost:.2f} {currency}")
    lines.append(f"Total duration: {sec_to_day(summary.total_duration):.2f} day(s)")
    lines.append(f"Distance travelled by driving: {meter_to_km(summary.total_distance):.1f} km")
    return "\n".join(lines)
