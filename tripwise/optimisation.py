"""
Route ordering heuristic for TripWise.

This module implements the greedy *nearest insertion* heuristic for
turning an unordered pool of waypoints into a single route. The first
and last waypoints of the input are used as fixed anchors; every other
waypoint is inserted, in input order, between the pair of consecutive
route elements where it adds the smallest detour.

Ordering uses great-circle distance only. Driving distances are fetched
afterwards for the final order, which keeps the number of provider
calls linear in the number of waypoints.

The result is not globally re-optimised (no 2‑opt pass) and is fully
deterministic for a given input order.
"""

from __future__ import annotations

from typing import Callable, Iterable

from tripwise.errors import EmptyInput
from tripwise.models import Coordinate, Waypoint
from tripwise.routing import haversine_distance
from tripwise.sequence import OrderedSequence

Metric = Callable[[Coordinate, Coordinate], float]


def insertion_cost(
    route: OrderedSequence[Waypoint],
    index: int,
    waypoint: Waypoint,
    metric: Metric = haversine_distance,
) -> float:
    """Extra distance incurred by placing ``waypoint`` after ``route[index]``.

    The value can be negative for metrics that break the triangle
    inequality; no sign is assumed.
    """
    current = route.get(index).coordinate
    following = route.get(index + 1).coordinate
    p = waypoint.coordinate
    return metric(current, p) + metric(p, following) - metric(current, following)


def build_route(
    waypoints: Iterable[Waypoint],
    metric: Metric = haversine_distance,
) -> OrderedSequence[Waypoint]:
    """Order waypoints into a route using nearest insertion.

    Args:
        waypoints: Waypoints in input order. The collection itself is
            not modified.
        metric: Distance function between two coordinates.

    Returns:
        A new ``OrderedSequence`` holding every input waypoint exactly
        once, starting with the first input waypoint and ending with the
        last.

    Raises:
        EmptyInput: If ``waypoints`` is empty.
    """
    pool = list(waypoints)
    if not pool:
        raise EmptyInput("Cannot build a route from zero waypoints")
    if len(pool) <= 2:
        return OrderedSequence(pool)

    route: OrderedSequence[Waypoint] = OrderedSequence([pool[0], pool[-1]])
    for p in pool[1:-1]:
        best_index = 0
        best_cost = insertion_cost(route, 0, p, metric)
        for i in range(1, route.size() - 1):
            cost = insertion_cost(route, i, p, metric)
            # strict comparison keeps the lowest index on ties
            if cost < best_cost:
                best_index = i
                best_cost = cost
        route.insert_at(best_index + 1, p)
    return route


def route_length(route: Iterable[Waypoint], metric: Metric = haversine_distance) -> float:
    """Total great-circle length of a route, not closing the loop."""
    stops = list(route)
    length = 0.0
    for i in range(len(stops) - 1):
        length += metric(stops[i].coordinate, stops[i + 1].coordinate)
    return length
