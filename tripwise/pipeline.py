"""
End-to-end helpers wiring the TripWise modules together.

``update_database`` is what the staff view runs after editing: the
waypoints are re-ordered with the nearest insertion heuristic, the legs
of the new order are fetched from the edge weight provider, and the
result is written back to disk. ``plan_itinerary`` is the customer-side
entry point working in days and currency units.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Union

from tripwise.models import Waypoint
from tripwise.optimisation import build_route
from tripwise.routing import EdgeWeightProvider, driving_edge_weights, enrich_route
from tripwise.schedule import SelectedStop, day_to_sec, walk_itinerary
from tripwise.sequence import OrderedSequence
from tripwise.storage import save_waypoints

LOGGER = logging.getLogger(__name__)


def sort_and_enrich(
    waypoints: Iterable[Waypoint],
    provider: EdgeWeightProvider = driving_edge_weights,
) -> OrderedSequence[Waypoint]:
    """Order waypoints into a route and fetch the legs of that order."""
    LOGGER.info("Sorting waypoints")
    route = build_route(waypoints)
    LOGGER.info("Fetching distances for %d legs", max(route.size() - 1, 0))
    enrich_route(route, provider)
    return route


def update_database(
    waypoints: Iterable[Waypoint],
    path: Union[str, Path],
    provider: EdgeWeightProvider = driving_edge_weights,
) -> OrderedSequence[Waypoint]:
    """Re-sort, re-enrich and persist the waypoint database.

    Returns:
        The new route, in the order it was written.
    """
    route = sort_and_enrich(waypoints, provider)
    save_waypoints(route, path)
    return route


def plan_itinerary(
    route: OrderedSequence[Waypoint],
    start_index: int,
    budget: float,
    days: float,
) -> List[SelectedStop]:
    """Walk ``route`` from ``start_index`` within ``budget`` and ``days``."""
    LOGGER.info("Planning itinerary from index %d with budget %.2f over %.2f day(s)", start_index, budget, days)
    return walk_itinerary(route, start_index, budget, day_to_sec(days))
