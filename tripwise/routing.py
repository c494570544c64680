"""
Distance utilities and edge weight providers for TripWise.

``haversine_distance`` is the great-circle metric used to order
waypoints. It is pure and cheap, so route ordering never touches the
network.

Once a route order is fixed, each waypoint's leg to its successor is
filled in by an *edge weight provider*: any callable taking two
waypoints and returning ``(distance_m, duration_s)`` or ``None``. The
default provider asks OSRM (Open Source Routing Machine) for the
driving distance and falls back to a Haversine estimate with a
constant speed when OSRM is unavailable.

Example usage:

    route = build_route(waypoints)
    enrich_route(route, driving_edge_weights)

Use your own OSRM server in production; the public demo server is
rate limited.
"""

from __future__ import annotations

import logging
import math
from typing import Callable, Optional, Tuple

import requests

from tripwise import config
from tripwise.errors import EdgeWeightError
from tripwise.models import Coordinate, Waypoint
from tripwise.sequence import OrderedSequence

LOGGER = logging.getLogger(__name__)

EARTH_RADIUS_KM = 6371.0088

EdgeWeights = Tuple[float, float]
EdgeWeightProvider = Callable[[Waypoint, Waypoint], Optional[EdgeWeights]]


def haversine_distance(coord1: Coordinate, coord2: Coordinate) -> float:
    """Compute the great‑circle distance between two coordinates in kilometers."""
    lat1, lon1 = coord1
    lat2, lon2 = coord2
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)
    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    # rounding can push a just above 1 for near-antipodal points
    a = min(1.0, a)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def osrm_edge_weights(origin: Waypoint, destination: Waypoint) -> Optional[EdgeWeights]:
    """Ask the OSRM route service for the driving leg between two waypoints.

    Args:
        origin: Waypoint the leg starts from.
        destination: Waypoint the leg ends at.

    Returns:
        ``(distance_m, duration_s)`` if successful, otherwise ``None``.
    """
    # OSRM expects lon,lat order and semicolon separated list
    locs = f"{origin.lon},{origin.lat};{destination.lon},{destination.lat}"
    url = f"{config.OSRM_BASE_URL}/route/v1/{config.OSRM_PROFILE}/{locs}"
    try:
        resp = requests.get(url, params={"overview": "false"}, timeout=config.REQUEST_TIMEOUT_S)
        resp.raise_for_status()
        data = resp.json()
    except (requests.RequestException, ValueError) as exc:
        LOGGER.warning("OSRM request for %s -> %s failed: %s", origin.name, destination.name, exc)
        return None
    routes = data.get("routes") or []
    if data.get("code") != "Ok" or not routes:
        LOGGER.warning("OSRM found no route for %s -> %s (code=%s)", origin.name, destination.name, data.get("code"))
        return None
    return float(routes[0]["distance"]), float(routes[0]["duration"])


def haversine_edge_weights(
    origin: Waypoint,
    destination: Waypoint,
    speed_kmh: Optional[float] = None,
) -> EdgeWeights:
    """Estimate a leg from great-circle distance and a constant speed.

    Returns:
        ``(distance_m, duration_s)``.
    """
    speed = speed_kmh if speed_kmh is not None else config.FALLBACK_SPEED_KMH
    dist_km = haversine_distance(origin.coordinate, destination.coordinate)
    return dist_km * 1000.0, dist_km / speed * 3600.0


def driving_edge_weights(origin: Waypoint, destination: Waypoint) -> EdgeWeights:
    """Driving leg from OSRM, falling back to a Haversine estimate."""
    weights = osrm_edge_weights(origin, destination)
    if weights is not None:
        return weights
    LOGGER.info("Falling back to Haversine estimate for %s -> %s", origin.name, destination.name)
    return haversine_edge_weights(origin, destination)


def enrich_route(
    route: OrderedSequence[Waypoint],
    provider: EdgeWeightProvider = driving_edge_weights,
    wrap: bool = False,
) -> OrderedSequence[Waypoint]:
    """Populate ``edge_distance_to_next``/``edge_duration_to_next`` in place.

    Every waypoint but the last gets the weights of the leg to its
    successor. The last waypoint gets zeros, or the leg back to the
    first waypoint when ``wrap`` is true.

    Args:
        route: Ordered route to enrich.
        provider: Edge weight provider called once per leg.
        wrap: Whether to also fetch the closing leg.

    Returns:
        The same ``route`` for chaining.

    Raises:
        EdgeWeightError: If the provider returns ``None`` for a leg.
    """
    n = route.size()
    for i in range(n):
        current = route.get(i)
        if i == n - 1 and not (wrap and n > 1):
            current.edge_distance_to_next = 0.0
            current.edge_duration_to_next = 0.0
            continue
        successor = route.get((i + 1) % n)
        LOGGER.debug("Fetching leg %s -> %s", current.name, successor.name)
        weights = provider(current, successor)
        if weights is None:
            raise EdgeWeightError(f"No distance available for {current.name} -> {successor.name}")
        distance_m, duration_s = weights
        current.edge_distance_to_next = float(distance_m)
        current.edge_duration_to_next = float(duration_s)
    return route
