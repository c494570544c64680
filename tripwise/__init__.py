"""
TripWise package initialization.

This package provides core functionality for the TripWise itinerary
planner. It orders a pool of waypoints into a single route and selects
a budget- and time-bounded walk over that route.

Modules:
    sequence      – Bounds-checked positional container for routes.
    models        – Waypoint and coordinate types.
    errors        – Exception taxonomy.
    routing       – Haversine metric and edge weight providers (OSRM).
    optimisation  – Nearest insertion heuristic for route ordering.
    schedule      – Budget- and time-bounded itinerary walk.
    geocode       – Functions to geocode location names using Nominatim.
    storage       – Reading and writing the waypoint database file.
    pipeline      – Sort, enrich, save and plan helpers.
    visualisation – Folium based map creation utilities.

The core modules (sequence, optimisation, schedule) do no I/O and never
log; network and file access lives in the remaining modules.
"""

__all__ = [
    "sequence",
    "models",
    "errors",
    "routing",
    "optimisation",
    "schedule",
    "geocode",
    "storage",
    "pipeline",
    "visualisation",
]
