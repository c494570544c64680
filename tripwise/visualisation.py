"""
Map visualisation utilities for TripWise.

This module provides a helper function to build an interactive map
using the Folium library. It draws the full route as a thin polyline,
then renders numbered markers and a thicker polyline for the stops of
the selected walk. The map can be embedded directly in a Streamlit app
via ``streamlit_folium``.
"""

from __future__ import annotations

from typing import Optional, Sequence

import folium

from tripwise.models import Waypoint
from tripwise.schedule import SelectedStop


def create_folium_map(
    route: Sequence[Waypoint],
    walk: Optional[Sequence[SelectedStop]] = None,
) -> folium.Map:
    """Create a Folium map of the route with the walk highlighted.

    Walk stops are placed at their own coordinate; stops without one
    are matched to a route waypoint by name.

    Args:
        route: Ordered route waypoints.
        walk: Selected stops to number and highlight.

    Returns:
        A Folium Map object ready for display.
    """
    stops = list(route)
    if not stops:
        return folium.Map(location=[0, 0], zoom_start=2)
    # Compute map centre as the mean of all coordinates
    avg_lat = sum(w.lat for w in stops) / len(stops)
    avg_lon = sum(w.lon for w in stops) / len(stops)
    m = folium.Map(location=[avg_lat, avg_lon], zoom_start=6, tiles="OpenStreetMap")
    folium.PolyLine([[w.lat, w.lon] for w in stops], color="gray", weight=2, opacity=0.5).add_to(m)

    by_name = {w.name: w.coordinate for w in stops}
    visited = []
    for stop in walk or []:
        if stop.coordinate is not None:
            visited.append((stop.name, stop.coordinate))
        elif stop.name in by_name:
            visited.append((stop.name, by_name[stop.name]))
    for order, (name, (lat, lon)) in enumerate(visited, start=1):
        folium.Marker(
            location=[lat, lon],
            popup=folium.Popup(f"{order}. {name}", parse_html=True),
            icon=folium.DivIcon(html=f"<div style='font-size: 12px; color: white; background-color: #007bff; border-radius: 50%; width: 24px; height: 24px; text-align: center; line-height: 24px;'>{order}</div>")
        ).add_to(m)
    if len(visited) > 1:
        folium.PolyLine([[lat, lon] for _, (lat, lon) in visited], color="blue", weight=4, opacity=0.6).add_to(m)
    return m
