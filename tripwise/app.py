"""
Streamlit application for TripWise itinerary planning.

This script loads the waypoint database, lets a customer plan a
budget- and time-bounded itinerary over the stored route, and lets
staff add, edit or delete locations. Saving staff edits re-sorts the
route and fetches fresh driving distances before writing the database
back to disk.

To run this app locally for development, install the package and
execute:

    streamlit run tripwise/app.py

The database path is read from ``st.secrets["TRIPWISE_DATABASE"]`` when
set, otherwise from the ``TRIPWISE_DATABASE`` environment variable.
"""

from __future__ import annotations

import logging
import random
from typing import List, Tuple

import streamlit as st
from streamlit_folium import folium_static

import os
import sys
# Make the package importable when run as a script via `streamlit run tripwise/app.py`.
current_dir = os.path.dirname(__file__)
parent_dir = os.path.dirname(current_dir)
if parent_dir not in sys.path:
    sys.path.append(parent_dir)

from tripwise import config
from tripwise.errors import TripwiseError
from tripwise.geocode import geocode_address
from tripwise.models import Waypoint
from tripwise.optimisation import route_length
from tripwise.pipeline import plan_itinerary, update_database
from tripwise.schedule import (
    SelectedStop,
    day_to_sec,
    format_itinerary_text,
    meter_to_km,
    sec_to_day,
    summarise_walk,
)
from tripwise.sequence import OrderedSequence
from tripwise.storage import load_waypoints
from tripwise.visualisation import create_folium_map

LOGGER = logging.getLogger(__name__)

RANDOM_START = "Surprise me"


def database_path() -> str:
    """Return the configured database path, preferring Streamlit secrets."""
    try:
        return st.secrets.get("TRIPWISE_DATABASE", config.DATABASE_PATH)
    except FileNotFoundError:
        # no secrets.toml present
        return config.DATABASE_PATH


def load_database(path: str) -> OrderedSequence[Waypoint]:
    """Load the database into the session once and return it."""
    if st.session_state.get("db_path") != path:
        st.session_state["waypoints"] = load_waypoints(path, geocoder=geocode_address)
        st.session_state["db_path"] = path
        st.session_state["edited"] = False
    return st.session_state["waypoints"]


def walk_table(walk: List[SelectedStop]) -> List[dict]:
    return [
        {
            "Order": i,
            "Location": stop.name,
            "Days here": round(sec_to_day(stop.visit_duration), 2),
            "Budget (USD)": stop.visit_cost,
            "Drive to next (km)": round(meter_to_km(stop.edge_distance_to_next), 1),
        }
        for i, stop in enumerate(walk, start=1)
    ]


def edit_defaults(waypoint: Waypoint) -> Tuple[float, float]:
    """Current visit days and budget, used to pre-fill the edit form."""
    return sec_to_day(waypoint.visit_duration), float(waypoint.visit_cost)


def apply_edit(waypoint: Waypoint, days: float, budget: float) -> None:
    waypoint.visit_duration = day_to_sec(days)
    waypoint.visit_cost = budget


def staff_table(route: OrderedSequence[Waypoint]) -> List[dict]:
    return [{"Location": w.name, "Days": round(sec_to_day(w.visit_duration), 2), "Budget (USD)": w.visit_cost} for w in route]


def customer_view(route: OrderedSequence[Waypoint]) -> None:
    st.subheader("Plan an itinerary")
    names = [w.name for w in route]
    with st.form("plan_form"):
        start_choice = st.selectbox("Where do you want to start your trip?", [RANDOM_START] + names)
        days = st.number_input("How much time do you have? (days)", min_value=0.5, value=3.0, step=0.5)
        budget = st.number_input("How much budget do you have? (USD)", min_value=1, value=500, step=50)
        submitted = st.form_submit_button("Plan my trip")
    if not submitted:
        return

    if start_choice == RANDOM_START:
        start_index = random.randrange(route.size())
    else:
        start_index = names.index(start_choice)
    try:
        walk = plan_itinerary(route, start_index, float(budget), float(days))
    except TripwiseError as exc:
        st.error(f"Could not plan the itinerary: {exc}")
        return

    if not walk:
        st.warning("Even the first stop does not fit within your budget and time.")
        return
    summary = summarise_walk(walk)
    st.success(
        f"{len(walk)} stop(s), {summary.total_cost:.2f} USD, "
        f"{sec_to_day(summary.total_duration):.2f} day(s), "
        f"{meter_to_km(summary.total_distance):.1f} km of driving"
    )
    st.table(walk_table(walk))
    fol_map = create_folium_map(route, walk)
    folium_static(fol_map, width=700, height=500)
    st.text_area("Itinerary", format_itinerary_text(walk), height=200)


def staff_view(route: OrderedSequence[Waypoint], path: str) -> None:
    st.subheader("Manage locations")
    names = [w.name for w in route]

    with st.expander("Add location", expanded=False):
        with st.form("add_form"):
            name = st.text_input("Name of location")
            days = st.number_input("Time to spend there (days)", min_value=0.0, value=1.0, step=0.5, key="add_days")
            budget = st.number_input("Budget needed to visit (USD)", min_value=0.0, value=100.0, key="add_budget")
            if st.form_submit_button("Add"):
                coord = geocode_address(name.strip()) if name.strip() else None
                if coord is None:
                    st.error("Could not find that location. Please check the name.")
                else:
                    # new locations go right after the first stop, the next save re-sorts them
                    route.insert_at(min(1, route.size()), Waypoint(name.strip(), coord, day_to_sec(days), budget))
                    st.session_state["edited"] = True
                    st.success(f"Added {name.strip()}")

    if names:
        with st.expander("Edit location", expanded=False):
            index = st.selectbox("Location", range(len(names)), format_func=lambda i: names[i], key="edit_idx")
            waypoint = route.get(index)
            current_days, current_budget = edit_defaults(waypoint)
            with st.form("edit_form"):
                # keyed per waypoint so the fields reload when another location is picked
                days = st.number_input("Time to spend there (days)", min_value=0.0, value=current_days, step=0.5, key=f"edit_days_{id(waypoint)}")
                budget = st.number_input("Budget needed to visit (USD)", min_value=0.0, value=current_budget, key=f"edit_budget_{id(waypoint)}")
                if st.form_submit_button("Save changes"):
                    apply_edit(waypoint, days, budget)
                    st.session_state["edited"] = True
                    st.success(f"Edited {waypoint.name}")

        with st.expander("Delete location", expanded=False):
            with st.form("delete_form"):
                index = st.selectbox("Location", range(len(names)), format_func=lambda i: names[i], key="del_idx")
                if st.form_submit_button("Delete"):
                    removed = route.remove_at(index)
                    st.session_state["edited"] = True
                    st.success(f"Deleted {removed.name}")

    st.table(staff_table(route))
    st.caption(f"Straight-line length of the stored route: {route_length(route):.0f} km")

    if st.button("Save and re-sort", disabled=not st.session_state.get("edited")):
        try:
            with st.spinner("Sorting locations and fetching distances…"):
                st.session_state["waypoints"] = update_database(route, path)
        except TripwiseError as exc:
            st.error(f"Could not update the database: {exc}")
            return
        st.session_state["edited"] = False
        st.success("Database updated.")


def main():
    logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    st.set_page_config(page_title="TripWise", layout="wide")
    st.title("TripWise trip planner")
    path = database_path()
    try:
        route = load_database(path)
    except (OSError, TripwiseError) as exc:
        LOGGER.error("Could not load %s: %s", path, exc)
        st.error(f"Could not load the database {path}: {exc}")
        st.stop()
    if route.is_empty():
        st.warning("The database has no locations yet.")

    plan_tab, staff_tab = st.tabs(["Plan an itinerary", "I'm staff"])
    with plan_tab:
        if not route.is_empty():
            customer_view(route)
    with staff_tab:
        staff_view(route, path)


if __name__ == "__main__":
    main()
