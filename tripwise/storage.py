"""
Waypoint database file for TripWise.

The database is a plain text file. The first line starts with the
number of records and is followed by a column hint; every following
line holds one waypoint:

    "Liberty Bell"_39.9496_-75.1503_/7200.0/0.0/#540.0#3120.0

The blocks are, in order: the quoted name, ``_lat_lon_`` (optional,
geocoded on load when missing), ``/visit_duration/visit_cost/``
(required) and ``#duration_to_next#distance_to_next`` (optional, the
cached leg to the next record). Durations are in seconds, distances in
meters, costs in USD. A `"` or `\\` inside a name is escaped with a
backslash.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Union

from tripwise.errors import DatabaseFormatError
from tripwise.models import Coordinate, Waypoint, validate_coordinate
from tripwise.sequence import OrderedSequence

LOGGER = logging.getLogger(__name__)

HEADER_HINT = '"Location" _lat_lng_/time to spend/budget/#TimeToNext#DistanceToNext'

Geocoder = Callable[[str], Optional[Coordinate]]

_RECORD_RE = re.compile(
    r'^"(?P<name>(?:[^"\\]|\\.)*)"'
    r"(?:_(?P<lat>[^_/#]+)_(?P<lon>[^_/#]+)_)?"
    r"(?:/(?P<duration>[^/#]+)/(?P<cost>[^/#]+)/)?"
    r"(?:#(?P<to_next_s>[^#]+)#(?P<to_next_m>[^#]+))?$"
)


def parse_waypoint_line(line: str, geocoder: Optional[Geocoder] = None, line_no: int = 0) -> Waypoint:
    """Parse one database record into a ``Waypoint``.

    Raises:
        DatabaseFormatError: If the record is malformed, lacks a visit
            duration/cost, or has no coordinate that can be resolved.
    """
    match = _RECORD_RE.match(line.strip())
    if match is None:
        raise DatabaseFormatError(f"line {line_no}: cannot parse record {line.strip()!r}")
    name = _unquote(match.group("name"))
    try:
        if match.group("lat") is not None:
            coord = validate_coordinate((float(match.group("lat")), float(match.group("lon"))))
        else:
            coord = _resolve(name, geocoder, line_no)
        if match.group("duration") is None:
            raise DatabaseFormatError(f"line {line_no}: {name!r} has no visit duration/cost")
        waypoint = Waypoint(
            name=name,
            coordinate=coord,
            visit_duration=float(match.group("duration")),
            visit_cost=float(match.group("cost")),
        )
        if match.group("to_next_s") is not None:
            waypoint.edge_duration_to_next = float(match.group("to_next_s"))
            waypoint.edge_distance_to_next = float(match.group("to_next_m"))
    except DatabaseFormatError:
        raise
    except ValueError as exc:
        raise DatabaseFormatError(f"line {line_no}: {exc}") from exc
    return waypoint


def _resolve(name: str, geocoder: Optional[Geocoder], line_no: int) -> Coordinate:
    if geocoder is None:
        raise DatabaseFormatError(f"line {line_no}: {name!r} has no coordinate and no geocoder was given")
    LOGGER.info("Fetching GPS coordinates for %s", name)
    coord = geocoder(name)
    if coord is None:
        raise DatabaseFormatError(f"line {line_no}: could not geocode {name!r}")
    return validate_coordinate(coord)


def _quote(name: str) -> str:
    return name.replace("\\", "\\\\").replace('"', '\\"')


def _unquote(name: str) -> str:
    return re.sub(r"\\(.)", r"\1", name)


def format_waypoint_line(waypoint: Waypoint) -> str:
    return (
        f'"{_quote(waypoint.name)}"_{waypoint.lat}_{waypoint.lon}_'
        f"/{waypoint.visit_duration}/{waypoint.visit_cost}/"
        f"#{waypoint.edge_duration_to_next}#{waypoint.edge_distance_to_next}"
    )


def load_waypoints(
    path: Union[str, Path],
    geocoder: Optional[Geocoder] = None,
) -> OrderedSequence[Waypoint]:
    """Read a database file in stored order.

    Args:
        path: Database file to read.
        geocoder: Called for records without a coordinate.

    Returns:
        The waypoints in file order.
    """
    path = Path(path)
    lines = [line for line in path.read_text(encoding="utf-8").splitlines() if line.strip()]
    if not lines:
        raise DatabaseFormatError(f"{path}: file is empty")
    header = lines[0].split()
    try:
        expected = int(header[0])
    except ValueError as exc:
        raise DatabaseFormatError(f"{path}: first line must start with the record count") from exc

    waypoints: OrderedSequence[Waypoint] = OrderedSequence()
    for line_no, line in enumerate(lines[1:], start=2):
        waypoints.append(parse_waypoint_line(line, geocoder, line_no))
    if waypoints.size() != expected:
        LOGGER.warning("%s: header announces %d records but %d were read", path, expected, waypoints.size())
    LOGGER.info("Loaded %d waypoints from %s", waypoints.size(), path)
    return waypoints


def save_waypoints(waypoints: Iterable[Waypoint], path: Union[str, Path]) -> None:
    """Write waypoints, in the given order, to a database file."""
    records: List[str] = [format_waypoint_line(w) for w in waypoints]
    output = f"{len(records)}          {HEADER_HINT}\n"
    output += "".join(record + "\n" for record in records)
    Path(path).write_text(output, encoding="utf-8")
    LOGGER.info("Saved %d waypoints to %s", len(records), path)
