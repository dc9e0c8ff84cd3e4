"""Detour waypoint synthesis around a linear incident.

All vector math here is planar in degrees; buffers are converted with the
~111 km per degree approximation from settings.
"""

from __future__ import annotations

import math

from ...config import settings
from ...models.domain import Incident, Point
from ..geospatial import planar_distance


def _unit(dx: float, dy: float) -> tuple[float, float] | None:
    length = math.hypot(dx, dy)
    if length == 0:
        return None
    return dx / length, dy / length


def buffer_degrees(incident: Incident) -> float:
    return incident.buffer_distance_meters / settings.meters_per_degree


def incident_perpendicular(incident: Incident, current: Point, end: Point) -> tuple[float, float]:
    """Unit normal of the incident line (direction rotated 90° counterclockwise).

    A zero-length incident borrows the direction of the live route leg; if
    that is degenerate too the normal points north.
    """

    direction = _unit(
        incident.line_end.longitude - incident.line_start.longitude,
        incident.line_end.latitude - incident.line_start.latitude,
    )
    if direction is None:
        direction = _unit(end.longitude - current.longitude, end.latitude - current.latitude) or (1.0, 0.0)
    ux, uy = direction
    return -uy, ux


def route_perpendicular(incident: Incident, current: Point, end: Point) -> tuple[float, float]:
    """Unit normal of the live leg ``current -> end``, rotated counterclockwise.

    Falls back to the incident normal when the leg has no length.
    """

    direction = _unit(end.longitude - current.longitude, end.latitude - current.latitude)
    if direction is None:
        return incident_perpendicular(incident, current, end)
    ux, uy = direction
    return -uy, ux


def detour_waypoint(
    current: Point,
    end: Point,
    incident: Incident,
    margin_degrees: float,
    off_route: bool = False,
) -> Point:
    """Waypoint beside the incident midpoint.

    By default the offset follows the incident normal, on the side the driver
    is already on; a road router joins it back up. With ``off_route`` the
    offset follows the counterclockwise normal of the live leg instead, so
    straight legs through the waypoint step off the blocked line.
    """

    midpoint = incident.midpoint
    if off_route:
        perp_x, perp_y = route_perpendicular(incident, current, end)
        side = 1.0
    else:
        perp_x, perp_y = incident_perpendicular(incident, current, end)
        side_projection = (current.longitude - midpoint.longitude) * perp_x + (
            current.latitude - midpoint.latitude
        ) * perp_y
        side = 1.0 if side_projection >= 0 else -1.0
    offset = buffer_degrees(incident) + margin_degrees
    return Point(
        midpoint.longitude + perp_x * offset * side,
        midpoint.latitude + perp_y * offset * side,
    )


def rejoin_waypoint(current: Point, end: Point, incident: Incident, margin_degrees: float) -> Point | None:
    """Point back on the planned leg just past the incident, if one fits.

    Only produced when the incident projects onto the first part of the leg
    (``rejoin_route_fraction``) and the end point is clear of the corridor.
    """

    route_dx = end.longitude - current.longitude
    route_dy = end.latitude - current.latitude
    route_length = math.hypot(route_dx, route_dy)
    if route_length == 0:
        return None

    unit_x, unit_y = route_dx / route_length, route_dy / route_length
    perp_x, perp_y = -unit_y, unit_x
    midpoint = incident.midpoint
    to_mid_x = midpoint.longitude - current.longitude
    to_mid_y = midpoint.latitude - current.latitude
    projection = to_mid_x * unit_x + to_mid_y * unit_y

    buffer_deg = buffer_degrees(incident)
    clearance = buffer_deg + margin_degrees
    if planar_distance(end, midpoint) <= clearance:
        return None
    if projection >= route_length * settings.rejoin_route_fraction:
        return None

    lateral = abs(to_mid_x * perp_x + to_mid_y * perp_y)
    if lateral > clearance:
        return None

    along = math.sqrt(clearance * clearance - lateral * lateral)
    rejoin = Point(
        current.longitude + unit_x * (projection + along),
        current.latitude + unit_y * (projection + along),
    )
    if planar_distance(rejoin, midpoint) <= buffer_deg:
        return None
    return rejoin


def plan_detour(
    current: Point,
    end: Point,
    incident: Incident,
    margin_degrees: float,
    include_rejoin: bool = False,
    off_route: bool = False,
) -> tuple[Point, ...]:
    """Intermediate waypoints for ``current -> ... -> end`` avoiding ``incident``."""

    waypoints = [detour_waypoint(current, end, incident, margin_degrees, off_route=off_route)]
    if include_rejoin:
        rejoin = rejoin_waypoint(current, end, incident, margin_degrees)
        if rejoin is not None:
            waypoints.append(rejoin)
    return tuple(waypoints)
