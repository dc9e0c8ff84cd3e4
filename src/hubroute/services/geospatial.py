"""Geospatial helper functions.

Segment projections treat longitude/latitude deltas as planar coordinates,
which is only accurate over short distances; the resulting closest point is
then measured with the Haversine formula.
"""

from __future__ import annotations

import math
from typing import Sequence

from shapely.geometry import LineString
from shapely.geometry import Point as ShapelyPoint

from ..models.domain import Incident, Point

EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute distance between two coordinates using the Haversine formula."""

    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def distance_km(a: Point, b: Point) -> float:
    return haversine_km(a.latitude, a.longitude, b.latitude, b.longitude)


def planar_distance(a: Point, b: Point) -> float:
    """Euclidean distance in degrees."""

    return math.hypot(b.longitude - a.longitude, b.latitude - a.latitude)


def polyline_length_km(points: Sequence[Point]) -> float:
    return sum(distance_km(points[i], points[i + 1]) for i in range(len(points) - 1))


def closest_point_on_segment(point: Point, seg_start: Point, seg_end: Point) -> Point:
    seg_dx = seg_end.longitude - seg_start.longitude
    seg_dy = seg_end.latitude - seg_start.latitude
    length_sq = seg_dx * seg_dx + seg_dy * seg_dy
    if length_sq == 0:
        return seg_start

    t = ((point.longitude - seg_start.longitude) * seg_dx + (point.latitude - seg_start.latitude) * seg_dy) / length_sq
    t = max(0.0, min(1.0, t))
    return Point(seg_start.longitude + t * seg_dx, seg_start.latitude + t * seg_dy)


def point_to_segment_distance_km(point: Point, seg_start: Point, seg_end: Point) -> float:
    """Minimum distance in kilometres from ``point`` to the segment.

    A zero-length segment degenerates to a plain point distance.
    """

    return distance_km(point, closest_point_on_segment(point, seg_start, seg_end))


def _as_shape(start: Point, end: Point):
    if start == end:
        return ShapelyPoint(start.as_lon_lat())
    return LineString([start.as_lon_lat(), end.as_lon_lat()])


def segments_intersect(a_start: Point, a_end: Point, b_start: Point, b_end: Point) -> bool:
    """True planar intersection test between two segments (touching counts)."""

    return _as_shape(a_start, a_end).intersects(_as_shape(b_start, b_end))


def is_point_in_line_buffer(point: Point, line_start: Point, line_end: Point, buffer_meters: float) -> bool:
    return point_to_segment_distance_km(point, line_start, line_end) <= buffer_meters / 1000.0


def route_intersects_incident(route_start: Point, route_end: Point, incident: Incident) -> bool:
    """Conservatively decide whether a straight route leg touches an incident corridor.

    Any one of these is enough: the two segments cross; the route start, end
    or midpoint lies in the incident buffer; an incident endpoint lies within
    the same buffer distance of the route.
    """

    if not incident.has_line:
        return False

    line_start, line_end = incident.line_start, incident.line_end
    buffer_meters = incident.buffer_distance_meters

    if segments_intersect(route_start, route_end, line_start, line_end):
        return True

    midpoint = Point(
        (route_start.longitude + route_end.longitude) / 2,
        (route_start.latitude + route_end.latitude) / 2,
    )
    for candidate in (route_start, route_end, midpoint):
        if is_point_in_line_buffer(candidate, line_start, line_end, buffer_meters):
            return True

    buffer_km = buffer_meters / 1000.0
    return (
        point_to_segment_distance_km(line_start, route_start, route_end) <= buffer_km
        or point_to_segment_distance_km(line_end, route_start, route_end) <= buffer_km
    )
