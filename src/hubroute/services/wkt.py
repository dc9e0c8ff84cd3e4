"""WKT text encoding for hub locations and route geometries.

Coordinates are always written longitude first, as WKT expects.
Parsing goes through shapely so that every reader accepts the same dialect
(``LINESTRING(0 0, 1 1)`` and ``LINESTRING (0 0, 1 1)`` alike).
"""

from __future__ import annotations

from typing import Sequence

from shapely import wkt as shapely_wkt
from shapely.errors import GEOSException
from shapely.geometry import LineString
from shapely.geometry import Point as ShapelyPoint

from ..models.domain import Point
from .routing.errors import InvalidGeometryError


def point_to_wkt(point: Point) -> str:
    return f"POINT({point.longitude} {point.latitude})"


def linestring_to_wkt(points: Sequence[Point]) -> str:
    if len(points) < 2:
        raise InvalidGeometryError("LineString must have at least 2 coordinates")
    coord_pairs = [f"{point.longitude} {point.latitude}" for point in points]
    return f"LINESTRING({', '.join(coord_pairs)})"


def _load(text: str | None):
    if not text or not text.strip():
        raise InvalidGeometryError("Empty geometry text.")
    try:
        return shapely_wkt.loads(text)
    except (GEOSException, ValueError, TypeError) as exc:
        raise InvalidGeometryError(f"Malformed WKT '{text}': {exc}") from exc


def parse_point(text: str | None) -> Point:
    geometry = _load(text)
    if not isinstance(geometry, ShapelyPoint) or geometry.is_empty:
        raise InvalidGeometryError(f"Expected a POINT, got '{text}'.")
    return Point(float(geometry.x), float(geometry.y))


def parse_linestring(text: str | None) -> tuple[Point, ...]:
    geometry = _load(text)
    if not isinstance(geometry, LineString) or geometry.is_empty:
        raise InvalidGeometryError(f"Expected a LINESTRING, got '{text}'.")
    points = tuple(Point(float(x), float(y)) for x, y, *_ in geometry.coords)
    if len(points) < 2:
        raise InvalidGeometryError(f"LINESTRING needs at least 2 coordinates: '{text}'.")
    return points
