"""GeoJSON export utilities for map overlays."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List

from ...models.domain import Route
from ..wkt import parse_linestring

ROUTE_COLORS = {
    "BASIC": "#13aae0",
    "DIJKSTRA": "#38e000",
    "ASTAR": "#611cc7",
    "OSRM": "#0000c1",
}
RECALCULATED_COLOR = "#e0003e"


def route_color(service_tag: str) -> str:
    if service_tag.endswith(("_RECALC", "_DETOUR")):
        return RECALCULATED_COLOR
    return ROUTE_COLORS.get(service_tag, "#e0af00")


def route_to_feature(route: Route) -> Dict[str, Any]:
    """Render a route as a GeoJSON ``Feature`` with a LineString geometry."""

    coordinates = [[point.longitude, point.latitude] for point in parse_linestring(route.route_geometry)]
    return {
        "type": "Feature",
        "geometry": {"type": "LineString", "coordinates": coordinates},
        "properties": {
            "route_id": route.id,
            "parcel_id": route.parcel_id,
            "driver_id": route.driver_id,
            "start_hub_id": route.start_hub_id,
            "end_hub_id": route.end_hub_id,
            "total_distance_km": route.total_distance_km,
            "estimated_duration_minutes": route.estimated_duration_minutes,
            "routing_service": route.routing_service,
            "is_active": route.is_active,
            "waypoints": [[point.longitude, point.latitude] for point in route.waypoints],
            "color": route_color(route.routing_service),
        },
    }


def routes_to_feature_collection(routes: Iterable[Route]) -> Dict[str, Any]:
    features: List[Dict[str, Any]] = [route_to_feature(route) for route in routes]
    return {"type": "FeatureCollection", "features": features}


def save_geojson(data: Dict[str, Any], output_path: Path) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
