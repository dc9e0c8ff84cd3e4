"""Decides whether an incident forces a route to change."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ...data.hub_repository import HubProvider
from ...models.domain import Hub, Incident, Path, Point, Route
from ..geospatial import route_intersects_incident
from ..wkt import parse_linestring

logger = logging.getLogger(__name__)

RECALC_SUFFIX = "_RECALC"
DETOUR_SUFFIX = "_DETOUR"


@dataclass(frozen=True, slots=True)
class RecalculationDecision:
    reroute: bool
    reason: str
    current_position: Optional[Point] = None
    end_position: Optional[Point] = None
    start_hub: Optional[Hub] = None
    end_hub: Optional[Hub] = None


def _keep(reason: str, route: Route, **context) -> RecalculationDecision:
    logger.info(f"Route {route.id}: no recalculation needed ({reason})")
    return RecalculationDecision(reroute=False, reason=reason, **context)


def evaluate_recalculation(route: Route, incident: Optional[Incident], hubs: HubProvider) -> RecalculationDecision:
    """Work out the live leg of ``route`` and test it against ``incident``.

    The live leg runs from the first coordinate of the stored geometry (the
    driver's current position) to the stored end hub.
    """

    if route.start_hub_id is None or route.end_hub_id is None:
        return _keep("missing_hub_references", route)
    if incident is None or not incident.has_line:
        return _keep("incident_without_line", route)

    start_hub = hubs.get_hub(route.start_hub_id)
    end_hub = hubs.get_hub(route.end_hub_id)
    if start_hub is None or end_hub is None:
        logger.warning(f"Route {route.id} references hubs that no longer exist")
        return _keep("unknown_hub", route)

    current_position = parse_linestring(route.route_geometry)[0]
    end_position = end_hub.location
    context = dict(
        current_position=current_position,
        end_position=end_position,
        start_hub=start_hub,
        end_hub=end_hub,
    )

    if not route_intersects_incident(current_position, end_position, incident):
        return _keep("clear_of_incident", route, **context)

    logger.info(f"Route {route.id} intersects incident '{incident.type}', rerouting")
    return RecalculationDecision(reroute=True, reason="intersects_incident", **context)


def path_from_route(route: Route) -> Path:
    return Path(
        geometry=parse_linestring(route.route_geometry),
        total_distance=route.total_distance_km,
        estimated_duration_minutes=route.estimated_duration_minutes,
        service_tag=route.routing_service,
        active=route.is_active,
        waypoints=tuple(route.waypoints),
    )


def base_algorithm(service_tag: Optional[str]) -> Optional[str]:
    """Strip a recalculation suffix: ``DIJKSTRA_RECALC`` -> ``DIJKSTRA``."""

    if not service_tag:
        return None
    tag = service_tag.strip().upper()
    for suffix in (RECALC_SUFFIX, DETOUR_SUFFIX):
        if tag.endswith(suffix):
            return tag[: -len(suffix)]
    return tag
