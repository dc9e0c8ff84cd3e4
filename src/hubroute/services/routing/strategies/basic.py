"""Direct point-to-point routing."""

from __future__ import annotations

import logging
from typing import Optional

from ....config import settings
from ....models.domain import Hub, Incident, Path, Route
from ....schemas.routing import RoutingConstraints
from ...geospatial import distance_km, polyline_length_km
from ..detour import plan_detour
from ..recalculation import DETOUR_SUFFIX, RecalculationDecision
from .base import RoutingStrategy, estimate_duration_minutes

logger = logging.getLogger(__name__)


class BasicRoutingStrategy(RoutingStrategy):
    """Straight line between the two hubs, as the crow flies."""

    name = "BASIC"

    def compute_optimal_path(
        self,
        start: Hub,
        end: Hub,
        constraints: Optional[RoutingConstraints] = None,
    ) -> Path:
        distance = distance_km(start.location, end.location)
        return Path(
            geometry=(start.location, end.location),
            total_distance=distance,
            estimated_duration_minutes=estimate_duration_minutes(distance),
            service_tag=self.name,
        )

    def _reroute(self, route: Route, incident: Incident, decision: RecalculationDecision) -> Path:
        current, end = decision.current_position, decision.end_position
        waypoints = plan_detour(
            current,
            end,
            incident,
            margin_degrees=settings.basic_detour_margin_degrees,
            include_rejoin=True,
            off_route=True,
        )
        geometry = (current, *waypoints, end)
        distance = polyline_length_km(geometry)
        logger.info(f"Route {route.id}: direct detour through {len(waypoints)} waypoint(s), {distance:.3f} km")
        return Path(
            geometry=geometry,
            total_distance=distance,
            estimated_duration_minutes=estimate_duration_minutes(distance),
            service_tag=f"{self.name}{DETOUR_SUFFIX}",
            waypoints=waypoints,
        )
