"""Routing delegated to an OSRM road-routing service."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from ....config import settings
from ....data.hub_repository import HubProvider
from ....models.domain import Hub, Incident, Path, Point, Route
from ....schemas.routing import RoutingConstraints
from ..detour import plan_detour
from ..errors import ProviderUnavailableError
from ..osrm_client import OSRMClient
from ..recalculation import DETOUR_SUFFIX, RecalculationDecision
from .base import RoutingStrategy

logger = logging.getLogger(__name__)


def parse_route_response(
    payload: dict,
    start: Point,
    end: Point,
    service_tag: str,
    waypoints: Sequence[Point] = (),
) -> Path:
    """Convert the first OSRM route into a :class:`Path`.

    Distance comes back in metres and duration in seconds. A geometry with
    fewer than two coordinates is replaced by the straight start/end line.
    """
    try:
        primary = payload["routes"][0]
        distance_meters = float(primary.get("distance") or 0.0)
        duration_seconds = float(primary.get("duration") or 0.0)
        raw_coordinates = (primary.get("geometry") or {}).get("coordinates") or []
        coordinates = [Point(float(pair[0]), float(pair[1])) for pair in raw_coordinates]
    except (KeyError, IndexError, TypeError, ValueError, AttributeError) as e:
        raise ProviderUnavailableError(f"Failed to process routing response: {e}") from e

    if len(coordinates) < 2:
        logger.warning("OSRM geometry has fewer than two points, using the straight start/end line")
        coordinates = [start, end]

    return Path(
        geometry=tuple(coordinates),
        total_distance=distance_meters / 1000.0,
        estimated_duration_minutes=int(duration_seconds / 60),
        service_tag=service_tag,
        waypoints=tuple(waypoints),
    )


class OsrmRoutingStrategy(RoutingStrategy):
    """Real-world driving routes from OSRM."""

    name = "OSRM"

    def __init__(self, hubs: HubProvider, client: OSRMClient | None = None) -> None:
        super().__init__(hubs)
        self._client = client

    @property
    def client(self) -> OSRMClient:
        if self._client is None:
            self._client = OSRMClient()
        return self._client

    def compute_optimal_path(
        self,
        start: Hub,
        end: Hub,
        constraints: Optional[RoutingConstraints] = None,
    ) -> Path:
        payload = self.client.route([start.location, end.location])
        return parse_route_response(payload, start.location, end.location, self.name)

    def _reroute(self, route: Route, incident: Incident, decision: RecalculationDecision) -> Path:
        current, end = decision.current_position, decision.end_position
        waypoints = plan_detour(
            current,
            end,
            incident,
            margin_degrees=settings.provider_detour_margin_degrees,
        )
        logger.info(f"Route {route.id}: requesting OSRM detour via {waypoints}")
        payload = self.client.route([current, *waypoints, end])
        return parse_route_response(
            payload,
            current,
            end,
            f"{self.name}{DETOUR_SUFFIX}",
            waypoints=waypoints,
        )
