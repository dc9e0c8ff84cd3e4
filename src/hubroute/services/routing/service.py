"""Routing orchestration service."""

from __future__ import annotations

import logging
from typing import Optional

from ...data.hub_repository import HubProvider
from ...models.domain import Hub, Incident, Path, Route
from ...persistence.routes import RouteRepository
from ...schemas.routing import RouteCalculationRequest, RouteResponse, RoutingConstraints
from ..wkt import linestring_to_wkt
from .dispatcher import get_strategy, normalize_algorithm
from .errors import NoPathFoundError, ProviderUnavailableError, RouteNotFoundError, RoutingError
from .osrm_client import OSRMClient
from .recalculation import base_algorithm, path_from_route
from .strategies.osrm import OsrmRoutingStrategy

logger = logging.getLogger(__name__)


def path_to_route(path: Path, **identity) -> Route:
    return Route(
        route_geometry=linestring_to_wkt(path.geometry),
        total_distance_km=path.total_distance,
        estimated_duration_minutes=path.estimated_duration_minutes,
        routing_service=path.service_tag,
        is_active=path.active,
        waypoints=list(path.waypoints),
        **identity,
    )


class RouteService:
    """Computes, persists and revises delivery routes between hubs."""

    def __init__(
        self,
        hubs: HubProvider,
        routes: RouteRepository,
        osrm_client: OSRMClient | None = None,
    ) -> None:
        self.hubs = hubs
        self.routes = routes
        self.osrm_client = osrm_client

    def _require_hub(self, hub_id: str) -> Hub:
        hub = self.hubs.get_hub(hub_id)
        if hub is None:
            raise RouteNotFoundError(f"Hub '{hub_id}' not found.")
        return hub

    def compute_path(
        self,
        start: Hub,
        end: Hub,
        constraints: Optional[RoutingConstraints] = None,
    ) -> Path:
        """Run the requested strategy, substituting OSRM once if it fails."""

        algorithm = normalize_algorithm(constraints.algorithm if constraints else None)
        strategy = get_strategy(algorithm, self.hubs, osrm_client=self.osrm_client)
        logger.info(f"Calculating {start.id} -> {end.id} with {strategy.name}")
        try:
            return strategy.compute_optimal_path(start, end, constraints)
        except RoutingError as primary_error:
            if isinstance(strategy, OsrmRoutingStrategy):
                raise
            logger.warning(f"{strategy.name} failed ({primary_error}), falling back to OSRM")
            fallback = OsrmRoutingStrategy(self.hubs, client=self.osrm_client)
            try:
                return fallback.compute_optimal_path(start, end, constraints)
            except RoutingError as fallback_error:
                logger.error(f"OSRM fallback failed as well: {fallback_error}")
                if isinstance(primary_error, NoPathFoundError):
                    raise NoPathFoundError(
                        f"{primary_error}; OSRM fallback failed: {fallback_error}"
                    ) from fallback_error
                raise fallback_error from primary_error

    def calculate_route(self, request: RouteCalculationRequest) -> RouteResponse:
        start = self._require_hub(request.start_hub_id)
        end = self._require_hub(request.end_hub_id)

        path = self.compute_path(start, end, request.constraints)
        route = path_to_route(
            path,
            parcel_id=request.parcel_id,
            driver_id=request.driver_id,
            start_hub_id=start.id,
            end_hub_id=end.id,
        )
        saved = self.routes.save(route)
        logger.info(f"Route {saved.id} saved for parcel {saved.parcel_id} ({saved.routing_service})")
        return RouteResponse.from_route(saved)

    def recalculate(self, route: Route, incident: Optional[Incident]) -> Route:
        """Revise ``route`` in place for ``incident`` using its own algorithm family."""

        algorithm = base_algorithm(route.routing_service)
        strategy = get_strategy(algorithm, self.hubs, osrm_client=self.osrm_client)
        try:
            path = strategy.recalculate(route, incident)
        except ProviderUnavailableError as e:
            logger.warning(f"Route {route.id}: provider unavailable during recalculation, keeping route ({e})")
            return route
        if path != path_from_route(route):
            route.apply_path(path)
        return route

    def recalculate_route(self, route_id: str, incident: Optional[Incident]) -> RouteResponse:
        route = self.routes.find_by_id(route_id)
        if route is None:
            raise RouteNotFoundError(f"Route '{route_id}' not found.")
        updated = self.recalculate(route, incident)
        saved = self.routes.save(updated)
        return RouteResponse.from_route(saved)

    def get_route(self, route_id: str) -> RouteResponse:
        route = self.routes.find_by_id(route_id)
        if route is None:
            raise RouteNotFoundError(f"Route '{route_id}' not found.")
        return RouteResponse.from_route(route)
