"""Route persistence sinks."""

from __future__ import annotations

import logging
import threading
import uuid
from dataclasses import replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Protocol

from ..models.domain import Point, Route
from .filesystem import FileStorage

logger = logging.getLogger(__name__)


class RouteRepository(Protocol):
    def save(self, route: Route) -> Route: ...

    def find_by_id(self, route_id: str) -> Optional[Route]: ...


def _stamp(route: Route) -> Route:
    """Assign id and creation time on first save."""
    if route.id is None:
        route.id = str(uuid.uuid4())
    if route.created_at is None:
        route.created_at = datetime.now(timezone.utc)
    return route


def _copy(route: Route) -> Route:
    return replace(route, waypoints=list(route.waypoints))


def route_to_record(route: Route) -> dict:
    return {
        "id": route.id,
        "parcel_id": route.parcel_id,
        "driver_id": route.driver_id,
        "start_hub_id": route.start_hub_id,
        "end_hub_id": route.end_hub_id,
        "route_geometry": route.route_geometry,
        "waypoints": [[point.longitude, point.latitude] for point in route.waypoints],
        "total_distance_km": route.total_distance_km,
        "estimated_duration_minutes": route.estimated_duration_minutes,
        "routing_service": route.routing_service,
        "traffic_factor": route.traffic_factor,
        "is_active": route.is_active,
        "created_at": route.created_at.isoformat() if route.created_at else None,
    }


def route_from_record(record: dict) -> Route:
    created_at = record.get("created_at")
    return Route(
        id=record.get("id"),
        parcel_id=record.get("parcel_id"),
        driver_id=record.get("driver_id"),
        start_hub_id=record.get("start_hub_id"),
        end_hub_id=record.get("end_hub_id"),
        route_geometry=record["route_geometry"],
        waypoints=[Point(float(lon), float(lat)) for lon, lat in record.get("waypoints") or []],
        total_distance_km=float(record["total_distance_km"]),
        estimated_duration_minutes=int(record["estimated_duration_minutes"]),
        routing_service=record["routing_service"],
        traffic_factor=float(record.get("traffic_factor") or 1.0),
        is_active=bool(record.get("is_active", True)),
        created_at=datetime.fromisoformat(created_at) if created_at else None,
    )


class InMemoryRouteRepository:
    """Process-local route store; returns copies so callers cannot alias stored state."""

    def __init__(self) -> None:
        self._routes: dict[str, Route] = {}
        self._lock = threading.Lock()

    def save(self, route: Route) -> Route:
        _stamp(route)
        with self._lock:
            self._routes[route.id] = _copy(route)
        return route

    def find_by_id(self, route_id: str) -> Optional[Route]:
        with self._lock:
            stored = self._routes.get(route_id)
        return _copy(stored) if stored is not None else None


class FileRouteRepository:
    """One JSON document per route under the configured routes directory."""

    def __init__(self, root: Path | None = None, storage: FileStorage | None = None) -> None:
        self.storage = storage or FileStorage(root=root)

    def save(self, route: Route) -> Route:
        _stamp(route)
        self.storage.write_json(self.storage.path_for(route.id), route_to_record(route))
        logger.debug(f"Persisted route {route.id} ({route.routing_service})")
        return route

    def find_by_id(self, route_id: str) -> Optional[Route]:
        try:
            path = self.storage.path_for(route_id)
        except ValueError:
            return None
        record = self.storage.read_json(path)
        return route_from_record(record) if record is not None else None
