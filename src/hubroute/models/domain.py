"""Domain models for hubs, hub connections, paths, routes and incidents."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


@dataclass(frozen=True, slots=True)
class Point:
    """A (longitude, latitude) pair, always longitude first."""

    longitude: float
    latitude: float

    def as_lon_lat(self) -> tuple[float, float]:
        return (self.longitude, self.latitude)


class HubType(str, Enum):
    """Functional role of a hub in the delivery network."""

    WAREHOUSE = "WAREHOUSE"
    SORTING_CENTER = "SORTING_CENTER"
    TRANSIT_POINT = "TRANSIT_POINT"
    DISTRIBUTION_CENTER = "DISTRIBUTION_CENTER"
    PICKUP_POINT = "PICKUP_POINT"
    DROP_OFF_POINT = "DROP_OFF_POINT"


@dataclass(frozen=True, slots=True)
class Hub:
    """A logistics waypoint; graph node identified by ``id``."""

    id: str
    location: Point
    type: HubType = HubType.TRANSIT_POINT
    name: Optional[str] = None


@dataclass(frozen=True, slots=True)
class Edge:
    """A stored hub connection.

    Recorded with a direction, but graph strategies decide for themselves
    whether to honour it. A missing weight counts as zero.
    """

    id: str
    from_hub_id: str
    to_hub_id: str
    weight: Optional[float] = None

    def __post_init__(self) -> None:
        if self.weight is not None and self.weight < 0:
            raise ValueError(f"Hub connection '{self.id}' has negative weight {self.weight}.")

    @property
    def cost(self) -> float:
        return 0.0 if self.weight is None else float(self.weight)

    def other_end(self, hub_id: str) -> str:
        return self.to_hub_id if self.from_hub_id == hub_id else self.from_hub_id


@dataclass(frozen=True, slots=True)
class Path:
    """Geometry and metrics produced by a routing strategy."""

    geometry: tuple[Point, ...]
    total_distance: float
    estimated_duration_minutes: int
    service_tag: str
    active: bool = True
    waypoints: tuple[Point, ...] = ()

    def __post_init__(self) -> None:
        if len(self.geometry) < 2:
            raise ValueError("A path needs at least two geometry points.")

    @property
    def start(self) -> Point:
        return self.geometry[0]

    @property
    def end(self) -> Point:
        return self.geometry[-1]


@dataclass(slots=True)
class Route:
    """Persisted route record wrapping a path with its correlation ids."""

    route_geometry: str
    total_distance_km: float
    estimated_duration_minutes: int
    routing_service: str
    is_active: bool = True
    id: Optional[str] = None
    parcel_id: Optional[str] = None
    driver_id: Optional[str] = None
    start_hub_id: Optional[str] = None
    end_hub_id: Optional[str] = None
    traffic_factor: float = 1.0
    waypoints: list[Point] = field(default_factory=list)
    created_at: Optional[datetime] = None

    def apply_path(self, path: Path) -> None:
        """Overwrite geometry and metrics in place, keeping identity fields."""

        from ..services.wkt import linestring_to_wkt

        self.route_geometry = linestring_to_wkt(path.geometry)
        self.total_distance_km = path.total_distance
        self.estimated_duration_minutes = path.estimated_duration_minutes
        self.routing_service = path.service_tag
        self.is_active = path.active
        self.waypoints = list(path.waypoints)


@dataclass(frozen=True, slots=True)
class Incident:
    """A linear hazard with a safety corridor on each side of the line."""

    type: Optional[str] = None
    line_start: Optional[Point] = None
    line_end: Optional[Point] = None
    buffer_distance_meters: float = 0.0
    description: Optional[str] = None

    def __post_init__(self) -> None:
        if self.buffer_distance_meters < 0:
            raise ValueError("Incident buffer distance must be >= 0.")

    @property
    def has_line(self) -> bool:
        return self.line_start is not None and self.line_end is not None

    @property
    def midpoint(self) -> Point:
        if not self.has_line:
            raise ValueError("Incident has no line geometry.")
        return Point(
            (self.line_start.longitude + self.line_end.longitude) / 2,
            (self.line_start.latitude + self.line_end.latitude) / 2,
        )
