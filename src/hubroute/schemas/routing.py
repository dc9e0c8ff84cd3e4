"""Routing request/response schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from ..models.domain import Incident, Point, Route


class _CamelModel(BaseModel):
    """Accepts both snake_case and camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class GeoLocation(BaseModel):
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)

    def to_point(self) -> Point:
        return Point(self.longitude, self.latitude)


class IncidentModel(_CamelModel):
    """Linear incident: a blocked segment plus a buffer (metres) on each side."""

    type: Optional[str] = None
    line_start: Optional[GeoLocation] = None
    line_end: Optional[GeoLocation] = None
    buffer_distance: float = Field(default=0.0, ge=0.0, description="Buffer width in meters.")
    description: Optional[str] = None

    @field_validator("buffer_distance", mode="before")
    @classmethod
    def _null_buffer_is_zero(cls, value: Any) -> Any:
        return 0.0 if value is None else value

    def to_domain(self) -> Incident:
        return Incident(
            type=self.type,
            line_start=self.line_start.to_point() if self.line_start else None,
            line_end=self.line_end.to_point() if self.line_end else None,
            buffer_distance_meters=self.buffer_distance,
            description=self.description,
        )


class RoutingConstraints(_CamelModel):
    avoid_highways: bool = False
    avoid_tolls: bool = False
    vehicle_type: Optional[str] = None
    algorithm: Optional[str] = Field(
        default=None,
        description="BASIC, DIJKSTRA, ASTAR; any other name selects the OSRM provider.",
    )


class RouteCalculationRequest(_CamelModel):
    parcel_id: str
    start_hub_id: str
    end_hub_id: str
    driver_id: Optional[str] = None
    constraints: Optional[RoutingConstraints] = None


class RouteResponse(BaseModel):
    id: Optional[str]
    parcel_id: Optional[str]
    driver_id: Optional[str]
    start_hub_id: Optional[str]
    end_hub_id: Optional[str]
    route_geometry: str
    coordinates: List[List[float]]
    total_distance_km: float
    estimated_duration_minutes: int
    routing_service: str
    is_active: bool
    traffic_factor: float
    waypoints: List[List[float]]
    created_at: Optional[datetime]

    @classmethod
    def from_route(cls, route: Route) -> "RouteResponse":
        from ..services.wkt import parse_linestring

        return cls(
            id=route.id,
            parcel_id=route.parcel_id,
            driver_id=route.driver_id,
            start_hub_id=route.start_hub_id,
            end_hub_id=route.end_hub_id,
            route_geometry=route.route_geometry,
            coordinates=[[point.longitude, point.latitude] for point in parse_linestring(route.route_geometry)],
            total_distance_km=route.total_distance_km,
            estimated_duration_minutes=route.estimated_duration_minutes,
            routing_service=route.routing_service,
            is_active=route.is_active,
            traffic_factor=route.traffic_factor,
            waypoints=[[point.longitude, point.latitude] for point in route.waypoints],
            created_at=route.created_at,
        )
