"""Hub and hub-connection data provider with a JSON file loader."""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Iterable, Optional, Protocol, Sequence

from ..config import settings
from ..models.domain import Edge, Hub, HubType, Point
from ..services.routing.errors import InvalidGeometryError
from ..services.wkt import parse_point

logger = logging.getLogger(__name__)


class HubProvider(Protocol):
    def list_hubs(self) -> Sequence[Hub]: ...

    def get_hub(self, hub_id: str) -> Optional[Hub]: ...

    def list_edges(self) -> Sequence[Edge]: ...

    def list_edges_from(self, hub_id: str) -> Sequence[Edge]: ...


class InMemoryHubRepository:
    """Hub network held in memory; reads return fresh tuples."""

    def __init__(self, hubs: Iterable[Hub] = (), edges: Iterable[Edge] = ()) -> None:
        self._hubs: dict[str, Hub] = {}
        self._edges: list[Edge] = []
        for hub in hubs:
            self.add_hub(hub)
        for edge in edges:
            self.add_edge(edge)

    def add_hub(self, hub: Hub) -> Hub:
        self._hubs[hub.id] = hub
        return hub

    def add_edge(self, edge: Edge) -> Edge:
        self._edges.append(edge)
        return edge

    def list_hubs(self) -> tuple[Hub, ...]:
        return tuple(self._hubs.values())

    def get_hub(self, hub_id: str) -> Optional[Hub]:
        return self._hubs.get(hub_id)

    def list_edges(self) -> tuple[Edge, ...]:
        return tuple(self._edges)

    def list_edges_from(self, hub_id: str) -> tuple[Edge, ...]:
        return tuple(edge for edge in self._edges if edge.from_hub_id == hub_id)


def _parse_location(value) -> Point:
    if isinstance(value, str):
        return parse_point(value)
    if isinstance(value, dict):
        try:
            return Point(float(value["longitude"]), float(value["latitude"]))
        except (KeyError, TypeError, ValueError) as exc:
            raise InvalidGeometryError(f"Invalid location object: {value}") from exc
    raise InvalidGeometryError(f"Unsupported location value: {value!r}")


def _parse_hub(row: dict) -> Hub:
    hub_type = row.get("type") or HubType.TRANSIT_POINT.value
    return Hub(
        id=str(row["id"]),
        location=_parse_location(row.get("location")),
        type=HubType(str(hub_type).upper()),
        name=row.get("name"),
    )


def _parse_edge(row: dict) -> Edge:
    weight = row.get("weight")
    return Edge(
        id=str(row["id"]),
        from_hub_id=str(row["from_hub_id"]),
        to_hub_id=str(row["to_hub_id"]),
        weight=float(weight) if weight is not None else None,
    )


def parse_network(document: dict) -> InMemoryHubRepository:
    """Build a repository from a ``{hubs: [...], edges: [...]}`` document.

    Invalid rows are skipped with a warning.
    """

    repository = InMemoryHubRepository()
    for row in document.get("hubs") or []:
        try:
            repository.add_hub(_parse_hub(row))
        except (KeyError, ValueError, TypeError) as e:
            logger.warning(f"Skipping invalid hub row {row!r}: {e}")
    for row in document.get("edges") or []:
        try:
            repository.add_edge(_parse_edge(row))
        except (KeyError, ValueError, TypeError) as e:
            logger.warning(f"Skipping invalid hub connection row {row!r}: {e}")
    return repository


@lru_cache(maxsize=4)
def load_network(source: Path | None = None) -> InMemoryHubRepository:
    """Load the hub network from a JSON file."""
    network_path = source or settings.network_file
    if not network_path.exists():
        raise FileNotFoundError(f"Hub network file not found: {network_path}")

    with network_path.open("r", encoding="utf-8") as handle:
        document = json.load(handle)
    if not isinstance(document, dict):
        raise ValueError(f"Hub network file '{network_path}' must contain a JSON object.")

    repository = parse_network(document)
    logger.info(
        f"Loaded {len(repository.list_hubs())} hubs and {len(repository.list_edges())} "
        f"connections from {network_path}"
    )
    return repository
