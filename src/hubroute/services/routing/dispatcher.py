"""Factory for routing strategies based on the requested algorithm name."""

from __future__ import annotations

from typing import Optional

from ...config import settings
from ...data.hub_repository import HubProvider
from .osrm_client import OSRMClient
from .strategies.astar import AStarRoutingStrategy
from .strategies.base import RoutingStrategy
from .strategies.basic import BasicRoutingStrategy
from .strategies.dijkstra import DijkstraRoutingStrategy
from .strategies.osrm import OsrmRoutingStrategy


def normalize_algorithm(algorithm: Optional[str]) -> str:
    text = (algorithm or "").strip().upper()
    return text or settings.default_algorithm


def get_strategy(
    algorithm: Optional[str],
    hubs: HubProvider,
    osrm_client: OSRMClient | None = None,
) -> RoutingStrategy:
    match normalize_algorithm(algorithm):
        case "BASIC":
            return BasicRoutingStrategy(hubs)
        case "DIJKSTRA":
            return DijkstraRoutingStrategy(hubs)
        case "ASTAR":
            return AStarRoutingStrategy(hubs)
        case _:
            return OsrmRoutingStrategy(hubs, client=osrm_client)
