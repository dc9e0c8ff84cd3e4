"""Routing strategy implementations."""

from .astar import AStarRoutingStrategy
from .base import RoutingStrategy
from .basic import BasicRoutingStrategy
from .dijkstra import DijkstraRoutingStrategy
from .osrm import OsrmRoutingStrategy

__all__ = [
    "RoutingStrategy",
    "BasicRoutingStrategy",
    "DijkstraRoutingStrategy",
    "AStarRoutingStrategy",
    "OsrmRoutingStrategy",
]
