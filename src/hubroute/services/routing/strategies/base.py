"""Base classes for routing strategy implementations."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ....config import settings
from ....data.hub_repository import HubProvider
from ....models.domain import Hub, Incident, Path, Route
from ....schemas.routing import RoutingConstraints
from ..recalculation import RecalculationDecision, evaluate_recalculation, path_from_route


def estimate_duration_minutes(distance: float) -> int:
    return int(round(distance * settings.minutes_per_distance_unit))


class RoutingStrategy(ABC):
    """Contract for path computation and incident recalculation."""

    name: str = ""

    def __init__(self, hubs: HubProvider) -> None:
        self.hubs = hubs

    @abstractmethod
    def compute_optimal_path(
        self,
        start: Hub,
        end: Hub,
        constraints: Optional[RoutingConstraints] = None,
    ) -> Path:
        raise NotImplementedError

    def recalculate(self, route: Route, incident: Optional[Incident]) -> Path:
        """Return the path ``route`` should follow given ``incident``.

        When the incident does not affect the route, its current path comes
        back unchanged, service tag included.
        """
        decision = evaluate_recalculation(route, incident, self.hubs)
        if not decision.reroute:
            return path_from_route(route)
        return self._reroute(route, incident, decision)

    @abstractmethod
    def _reroute(self, route: Route, incident: Incident, decision: RecalculationDecision) -> Path:
        raise NotImplementedError
