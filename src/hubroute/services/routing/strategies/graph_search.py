"""Shared plumbing for strategies that search the hub graph."""

from __future__ import annotations

import logging
from abc import abstractmethod
from dataclasses import replace
from typing import Mapping, Optional

from ....models.domain import Hub, Incident, Path, Point, Route
from ....schemas.routing import RoutingConstraints
from ..errors import NoPathFoundError
from ..graph import GraphSnapshot, build_snapshot
from ..recalculation import RECALC_SUFFIX, RecalculationDecision
from .base import RoutingStrategy, estimate_duration_minutes

logger = logging.getLogger(__name__)


class GraphSearchStrategy(RoutingStrategy):
    """Runs a search over a fresh snapshot of the hub network.

    On recalculation the snapshot is rebuilt without the hubs and connections
    the incident obstructs, and the search is repeated between the route's
    stored hubs.
    """

    def compute_optimal_path(
        self,
        start: Hub,
        end: Hub,
        constraints: Optional[RoutingConstraints] = None,
    ) -> Path:
        snapshot = build_snapshot(self.hubs, start, end)
        return self.search(snapshot, start, end)

    def _reroute(self, route: Route, incident: Incident, decision: RecalculationDecision) -> Path:
        snapshot = build_snapshot(self.hubs, decision.start_hub, decision.end_hub, incident)
        path = self.search(snapshot, decision.start_hub, decision.end_hub)
        return replace(path, service_tag=f"{self.name}{RECALC_SUFFIX}")

    @abstractmethod
    def search(self, snapshot: GraphSnapshot, start: Hub, end: Hub) -> Path:
        raise NotImplementedError

    def _build_path(
        self,
        snapshot: GraphSnapshot,
        start: Hub,
        end: Hub,
        previous: Mapping[str, str],
        total_distance: float,
    ) -> Path:
        """Walk predecessor links back from ``end`` and assemble the path."""

        if end.id not in previous and start.id != end.id:
            raise NoPathFoundError(f"No path found between hubs {start.id} and {end.id}")

        coordinates: list[Point] = []
        current_id: str | None = end.id
        while current_id is not None:
            coordinates.append(snapshot.hub(current_id).location)
            current_id = previous.get(current_id)
        coordinates.reverse()

        if len(coordinates) == 1:
            coordinates.append(coordinates[0])

        logger.debug(f"{self.name}: {start.id} -> {end.id} through {len(coordinates)} points, weight {total_distance}")
        return Path(
            geometry=tuple(coordinates),
            total_distance=total_distance,
            estimated_duration_minutes=estimate_duration_minutes(total_distance),
            service_tag=self.name,
        )
