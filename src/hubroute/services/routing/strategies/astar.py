"""A* search over the hub graph."""

from __future__ import annotations

import heapq
import itertools
import math

from ....models.domain import Hub, Path
from ...geospatial import distance_km
from ..graph import GraphSnapshot
from .graph_search import GraphSearchStrategy


class AStarRoutingStrategy(GraphSearchStrategy):
    """Dijkstra guided by straight-line distance to the destination.

    Connections are followed only in their stored direction. The heuristic is
    the Haversine distance in kilometres, so it is admissible only when
    connection weights are at least that distance.
    """

    name = "ASTAR"

    def heuristic(self, hub: Hub, end: Hub) -> float:
        return distance_km(hub.location, end.location)

    def search(self, snapshot: GraphSnapshot, start: Hub, end: Hub) -> Path:
        g_score: dict[str, float] = {start.id: 0.0}
        previous: dict[str, str] = {}
        counter = itertools.count()
        queue: list[tuple[float, int, float, str]] = [
            (self.heuristic(start, end), next(counter), 0.0, start.id)
        ]

        while queue:
            _, _, g_current, current_id = heapq.heappop(queue)
            if g_current > g_score.get(current_id, math.inf):
                continue
            if current_id == end.id:
                break

            for edge in snapshot.outgoing_edges(current_id):
                neighbor_id = edge.to_hub_id
                tentative = g_current + edge.cost
                if tentative < g_score.get(neighbor_id, math.inf):
                    g_score[neighbor_id] = tentative
                    previous[neighbor_id] = current_id
                    f_score = tentative + self.heuristic(snapshot.hub(neighbor_id), end)
                    heapq.heappush(queue, (f_score, next(counter), tentative, neighbor_id))

        return self._build_path(snapshot, start, end, previous, g_score.get(end.id, math.inf))
