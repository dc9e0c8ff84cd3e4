"""Dijkstra shortest path over the hub graph."""

from __future__ import annotations

import heapq
import itertools
import math

from ....models.domain import Hub, Path
from ..graph import GraphSnapshot
from .graph_search import GraphSearchStrategy


class DijkstraRoutingStrategy(GraphSearchStrategy):
    """Minimum total connection weight; every connection is usable both ways."""

    name = "DIJKSTRA"

    def search(self, snapshot: GraphSnapshot, start: Hub, end: Hub) -> Path:
        distances: dict[str, float] = {start.id: 0.0}
        previous: dict[str, str] = {}
        counter = itertools.count()
        queue: list[tuple[float, int, str]] = [(0.0, next(counter), start.id)]

        while queue:
            distance, _, current_id = heapq.heappop(queue)
            if distance > distances.get(current_id, math.inf):
                continue
            if current_id == end.id:
                break

            for edge in snapshot.incident_edges(current_id):
                neighbor_id = edge.other_end(current_id)
                candidate = distance + edge.cost
                if candidate < distances.get(neighbor_id, math.inf):
                    distances[neighbor_id] = candidate
                    previous[neighbor_id] = current_id
                    heapq.heappush(queue, (candidate, next(counter), neighbor_id))

        return self._build_path(snapshot, start, end, previous, distances.get(end.id, math.inf))
