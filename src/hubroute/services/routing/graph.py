"""Per-request graph snapshots of the hub network."""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Sequence

from ...config import settings
from ...data.hub_repository import HubProvider
from ...models.domain import Edge, Hub, Incident
from ..geospatial import is_point_in_line_buffer, route_intersects_incident
from .errors import SnapshotTooLargeError

logger = logging.getLogger(__name__)


class GraphSnapshot:
    """Immutable hub/edge arena with lookup indexes.

    ``incident_edges`` lists every edge touching a hub regardless of its stored
    direction; ``outgoing_edges`` only those stored as leaving it.
    """

    __slots__ = ("hubs", "edges", "_hubs_by_id", "_incident", "_outgoing")

    def __init__(self, hubs: Iterable[Hub], edges: Iterable[Edge]) -> None:
        hubs_by_id: dict[str, Hub] = {}
        for hub in hubs:
            hubs_by_id[hub.id] = hub

        kept_edges: list[Edge] = []
        incident: dict[str, list[Edge]] = {hub_id: [] for hub_id in hubs_by_id}
        outgoing: dict[str, list[Edge]] = {hub_id: [] for hub_id in hubs_by_id}
        for edge in edges:
            if edge.from_hub_id not in hubs_by_id or edge.to_hub_id not in hubs_by_id:
                logger.warning(f"Dropping connection {edge.id}: references a hub outside the snapshot")
                continue
            kept_edges.append(edge)
            outgoing[edge.from_hub_id].append(edge)
            incident[edge.from_hub_id].append(edge)
            if edge.to_hub_id != edge.from_hub_id:
                incident[edge.to_hub_id].append(edge)

        self.hubs: tuple[Hub, ...] = tuple(hubs_by_id.values())
        self.edges: tuple[Edge, ...] = tuple(kept_edges)
        self._hubs_by_id: Mapping[str, Hub] = MappingProxyType(hubs_by_id)
        self._incident = MappingProxyType({key: tuple(value) for key, value in incident.items()})
        self._outgoing = MappingProxyType({key: tuple(value) for key, value in outgoing.items()})

    def __contains__(self, hub_id: object) -> bool:
        return hub_id in self._hubs_by_id

    def __len__(self) -> int:
        return len(self.hubs)

    def hub(self, hub_id: str) -> Hub:
        return self._hubs_by_id[hub_id]

    def incident_edges(self, hub_id: str) -> tuple[Edge, ...]:
        return self._incident.get(hub_id, ())

    def outgoing_edges(self, hub_id: str) -> tuple[Edge, ...]:
        return self._outgoing.get(hub_id, ())


def filter_for_incident(
    hubs: Sequence[Hub],
    edges: Sequence[Edge],
    incident: Incident,
    keep_hub_ids: Iterable[str] = (),
) -> tuple[list[Hub], list[Edge]]:
    """Drop hubs inside the incident buffer and edges that cross it.

    Hubs listed in ``keep_hub_ids`` survive even inside the buffer so the trip
    can still begin or end there.
    """

    if not incident.has_line:
        return list(hubs), list(edges)

    keep = set(keep_hub_ids)
    retained = [
        hub
        for hub in hubs
        if hub.id in keep
        or not is_point_in_line_buffer(
            hub.location, incident.line_start, incident.line_end, incident.buffer_distance_meters
        )
    ]
    retained_by_id = {hub.id: hub for hub in retained}

    kept_edges: list[Edge] = []
    for edge in edges:
        from_hub = retained_by_id.get(edge.from_hub_id)
        to_hub = retained_by_id.get(edge.to_hub_id)
        if from_hub is None or to_hub is None:
            continue
        if route_intersects_incident(from_hub.location, to_hub.location, incident):
            continue
        kept_edges.append(edge)

    logger.info(
        f"Incident filter kept {len(retained)}/{len(hubs)} hubs and {len(kept_edges)}/{len(edges)} connections"
    )
    return retained, kept_edges


def build_snapshot(
    provider: HubProvider,
    start: Hub,
    end: Hub,
    incident: Optional[Incident] = None,
) -> GraphSnapshot:
    """Load hubs and connections for one routing request.

    The start and end hubs are always part of the snapshot, even when the
    provider listing does not contain them.
    """

    hubs = list(provider.list_hubs())
    edges = list(provider.list_edges())
    if len(hubs) > settings.max_snapshot_hubs:
        raise SnapshotTooLargeError(
            f"Hub network has {len(hubs)} hubs, more than the allowed {settings.max_snapshot_hubs}."
        )
    if len(edges) > settings.max_snapshot_edges:
        raise SnapshotTooLargeError(
            f"Hub network has {len(edges)} connections, more than the allowed {settings.max_snapshot_edges}."
        )

    known_ids = {hub.id for hub in hubs}
    for hub in (start, end):
        if hub.id not in known_ids:
            hubs.append(hub)
            known_ids.add(hub.id)

    if incident is not None and incident.has_line:
        hubs, edges = filter_for_incident(hubs, edges, incident, keep_hub_ids=(start.id, end.id))

    return GraphSnapshot(hubs, edges)
