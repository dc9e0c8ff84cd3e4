import pytest

from hubroute.config import settings
from hubroute.data.hub_repository import InMemoryHubRepository
from hubroute.models.domain import Edge, Hub, Incident, Point
from hubroute.services.routing.errors import SnapshotTooLargeError
from hubroute.services.routing.graph import GraphSnapshot, build_snapshot, filter_for_incident


def _hub(hub_id: str, lon: float, lat: float) -> Hub:
    return Hub(id=hub_id, location=Point(lon, lat))


def _blocking_incident() -> Incident:
    # vertical line through (0.01, 0) with a 50 m corridor
    return Incident(
        type="ROADWORK",
        line_start=Point(0.01, -0.001),
        line_end=Point(0.01, 0.001),
        buffer_distance_meters=50.0,
    )


def test_snapshot_indexes_edges_both_ways():
    a, b = _hub("A", 0, 0), _hub("B", 1, 1)
    edge = Edge(id="E1", from_hub_id="A", to_hub_id="B", weight=5)
    snapshot = GraphSnapshot([a, b], [edge])

    assert snapshot.incident_edges("A") == (edge,)
    assert snapshot.incident_edges("B") == (edge,)
    assert snapshot.outgoing_edges("A") == (edge,)
    assert snapshot.outgoing_edges("B") == ()
    assert "A" in snapshot and len(snapshot) == 2


def test_snapshot_drops_dangling_edges():
    snapshot = GraphSnapshot([_hub("A", 0, 0)], [Edge(id="E1", from_hub_id="A", to_hub_id="GHOST", weight=1)])
    assert snapshot.edges == ()
    assert snapshot.incident_edges("A") == ()


def test_negative_weight_is_rejected():
    with pytest.raises(ValueError):
        Edge(id="E1", from_hub_id="A", to_hub_id="B", weight=-1)


def test_build_snapshot_always_contains_endpoints():
    provider = InMemoryHubRepository(hubs=[_hub("A", 0, 0)])
    outsider = _hub("Z", 5, 5)
    snapshot = build_snapshot(provider, provider.get_hub("A"), outsider)
    assert "Z" in snapshot


def test_incident_filter_drops_obstructed_hubs_and_edges():
    a, b, c, d = _hub("A", 0, 0), _hub("B", 0.01, 0), _hub("C", 0.01, 0.01), _hub("D", 0.02, 0)
    edges = [
        Edge(id="AB", from_hub_id="A", to_hub_id="B", weight=1),
        Edge(id="BD", from_hub_id="B", to_hub_id="D", weight=1),
        Edge(id="AC", from_hub_id="A", to_hub_id="C", weight=3),
        Edge(id="CD", from_hub_id="C", to_hub_id="D", weight=3),
        Edge(id="AD", from_hub_id="A", to_hub_id="D", weight=10),
    ]
    hubs, kept = filter_for_incident([a, b, c, d], edges, _blocking_incident(), keep_hub_ids=("A", "D"))

    assert [hub.id for hub in hubs] == ["A", "C", "D"]
    # AB/BD lose their hub, AD crosses the incident line
    assert [edge.id for edge in kept] == ["AC", "CD"]


def test_incident_filter_keeps_endpoints_inside_buffer():
    b = _hub("B", 0.01, 0)
    hubs, _ = filter_for_incident([b, _hub("C", 1, 1)], [], _blocking_incident(), keep_hub_ids=("B",))
    assert {hub.id for hub in hubs} == {"B", "C"}


def test_snapshot_size_is_bounded(monkeypatch):
    provider = InMemoryHubRepository(hubs=[_hub(f"H{i}", i, 0) for i in range(5)])
    monkeypatch.setattr(settings, "max_snapshot_hubs", 3)
    with pytest.raises(SnapshotTooLargeError):
        build_snapshot(provider, provider.get_hub("H0"), provider.get_hub("H1"))
