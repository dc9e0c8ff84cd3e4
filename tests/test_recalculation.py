import pytest

from hubroute.data.hub_repository import InMemoryHubRepository
from hubroute.models.domain import Edge, Hub, Incident, Point, Route
from hubroute.services.geospatial import segments_intersect
from hubroute.services.routing.errors import NoPathFoundError
from hubroute.services.routing.recalculation import base_algorithm, evaluate_recalculation, path_from_route
from hubroute.services.routing.strategies import (
    AStarRoutingStrategy,
    BasicRoutingStrategy,
    DijkstraRoutingStrategy,
)
from hubroute.services.wkt import parse_linestring


def _hub(hub_id: str, lon: float, lat: float) -> Hub:
    return Hub(id=hub_id, location=Point(lon, lat))


def _network(with_bypass: bool = True) -> InMemoryHubRepository:
    hubs = [_hub("A", 0, 0), _hub("B", 0.01, 0), _hub("C", 0.01, 0.01), _hub("D", 0.02, 0)]
    edges = [
        Edge(id="AB", from_hub_id="A", to_hub_id="B", weight=1),
        Edge(id="BD", from_hub_id="B", to_hub_id="D", weight=1),
    ]
    if with_bypass:
        edges += [
            Edge(id="AC", from_hub_id="A", to_hub_id="C", weight=3),
            Edge(id="CD", from_hub_id="C", to_hub_id="D", weight=3),
        ]
    return InMemoryHubRepository(hubs, edges)


def _road_block(buffer_m: float = 50.0) -> Incident:
    return Incident(
        type="ROADWORK",
        line_start=Point(0.01, -0.001),
        line_end=Point(0.01, 0.001),
        buffer_distance_meters=buffer_m,
    )


def _route(geometry: str, service: str, distance: float = 2.0, **overrides) -> Route:
    fields = dict(
        id="R1",
        route_geometry=geometry,
        total_distance_km=distance,
        estimated_duration_minutes=int(round(distance * 10)),
        routing_service=service,
        start_hub_id="A",
        end_hub_id="D",
    )
    fields.update(overrides)
    return Route(**fields)


@pytest.mark.parametrize(
    ("tag", "expected"),
    [
        ("DIJKSTRA_RECALC", "DIJKSTRA"),
        ("astar_recalc", "ASTAR"),
        ("OSRM_DETOUR", "OSRM"),
        ("BASIC", "BASIC"),
        (None, None),
        ("", None),
    ],
)
def test_base_algorithm(tag, expected):
    assert base_algorithm(tag) == expected


def test_decision_without_hub_references():
    route = _route("LINESTRING(0 0, 0.02 0)", "BASIC", start_hub_id=None)
    decision = evaluate_recalculation(route, _road_block(), _network())
    assert not decision.reroute
    assert decision.reason == "missing_hub_references"


def test_decision_without_incident_line():
    route = _route("LINESTRING(0 0, 0.02 0)", "BASIC")
    decision = evaluate_recalculation(route, Incident(type="FLOOD"), _network())
    assert not decision.reroute
    assert decision.reason == "incident_without_line"
    assert evaluate_recalculation(route, None, _network()).reason == "incident_without_line"


def test_decision_with_unknown_hub():
    route = _route("LINESTRING(0 0, 0.02 0)", "BASIC", end_hub_id="GONE")
    decision = evaluate_recalculation(route, _road_block(), _network())
    assert not decision.reroute
    assert decision.reason == "unknown_hub"


def test_decision_uses_first_geometry_point_as_current_position():
    route = _route("LINESTRING(0.005 0, 0.02 0)", "BASIC")
    decision = evaluate_recalculation(route, _road_block(), _network())
    assert decision.reroute
    assert decision.reason == "intersects_incident"
    assert decision.current_position == Point(0.005, 0)
    assert decision.end_position == Point(0.02, 0)


def test_decision_clear_of_incident():
    far_away = Incident(line_start=Point(1, 1), line_end=Point(1, 1.01), buffer_distance_meters=100)
    route = _route("LINESTRING(0 0, 0.02 0)", "BASIC")
    decision = evaluate_recalculation(route, far_away, _network())
    assert not decision.reroute
    assert decision.reason == "clear_of_incident"


def test_basic_unaffected_route_is_returned_as_is():
    far_away = Incident(line_start=Point(1, 1), line_end=Point(1, 1.01), buffer_distance_meters=100)
    route = _route("LINESTRING(0 0, 0.02 0)", "BASIC")
    path = BasicRoutingStrategy(_network()).recalculate(route, far_away)
    assert path == path_from_route(route)
    assert path.service_tag == "BASIC"


def test_basic_detour_goes_around_the_incident():
    incident = _road_block()
    route = _route("LINESTRING(0 0, 0.02 0)", "BASIC")
    path = BasicRoutingStrategy(_network()).recalculate(route, incident)

    assert path.service_tag == "BASIC_DETOUR"
    assert path.start == Point(0, 0)
    assert path.end == Point(0.02, 0)
    # detour waypoint plus a rejoin point past the corridor
    assert len(path.geometry) == 4
    assert path.waypoints == path.geometry[1:-1]
    assert path.total_distance > 0
    assert path.estimated_duration_minutes == int(round(path.total_distance * 10))

    detour = path.waypoints[0]
    assert detour.latitude > 0
    crossing = [
        (a, b)
        for a, b in zip(path.geometry, path.geometry[1:])
        if segments_intersect(a, b, incident.line_start, incident.line_end)
    ]
    assert crossing == []


@pytest.mark.parametrize("strategy_cls", [DijkstraRoutingStrategy, AStarRoutingStrategy])
def test_graph_recalculation_avoids_blocked_hub(strategy_cls):
    network = _network()
    strategy = strategy_cls(network)
    original = strategy.compute_optimal_path(network.get_hub("A"), network.get_hub("D"))
    assert original.total_distance == 2

    route = _route("LINESTRING(0 0, 0.01 0, 0.02 0)", strategy.name)
    path = strategy.recalculate(route, _road_block())

    assert path.total_distance == 6
    assert path.estimated_duration_minutes == 60
    assert path.geometry == (Point(0, 0), Point(0.01, 0.01), Point(0.02, 0))
    assert path.service_tag == f"{strategy.name}_RECALC"


def test_recalculated_route_can_be_recalculated_again():
    route = _route("LINESTRING(0 0, 0.01 0, 0.02 0)", "DIJKSTRA_RECALC")
    path = DijkstraRoutingStrategy(_network()).recalculate(route, _road_block())
    assert path.service_tag == "DIJKSTRA_RECALC"
    assert parse_linestring(route.route_geometry)[0] == path.start


def test_graph_recalculation_without_alternative():
    route = _route("LINESTRING(0 0, 0.01 0, 0.02 0)", "DIJKSTRA")
    with pytest.raises(NoPathFoundError):
        DijkstraRoutingStrategy(_network(with_bypass=False)).recalculate(route, _road_block())
