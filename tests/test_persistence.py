import pytest

from hubroute.models.domain import Point, Route
from hubroute.persistence import FileRouteRepository, InMemoryRouteRepository
from hubroute.persistence.filesystem import FileStorage



def _route(**overrides) -> Route:
    fields = dict(
        route_geometry="LINESTRING(0 0, 0.01 0.01, 0.02 0)",
        total_distance_km=6.0,
        estimated_duration_minutes=60,
        routing_service="DIJKSTRA_RECALC",
        parcel_id="P-1",
        driver_id="DRV-9",
        start_hub_id="A",
        end_hub_id="D",
        waypoints=[Point(0.01, 0.01)],
    )
    fields.update(overrides)
    return Route(**fields)


def test_in_memory_save_assigns_identity():
    repo = InMemoryRouteRepository()
    saved = repo.save(_route())

    assert saved.id
    assert saved.created_at is not None
    assert repo.find_by_id(saved.id) == saved
    assert repo.find_by_id("missing") is None


def test_in_memory_returns_copies():
    repo = InMemoryRouteRepository()
    saved = repo.save(_route())

    loaded = repo.find_by_id(saved.id)
    loaded.waypoints.append(Point(5, 5))
    loaded.routing_service = "MUTATED"
    assert repo.find_by_id(saved.id) == saved


def test_save_keeps_existing_identity():
    repo = InMemoryRouteRepository()
    saved = repo.save(_route(id="R-42"))
    created_at = saved.created_at

    saved.total_distance_km = 7.0
    repo.save(saved)
    reloaded = repo.find_by_id("R-42")
    assert reloaded.total_distance_km == 7.0
    assert reloaded.created_at == created_at


def test_file_repository_round_trip(tmp_path):
    repo = FileRouteRepository(root=tmp_path)
    saved = repo.save(_route())

    assert (tmp_path / f"{saved.id}.json").exists()
    loaded = FileRouteRepository(root=tmp_path).find_by_id(saved.id)
    assert loaded == saved


def test_file_repository_unknown_or_invalid_ids(tmp_path):
    repo = FileRouteRepository(root=tmp_path)
    assert repo.find_by_id("missing") is None
    assert repo.find_by_id("../escape") is None


def test_storage_rejects_path_names(tmp_path):
    storage = FileStorage(tmp_path)
    with pytest.raises(ValueError):
        storage.path_for("nested/name")
    assert storage.read_json(storage.path_for("absent")) is None
