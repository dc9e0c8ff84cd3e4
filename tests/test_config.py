from hubroute.config import Settings


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("HUBROUTE_OSRM_BASE_URL", "http://osrm.local/route/v1/driving/")
    monkeypatch.setenv("HUBROUTE_DEFAULT_ALGORITHM", " dijkstra ")
    monkeypatch.setenv("HUBROUTE_ROUTES_DIR", str(tmp_path / "routes"))

    config = Settings()
    assert config.osrm_base_url == "http://osrm.local/route/v1/driving"
    assert config.default_algorithm == "DIJKSTRA"
    assert config.routes_dir == (tmp_path / "routes").resolve()
    assert config.meters_per_degree == 111000.0
