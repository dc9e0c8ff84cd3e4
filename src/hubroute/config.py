"""Application configuration and settings management."""

from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="HUBROUTE_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Hub Routing Engine"
    data_root: Path = Field(default=Path("data"), description="Root directory for static data files.")
    network_file: Path = Field(
        default=Path("data/network.json"),
        description="Hub and hub-connection listing used by the file-backed provider.",
    )
    routes_dir: Path = Field(
        default=Path("data/routes"),
        description="Directory holding one JSON document per persisted route.",
    )
    osrm_base_url: str = Field(
        default="http://router.project-osrm.org/route/v1/driving",
        description="OSRM route endpoint; coordinates are appended as a path segment.",
    )
    osrm_timeout_seconds: float = Field(default=10.0, gt=0.0)
    osrm_connect_timeout_seconds: float = Field(default=5.0, gt=0.0)
    default_algorithm: str = Field(default="BASIC", description="Algorithm used when a request names none.")
    meters_per_degree: float = Field(default=111000.0, gt=0.0)
    basic_detour_margin_degrees: float = Field(default=0.001, ge=0.0)
    provider_detour_margin_degrees: float = Field(default=0.002, ge=0.0)
    rejoin_route_fraction: float = Field(default=0.7, ge=0.0, le=1.0)
    minutes_per_distance_unit: float = Field(default=10.0, ge=0.0)
    max_snapshot_hubs: int = Field(default=10000, ge=1)
    max_snapshot_edges: int = Field(default=100000, ge=1)

    @field_validator("data_root", "network_file", "routes_dir", mode="before")
    @classmethod
    def _expand_path(cls, value: Any) -> Path:
        path_value = value if isinstance(value, Path) else Path(str(value))
        return path_value.expanduser().resolve()

    @field_validator("default_algorithm", mode="before")
    @classmethod
    def _normalize_algorithm(cls, value: Any) -> str:
        text = str(value or "").strip().upper()
        return text or "BASIC"

    @field_validator("osrm_base_url", mode="before")
    @classmethod
    def _strip_trailing_slash(cls, value: Any) -> str:
        return str(value).rstrip("/")


settings = Settings()
