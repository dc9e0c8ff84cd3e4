"""Route persistence sinks."""

from .routes import FileRouteRepository, InMemoryRouteRepository, RouteRepository

__all__ = ["RouteRepository", "InMemoryRouteRepository", "FileRouteRepository"]
