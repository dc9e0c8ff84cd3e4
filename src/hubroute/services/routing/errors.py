"""Routing error taxonomy."""

from __future__ import annotations


class RoutingError(Exception):
    """Base class for routing failures; ``http_status`` hints the API mapping."""

    http_status = 500


class NoPathFoundError(RoutingError):
    """The destination is unreachable in the available graph."""

    http_status = 422


class InvalidGeometryError(RoutingError, ValueError):
    """Coordinate text could not be parsed into the expected geometry."""

    http_status = 400


class ProviderUnavailableError(RoutingError, ConnectionError):
    """The external road-routing provider failed, timed out or answered garbage."""

    http_status = 503


class RouteNotFoundError(RoutingError, LookupError):
    http_status = 404


class SnapshotTooLargeError(RoutingError):
    """The hub network exceeds the configured snapshot bounds."""

    http_status = 413
