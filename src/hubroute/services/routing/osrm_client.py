"""HTTP client for the OSRM route service."""

from __future__ import annotations

import logging
from typing import Sequence

import httpx

from ...config import settings
from ...models.domain import Point
from .errors import NoPathFoundError, ProviderUnavailableError

logger = logging.getLogger(__name__)


class OSRMClient:
    """Single-shot OSRM route requests.

    Every call makes exactly one HTTP request bounded by an explicit timeout;
    failures surface as :class:`ProviderUnavailableError` and are never retried
    here.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        connect_timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = (base_url or settings.osrm_base_url).rstrip("/")
        if not self.base_url:
            raise ValueError("OSRM base URL is not configured.")
        self.timeout = timeout if timeout is not None else settings.osrm_timeout_seconds
        self.connect_timeout = connect_timeout if connect_timeout is not None else settings.osrm_connect_timeout_seconds
        self._transport = transport

    def _get_client(self) -> httpx.Client:
        return httpx.Client(
            timeout=httpx.Timeout(self.timeout, connect=self.connect_timeout),
            transport=self._transport,
        )

    def build_url(self, points: Sequence[Point]) -> str:
        coordinate_str = ";".join(f"{point.longitude:f},{point.latitude:f}" for point in points)
        return f"{self.base_url}/{coordinate_str}"

    def route(self, points: Sequence[Point]) -> dict:
        """Request a full-geometry route through ``points`` in order.

        Returns the decoded JSON body. An empty ``routes`` array raises
        :class:`NoPathFoundError`.
        """
        if len(points) < 2:
            raise ValueError("At least two coordinates are required for OSRM route.")

        url = self.build_url(points)
        params = {"overview": "full", "geometries": "geojson"}
        logger.info(f"Requesting OSRM route: {url}")

        client = self._get_client()
        try:
            response = client.get(url, params=params)
            response.raise_for_status()
            data = response.json()
        except httpx.TimeoutException as e:
            raise ProviderUnavailableError(f"OSRM request timed out after {self.timeout}s: {e}") from e
        except httpx.HTTPStatusError as e:
            raise ProviderUnavailableError(
                f"OSRM responded with HTTP {e.response.status_code} for {url}"
            ) from e
        except httpx.HTTPError as e:
            raise ProviderUnavailableError(f"Failed to connect to OSRM service at {self.base_url}: {e}") from e
        except ValueError as e:
            raise ProviderUnavailableError(f"OSRM returned a non-JSON body: {e}") from e
        finally:
            client.close()

        if not isinstance(data, dict):
            raise ProviderUnavailableError("OSRM response is not a JSON object.")
        if not data.get("routes"):
            message = data.get("message") or data.get("code") or "empty routes array"
            raise NoPathFoundError(f"No route found by OSRM: {message}")
        return data


def check_health(base_url: str | None = None) -> bool:
    """Check OSRM availability with a minimal two-point route request."""
    try:
        client = OSRMClient(base_url=base_url, timeout=5.0)
        client.route([Point(13.388860, 52.517037), Point(13.385983, 52.496891)])
        return True
    except (ProviderUnavailableError, NoPathFoundError, ValueError) as e:
        logger.warning(f"OSRM health check failed: {e}")
        return False
