from collections.abc import Iterable
from typing import Any

import httpx

from wl_transit.data.config import MonitorConfig
from wl_transit.errors import DecodeError, TransportError


def build_monitor_params(
    divas: Iterable[int], traffic_info_categories: Iterable[str]
) -> list[tuple[str, str]]:
    """Build the repeated query parameters for a monitor request.

    Args:
        divas: Stop group area codes to monitor.
        traffic_info_categories: Values for activateTrafficInfo.

    Returns:
        Ordered (name, value) pairs, traffic info categories first.
    """
    params = [("activateTrafficInfo", category) for category in traffic_info_categories]
    params.extend(("diva", str(diva)) for diva in divas)
    return params


class MonitorClient:
    """Async HTTP client for the realtime monitor endpoint.

    Returns the decoded JSON body untouched; validation is the caller's job.

    Usage:
        async with MonitorClient(config) as client:
            payload = await client.fetch_monitor([60200179])
    """

    def __init__(
        self,
        config: MonitorConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the client.

        Args:
            config: Configuration with the monitor URL and request timeout.
            transport: Optional httpx transport (e.g. httpx.MockTransport).
        """
        self._config = config
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "MonitorClient":
        """Enter async context - create HTTP client."""
        headers = {"Accept": "application/json"}
        kwargs: dict[str, Any] = {"headers": headers, "timeout": self._config.request_timeout_seconds}
        if self._transport is not None:
            kwargs["transport"] = self._transport
        self._client = httpx.AsyncClient(**kwargs)
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit async context - close HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def fetch_monitor(self, divas: Iterable[int]) -> Any:
        """Fetch departures and traffic infos for the given stop groups.

        Args:
            divas: Stop group area codes to include in the request.

        Returns:
            The decoded JSON body (not validated).

        Raises:
            RuntimeError: If client not initialized.
            TransportError: On network errors or a non-2xx status.
            DecodeError: If the body is not valid JSON.
        """
        if not self._client:
            raise RuntimeError("Client not initialized - use 'async with'")

        params = build_monitor_params(divas, self._config.traffic_info_categories)

        try:
            response = await self._client.get(self._config.monitor_url, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise TransportError(
                f"Monitor API returned HTTP {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise TransportError(f"Monitor API request failed: {e}") from e

        try:
            return response.json()
        except ValueError as e:
            raise DecodeError(f"Monitor API returned invalid JSON: {e}") from e
