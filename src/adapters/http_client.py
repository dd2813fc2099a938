"""httpx wrapper for the Steam Store catalog.

Standardizes timeout and headers for the store request, and lets tests
swap the transport for an `httpx.MockTransport`.
"""

from __future__ import annotations

import logging

import httpx

from core.config import AppSettings

logger = logging.getLogger(__name__)


def build_client(
    settings: AppSettings | None = None,
    *,
    transport: httpx.BaseTransport | None = None,
    extra_headers: dict[str, str] | None = None,
) -> httpx.Client:
    """Create an `httpx.Client` with the application defaults.

    Redirects are not followed: the store answers `appdetails` directly.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json, text/plain;q=0.9, */*;q=0.8",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.Client(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        headers=headers,
        transport=transport,
    )


class StoreCatalogClient:
    """One HTTPS GET per `fetch`, no retries.

    Returns the raw body, or `None` when connecting, sending or reading
    failed, or when the body is empty. The HTTP status is not interpreted:
    the store signals unknown AppIDs in the body.
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        client: httpx.Client | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._client = client or build_client(self._settings)

    def fetch(self, app_id: str) -> bytes | None:
        try:
            response = self._client.get(self._settings.catalog_url, params={"appids": app_id})
            body = response.read()
        except httpx.HTTPError as exc:
            logger.info("store request for AppID %s failed: %s", app_id, exc)
            return None

        logger.debug("store answered HTTP %s (%d bytes)", response.status_code, len(body))
        return body or None

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "StoreCatalogClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
