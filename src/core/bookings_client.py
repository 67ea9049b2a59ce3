from __future__ import annotations

import logging
from threading import Lock
from typing import Any, Dict, Optional

import httpx

from src.core.config import get_settings
from src.core.errors import UnauthorizedError, UpstreamError

logger = logging.getLogger(__name__)


class BookingsApiClient:
    _shared_client: httpx.Client | None = None
    _client_lock: Lock = Lock()

    def __init__(self, http_client: Optional[httpx.Client] = None) -> None:
        settings = get_settings()
        self.base_url = settings.bookings_api_base_url.rstrip("/")
        self.fetch_path = "/" + settings.bookings_api_fetch_path.lstrip("/")
        self.default_token = settings.bookings_api_token
        self._client = http_client or self._get_shared_client(settings.bookings_api_timeout_seconds)

    @classmethod
    def _get_shared_client(cls, timeout: float) -> httpx.Client:
        if cls._shared_client is not None:
            return cls._shared_client
        with cls._client_lock:
            if cls._shared_client is None:
                cls._shared_client = httpx.Client(
                    timeout=timeout,
                    limits=httpx.Limits(max_keepalive_connections=20, max_connections=100),
                )
        return cls._shared_client

    def _headers(self, token: Optional[str]) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        bearer = token or self.default_token
        if bearer:
            headers["Authorization"] = f"Bearer {bearer}"
        return headers

    def fetch_bookings(self, token: Optional[str] = None) -> Any:
        """Return the decoded JSON body of the bookings listing endpoint.

        The body is handed back untouched; unwrapping the envelope is the
        classifier's job. Transport problems raise ``UpstreamError`` (or
        ``UnauthorizedError`` for a 401) instead of producing an empty list.
        """
        url = f"{self.base_url}{self.fetch_path}"
        try:
            response = self._client.get(url, headers=self._headers(token))
        except httpx.HTTPError as exc:
            logger.warning("bookings fetch failed url=%s error=%s", url, exc)
            raise UpstreamError("Network error. Please check your connection and try again.") from exc

        if response.status_code == 401:
            logger.warning("bookings fetch unauthorized url=%s", url)
            raise UnauthorizedError()
        if response.is_error:
            logger.warning("bookings fetch failed url=%s status=%s", url, response.status_code)
            raise UpstreamError(
                f"Failed to fetch bookings: {response.status_code}",
                upstream_status=response.status_code,
            )
        try:
            return response.json()
        except ValueError as exc:
            logger.warning("bookings fetch returned non-JSON body url=%s", url)
            raise UpstreamError("Bookings service returned an unreadable response") from exc
