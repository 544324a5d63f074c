"""Base HTTP client: owns the httpx client and maps failures to package errors."""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

import httpx

from . import config
from .errors import DecodeError, HttpStatusError, TransportError

logger = logging.getLogger(__name__)

QueryParams = Sequence[tuple[str, str]]


class BaseClient:
    """Base HTTP client bound to one API base URL."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: Optional[float] = None,
        client: Optional[httpx.Client] = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: API root, e.g. https://gamma-api.polymarket.com
            timeout: Request timeout in seconds (default POLY_HTTP_TIMEOUT).
                Ignored when client is given; self.timeout then reports that
                client's read timeout.
            client: Pre-configured httpx.Client to reuse. It is not closed
                by close(); the caller keeps ownership.
        """
        self.base_url = base_url
        self._owns_client = client is None
        if client is None:
            self.timeout: Optional[float] = (
                timeout if timeout is not None else config.HTTP_TIMEOUT
            )
            client = httpx.Client(timeout=self.timeout)
        else:
            self.timeout = client.timeout.read
        self._client = client

    def close(self):
        """Close the HTTP client if this instance created it."""
        if self._owns_client:
            self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()

    def build_url(self, path: str) -> str:
        """
        Join the base URL and a path with exactly one slash.

        An empty path returns the bare base URL. A trailing slash on the path
        is kept.
        """
        base = self.base_url.rstrip("/")
        path = path.lstrip("/")
        return f"{base}/{path}" if path else base

    def _get(self, path: str, *, params: Optional[QueryParams] = None) -> httpx.Response:
        """
        Make a GET request.

        Args:
            path: API path relative to base_url
            params: Query parameters as (key, value) pairs

        Raises:
            TransportError: No response was received
            DecodeError: The body could not be decompressed
            HttpStatusError: The response status was not 2xx
        """
        url = self.build_url(path)
        logger.debug("GET %s params=%s", url, list(params or []))
        try:
            resp = self._client.get(url, params=list(params) if params else None)
        # DecodingError subclasses RequestError, so it is caught first
        except httpx.DecodingError as exc:
            raise DecodeError(f"GET {url}: undecodable body: {exc}") from exc
        except httpx.RequestError as exc:
            raise TransportError(f"GET {url} failed: {exc}") from exc

        if not resp.is_success:
            raise HttpStatusError(resp.status_code, body=resp.text, url=str(resp.url))
        return resp

    def _get_json(self, path: str, *, params: Optional[QueryParams] = None) -> Any:
        """GET and decode the JSON body; DecodeError if it is not JSON."""
        resp = self._get(path, params=params)
        try:
            return resp.json()
        except ValueError as exc:
            raise DecodeError(f"GET {resp.url}: response is not JSON") from exc
