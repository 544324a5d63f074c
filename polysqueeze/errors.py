"""Exceptions raised by the polysqueeze clients."""

from __future__ import annotations


class PolymarketError(Exception):
    """Base class for every error raised by this package."""


class TransportError(PolymarketError):
    """The request never produced a response (connect, read or timeout failure)."""


class HttpStatusError(PolymarketError):
    """The API answered with a non-2xx status."""

    def __init__(self, status_code: int, body: str = "", url: str = "") -> None:
        self.status_code = status_code
        self.body = body
        self.url = url
        message = f"HTTP {status_code}"
        if url:
            message += f" for {url}"
        if body:
            message += f": {body[:200]}"
        super().__init__(message)


class DecodeError(PolymarketError):
    """A response body did not match the expected shape."""


class EncodingError(PolymarketError, ValueError):
    """A query parameter value has no wire representation (e.g. Decimal NaN)."""
