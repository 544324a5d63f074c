"""Gamma API client for markets, events, tags and sports."""

from __future__ import annotations

import base64
import binascii
import logging
from typing import Optional
from urllib.parse import quote

import httpx

from . import config
from .base import BaseClient
from .errors import DecodeError
from .models import (
    GammaEvent,
    GammaTag,
    MarketsResponse,
    Sport,
    parse_event,
    parse_market,
    parse_sport,
    parse_tag,
    unwrap_list,
)
from .params import GammaListParams

logger = logging.getLogger(__name__)


def encode_cursor(offset: int) -> str:
    """Opaque page cursor: base64 of the decimal offset."""
    return base64.b64encode(str(offset).encode()).decode()


def decode_cursor(cursor: str) -> Optional[int]:
    """Offset encoded in ``cursor``, or None if it is not a valid cursor."""
    try:
        text = base64.b64decode(cursor, validate=True).decode()
    except (binascii.Error, UnicodeDecodeError):
        return None
    if not (text.isascii() and text.isdigit()):
        return None
    return int(text)


class GammaClient(BaseClient):
    """
    Client for the Polymarket Gamma API (market metadata).

    Example:
        with GammaClient() as gamma:
            page = gamma.get_markets(params=GammaListParams(limit=10))
            while page.next_cursor:
                page = gamma.get_markets(page.next_cursor)
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        client: Optional[httpx.Client] = None,
    ):
        super().__init__(base_url or config.GAMMA_URL, timeout=timeout, client=client)

    def with_base_url(self, url: str) -> GammaClient:
        """Return a client for another Gamma host, sharing this one's settings."""
        client = None if self._owns_client else self._client
        return GammaClient(url, timeout=self.timeout, client=client)

    def gamma_url(self, path: str) -> str:
        return self.build_url(path)

    def get_markets(
        self,
        next_cursor: Optional[str] = None,
        params: Optional[GammaListParams] = None,
    ) -> MarketsResponse:
        """
        List markets, one page per call.

        Args:
            next_cursor: Cursor from a previous MarketsResponse. Ignored when
                params.offset is set.
            params: Filters. limit defaults to DEFAULT_MARKETS_LIMIT and
                closed to False when left unset.

        Returns:
            MarketsResponse with the parsed page and the cursor for the next
        """
        params = params or GammaListParams()

        offset = params.offset
        if offset is None and next_cursor:
            offset = decode_cursor(next_cursor)
        offset = offset or 0

        limit = params.limit if params.limit is not None else config.DEFAULT_MARKETS_LIMIT
        closed = params.closed if params.closed is not None else False

        query = params.replace(limit=limit, offset=offset, closed=closed).to_query_params()
        payload = self._get_json("markets", params=query)
        markets = [parse_market(m) for m in unwrap_list(payload, "markets")]

        count = len(markets)
        logger.debug("markets offset=%d limit=%d -> %d results", offset, limit, count)
        return MarketsResponse(
            limit=limit,
            count=count,
            next_cursor=encode_cursor(offset + count) if count and count >= limit else None,
            data=markets,
        )

    def get_events(self, params: Optional[GammaListParams] = None) -> list[GammaEvent]:
        """List events with their nested markets."""
        query = params.to_query_params() if params else None
        payload = self._get_json("events", params=query)
        return [parse_event(e) for e in unwrap_list(payload, "events")]

    def get_event_by_slug(self, slug: str) -> GammaEvent:
        return self._get_event(f"events/slug/{quote(slug, safe='')}")

    def get_event_by_id(self, event_id: str) -> GammaEvent:
        return self._get_event(f"events/{quote(str(event_id), safe='')}")

    def get_tags(self) -> list[GammaTag]:
        payload = self._get_json("tags")
        return [parse_tag(t) for t in unwrap_list(payload, "tags")]

    def get_sports(self) -> list[Sport]:
        """Sports metadata (tag ids, series and resolution sources per sport)."""
        payload = self._get_json("sports")
        return [parse_sport(s) for s in unwrap_list(payload, "sports")]

    def _get_event(self, path: str) -> GammaEvent:
        payload = self._get_json(path)
        if not isinstance(payload, dict):
            raise DecodeError(f"{path}: expected a JSON object, got {type(payload).__name__}")
        return parse_event(payload)
