"""Messages on the public CLOB market channel.

Covers the text frames sent on ``wss://ws-subscriptions-clob.polymarket.com/ws/market``:
book snapshots, price changes, tick size changes and last trade prices.
Only payload building and parsing live here; connect with any WebSocket
library and feed each text frame to ``parse_text_frame``.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Optional, Union

from . import config
from .errors import DecodeError

logger = logging.getLogger(__name__)

MARKET_CHANNEL_PATH = "/ws/market"


@dataclass
class OrderSummary:
    price: Decimal
    size: Decimal


@dataclass
class MarketBook:
    """Full book snapshot for one asset."""

    event_type: str
    asset_id: str
    market: str
    timestamp: str
    hash: str
    bids: list[OrderSummary]
    asks: list[OrderSummary]


@dataclass
class PriceChangeEntry:
    asset_id: str
    price: Decimal
    size: Decimal
    side: str
    hash: str
    best_bid: Decimal
    best_ask: Decimal


@dataclass
class PriceChangeMessage:
    event_type: str
    market: str
    price_changes: list[PriceChangeEntry]
    timestamp: str


@dataclass
class TickSizeChangeMessage:
    event_type: str
    asset_id: str
    market: str
    old_tick_size: Decimal
    new_tick_size: Decimal
    side: str
    timestamp: str


@dataclass
class LastTradeMessage:
    """Emitted when a trade settles."""

    event_type: str
    asset_id: str
    fee_rate_bps: str
    market: str
    price: Decimal
    size: Decimal
    side: str
    timestamp: str


MarketEvent = Union[MarketBook, PriceChangeMessage, TickSizeChangeMessage, LastTradeMessage]


def market_channel_url(base: Optional[str] = None) -> str:
    return (base or config.WSS_URL).rstrip("/") + MARKET_CHANNEL_PATH


def subscription_message(asset_ids: list[str]) -> dict[str, Any]:
    """Subscribe payload for the market channel; send it as JSON text."""
    return {"type": "market", "assets_ids": list(asset_ids)}


def is_heartbeat(text: str) -> bool:
    return text.strip().lower() in ("ping", "pong")


def parse_text_frame(text: str) -> list[MarketEvent]:
    """
    Parse one text frame into market events.

    Heartbeats return an empty list. Other non-JSON text is logged and
    skipped.

    Raises:
        DecodeError: The frame is JSON but not a known market event
    """
    if is_heartbeat(text):
        return []
    trimmed = text.strip()
    if not trimmed.startswith(("{", "[")):
        logger.warning("ignoring unexpected text frame: %s", trimmed[:200])
        return []
    return parse_market_events(trimmed)


def parse_market_events(text: str) -> list[MarketEvent]:
    """Parse a JSON object or array of objects into market events."""
    try:
        value = json.loads(text)
    except json.JSONDecodeError as exc:
        raise DecodeError(f"Invalid JSON: {exc}") from exc

    if isinstance(value, list):
        return [parse_market_event(v) for v in value]
    return [parse_market_event(value)]


def parse_market_event(value: Any) -> MarketEvent:
    if not isinstance(value, dict):
        raise DecodeError(f"Expected a JSON object, got {type(value).__name__}")

    event_type = value.get("event_type") or value.get("type")
    if not isinstance(event_type, str):
        raise DecodeError("Missing event_type/type in market message")

    parser = _PARSERS.get(event_type)
    if parser is None:
        raise DecodeError(f"Unknown market event_type: {event_type}")
    try:
        return parser(value, event_type)
    except KeyError as exc:
        raise DecodeError(f"Failed to parse {event_type}: missing {exc}") from exc
    # null containers or non-object entries
    except TypeError as exc:
        raise DecodeError(f"Failed to parse {event_type}: {exc}") from exc


def _parse_book(v: dict[str, Any], event_type: str) -> MarketBook:
    return MarketBook(
        event_type=event_type,
        asset_id=v["asset_id"],
        market=v["market"],
        timestamp=str(v["timestamp"]),
        hash=v["hash"],
        bids=[_parse_level(b) for b in v["bids"]],
        asks=[_parse_level(a) for a in v["asks"]],
    )


def _parse_price_change(v: dict[str, Any], event_type: str) -> PriceChangeMessage:
    return PriceChangeMessage(
        event_type=event_type,
        market=v["market"],
        price_changes=[
            PriceChangeEntry(
                asset_id=c["asset_id"],
                price=_decimal(c["price"], "price"),
                size=_decimal(c["size"], "size"),
                side=c["side"],
                hash=c["hash"],
                best_bid=_decimal(c["best_bid"], "best_bid"),
                best_ask=_decimal(c["best_ask"], "best_ask"),
            )
            for c in v["price_changes"]
        ],
        timestamp=str(v["timestamp"]),
    )


def _parse_tick_size_change(v: dict[str, Any], event_type: str) -> TickSizeChangeMessage:
    return TickSizeChangeMessage(
        event_type=event_type,
        asset_id=v["asset_id"],
        market=v["market"],
        old_tick_size=_decimal(v["old_tick_size"], "old_tick_size"),
        new_tick_size=_decimal(v["new_tick_size"], "new_tick_size"),
        side=v["side"],
        timestamp=str(v["timestamp"]),
    )


def _parse_last_trade(v: dict[str, Any], event_type: str) -> LastTradeMessage:
    return LastTradeMessage(
        event_type=event_type,
        asset_id=v["asset_id"],
        fee_rate_bps=str(v["fee_rate_bps"]),
        market=v["market"],
        price=_decimal(v["price"], "price"),
        size=_decimal(v["size"], "size"),
        side=v["side"],
        timestamp=str(v["timestamp"]),
    )


_PARSERS = {
    "book": _parse_book,
    "price_change": _parse_price_change,
    "tick_size_change": _parse_tick_size_change,
    "last_trade_price": _parse_last_trade,
}


def _parse_level(level: dict[str, Any]) -> OrderSummary:
    return OrderSummary(
        price=_decimal(level["price"], "price"),
        size=_decimal(level["size"], "size"),
    )


def _decimal(value: Any, name: str) -> Decimal:
    # Decimal strings on the wire; str() keeps any JSON number's printed digits
    try:
        return Decimal(str(value))
    except InvalidOperation as exc:
        raise DecodeError(f"{name}: {value!r} is not a decimal") from exc
