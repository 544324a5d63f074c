"""Typed records for Gamma API responses."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from .errors import DecodeError


@dataclass
class GammaTag:
    id: str
    label: str
    slug: str


@dataclass
class GammaMarket:
    """A single Gamma market. Prices and sizes are kept as Decimal."""

    id: str
    question: str
    condition_id: str
    slug: str
    question_id: str = ""
    description: str = ""
    outcomes: list[str] = field(default_factory=list)
    outcome_prices: list[Decimal] = field(default_factory=list)
    clob_token_ids: list[str] = field(default_factory=list)
    active: bool = False
    closed: bool = False
    archived: bool = False
    liquidity: Decimal = Decimal(0)
    volume: Decimal = Decimal(0)
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    market_maker_address: str = ""
    order_price_min_tick_size: Optional[Decimal] = None
    order_min_size: Optional[Decimal] = None
    tags: list[GammaTag] = field(default_factory=list)


@dataclass
class GammaEvent:
    id: str
    slug: str
    title: str
    description: str = ""
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    active: bool = False
    closed: bool = False
    liquidity: Decimal = Decimal(0)
    volume: Decimal = Decimal(0)
    markets: list[GammaMarket] = field(default_factory=list)
    tags: list[GammaTag] = field(default_factory=list)


@dataclass
class Sport:
    sport: str
    image: str = ""
    resolution: str = ""
    ordering: str = ""
    tags: list[str] = field(default_factory=list)
    series: str = ""


@dataclass
class MarketsResponse:
    """One page of ``/markets``.

    ``next_cursor`` is None on the last page; otherwise pass it back to
    ``GammaClient.get_markets`` to fetch the following page.
    """

    limit: int
    count: int
    next_cursor: Optional[str]
    data: list[GammaMarket]


def unwrap_list(payload: Any, ctx: str) -> list[dict[str, Any]]:
    """Return the record list from a bare list or a ``{"data": [...]}`` body."""
    if isinstance(payload, dict) and "data" in payload:
        payload = payload["data"]
    if not isinstance(payload, list):
        raise DecodeError(f"{ctx}: expected a JSON list, got {type(payload).__name__}")
    for item in payload:
        if not isinstance(item, dict):
            raise DecodeError(f"{ctx}: expected objects, got {type(item).__name__}")
    return payload


def parse_tag(t: dict[str, Any]) -> GammaTag:
    return GammaTag(
        id=_required_id(t, "tag"),
        label=_str(t.get("label")),
        slug=_str(t.get("slug")),
    )


def parse_market(m: dict[str, Any]) -> GammaMarket:
    """Parse a Gamma market, accepting camelCase or snake_case keys."""
    return GammaMarket(
        id=_required_id(m, "market"),
        question=_str(m.get("question")),
        condition_id=_str(_first(m, "conditionId", "condition_id")),
        slug=_str(m.get("slug")),
        question_id=_str(_first(m, "questionID", "question_id")),
        description=_str(m.get("description")),
        outcomes=[str(o) for o in _json_list(m.get("outcomes"), "outcomes")],
        outcome_prices=[
            _decimal(p, "outcomePrices")
            for p in _json_list(_first(m, "outcomePrices", "outcome_prices"), "outcomePrices")
        ],
        clob_token_ids=[
            str(t)
            for t in _json_list(_first(m, "clobTokenIds", "clob_token_ids"), "clobTokenIds")
        ],
        active=_bool(m.get("active"), "active"),
        closed=_bool(m.get("closed"), "closed"),
        archived=_bool(m.get("archived"), "archived"),
        liquidity=_decimal(_first(m, "liquidityNum", "liquidity"), "liquidity") or Decimal(0),
        volume=_decimal(_first(m, "volumeNum", "volume"), "volume") or Decimal(0),
        start_date=_datetime(_first(m, "startDate", "start_date"), "startDate"),
        end_date=_datetime(_first(m, "endDate", "end_date"), "endDate"),
        market_maker_address=_str(m.get("marketMakerAddress")),
        order_price_min_tick_size=_decimal(m.get("orderPriceMinTickSize"), "orderPriceMinTickSize"),
        order_min_size=_decimal(m.get("orderMinSize"), "orderMinSize"),
        tags=[parse_tag(t) for t in unwrap_list(m.get("tags") or [], "market tags")],
    )


def parse_event(e: dict[str, Any]) -> GammaEvent:
    return GammaEvent(
        id=_required_id(e, "event"),
        slug=_str(e.get("slug")),
        title=_str(e.get("title")),
        description=_str(e.get("description")),
        start_date=_datetime(_first(e, "startDate", "start_date"), "startDate"),
        end_date=_datetime(_first(e, "endDate", "end_date"), "endDate"),
        active=_bool(e.get("active"), "active"),
        closed=_bool(e.get("closed"), "closed"),
        liquidity=_decimal(e.get("liquidity"), "liquidity") or Decimal(0),
        volume=_decimal(e.get("volume"), "volume") or Decimal(0),
        markets=[parse_market(m) for m in unwrap_list(e.get("markets") or [], "event markets")],
        tags=[parse_tag(t) for t in unwrap_list(e.get("tags") or [], "event tags")],
    )


def parse_sport(s: dict[str, Any]) -> Sport:
    if not s.get("sport"):
        raise DecodeError("sport: missing 'sport'")
    tags = s.get("tags") or ""
    return Sport(
        sport=_str(s["sport"]),
        image=_str(s.get("image")),
        resolution=_str(s.get("resolution")),
        ordering=_str(s.get("ordering")),
        tags=[t for t in str(tags).split(",") if t],
        series=_str(s.get("series")),
    )


def _required_id(d: dict[str, Any], ctx: str) -> str:
    value = d.get("id")
    if value is None or value == "":
        raise DecodeError(f"{ctx}: missing 'id'")
    return str(value)


def _first(d: dict[str, Any], *keys: str) -> Any:
    """Value of the first key that is present and not null."""
    for key in keys:
        if d.get(key) is not None:
            return d[key]
    return None


def _str(value: Any) -> str:
    return "" if value is None else str(value)


def _bool(value: Any, name: str) -> bool:
    if value is None:
        return False
    if not isinstance(value, bool):
        raise DecodeError(f"{name}: expected a boolean, got {value!r}")
    return value


def _decimal(value: Any, name: str) -> Optional[Decimal]:
    """Decimal from a JSON number or numeric string; None and "" map to None."""
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise DecodeError(f"{name}: expected a number, got {value!r}")
    try:
        # str() first so JSON floats keep their printed digits
        return Decimal(str(value))
    except InvalidOperation as exc:
        raise DecodeError(f"{name}: {value!r} is not a number") from exc


def _datetime(value: Any, name: str) -> Optional[datetime]:
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise DecodeError(f"{name}: expected an ISO 8601 string, got {value!r}")
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError as exc:
        raise DecodeError(f"{name}: {value!r} is not an ISO 8601 timestamp") from exc


def _json_list(value: Any, name: str) -> list[Any]:
    """Gamma sends some arrays as JSON-encoded strings; accept both forms."""
    if value is None or value == "":
        return []
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except json.JSONDecodeError as exc:
            raise DecodeError(f"{name}: {value!r} is not a JSON array") from exc
    if not isinstance(value, list):
        raise DecodeError(f"{name}: expected a list, got {type(value).__name__}")
    return value
