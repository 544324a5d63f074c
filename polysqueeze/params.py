"""Filter options for Gamma list endpoints and their query-string encoding."""

from __future__ import annotations

import dataclasses
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Optional
from urllib.parse import urlencode

from .errors import EncodingError

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


@dataclass
class GammaListParams:
    """Optional filters for ``/markets`` and ``/events``.

    Every field defaults to ``None``, meaning "not sent". ``False``, ``0`` and
    empty strings are real values and are sent as such. Field names are the
    query keys the Gamma API documents.
    """

    # Pagination and ordering
    limit: Optional[int] = None
    offset: Optional[int] = None
    order: Optional[str] = None
    ascending: Optional[bool] = None

    # Flags
    closed: Optional[bool] = None
    cyom: Optional[bool] = None
    include_tag: Optional[bool] = None
    related_tags: Optional[bool] = None

    # Identifiers
    tag_id: Optional[int] = None
    exclude_tag_id: Optional[int] = None
    uma_resolution_status: Optional[str] = None
    game_id: Optional[str] = None

    # Numeric ranges
    liquidity_num_min: Optional[Decimal] = None
    liquidity_num_max: Optional[Decimal] = None
    volume_num_min: Optional[Decimal] = None
    volume_num_max: Optional[Decimal] = None
    rewards_min_size: Optional[Decimal] = None

    # Date ranges
    start_date_min: Optional[datetime] = None
    start_date_max: Optional[datetime] = None
    end_date_min: Optional[datetime] = None
    end_date_max: Optional[datetime] = None

    # Multi-valued filters, sent comma-joined
    id: Optional[Sequence[int]] = None
    slug: Optional[Sequence[str]] = None
    clob_token_ids: Optional[Sequence[str]] = None
    condition_ids: Optional[Sequence[str]] = None
    market_maker_address: Optional[Sequence[str]] = None
    sports_market_types: Optional[Sequence[str]] = None
    question_ids: Optional[Sequence[str]] = None

    def to_query_params(self) -> list[tuple[str, str]]:
        """Serialize the present fields to ``(key, value)`` pairs.

        Pairs come out in field declaration order. Absent fields and empty
        collections produce nothing.

        Raises:
            EncodingError: A Decimal field holds NaN or infinity.
        """
        query = []
        for f in dataclasses.fields(self):
            encoded = encode_value(f.name, getattr(self, f.name))
            if encoded is not None:
                query.append((f.name, encoded))
        return query

    def to_query_string(self) -> str:
        return urlencode(self.to_query_params())

    def replace(self, **changes: Any) -> GammaListParams:
        """Return a copy with ``changes`` applied."""
        return dataclasses.replace(self, **changes)


def encode_value(name: str, value: Any) -> Optional[str]:
    """Encode one parameter value, or return None when it should be omitted."""
    if value is None:
        return None
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Decimal):
        return format_decimal(name, value)
    if isinstance(value, float):
        return format_decimal(name, Decimal(str(value)))
    if isinstance(value, datetime):
        return format_timestamp(value)
    if isinstance(value, (str, int)):
        return str(value)
    if isinstance(value, Sequence):
        if not value:
            return None
        return ",".join(encode_value(name, v) or "" for v in value)
    raise EncodingError(f"{name}: unsupported value type {type(value).__name__}")


def format_decimal(name: str, value: Decimal) -> str:
    """Fixed-point text for ``value``; keeps the caller's scale."""
    if not value.is_finite():
        raise EncodingError(f"{name}: {value} is not a finite decimal")
    return format(value, "f")


def format_timestamp(value: datetime) -> str:
    """Render ``value`` as ``YYYY-MM-DDTHH:MM:SSZ`` in UTC.

    Naive datetimes are taken to be UTC already.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime(TIMESTAMP_FORMAT)
