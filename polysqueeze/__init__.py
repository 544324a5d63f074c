"""polysqueeze - Python client for the Polymarket Gamma API and market channel."""

from .config import GAMMA_URL, WSS_URL, DEFAULT_MARKETS_LIMIT
from .errors import (
    DecodeError,
    EncodingError,
    HttpStatusError,
    PolymarketError,
    TransportError,
)
from .gamma import GammaClient, decode_cursor, encode_cursor
from .models import GammaEvent, GammaMarket, GammaTag, MarketsResponse, Sport
from .params import GammaListParams
from .wss import (
    LastTradeMessage,
    MarketBook,
    MarketEvent,
    OrderSummary,
    PriceChangeEntry,
    PriceChangeMessage,
    TickSizeChangeMessage,
    market_channel_url,
    parse_market_events,
    parse_text_frame,
    subscription_message,
)

__all__ = [
    # Client
    "GammaClient",
    "GammaListParams",
    "encode_cursor",
    "decode_cursor",
    # Config
    "GAMMA_URL",
    "WSS_URL",
    "DEFAULT_MARKETS_LIMIT",
    # Gamma types
    "GammaMarket",
    "GammaEvent",
    "GammaTag",
    "Sport",
    "MarketsResponse",
    # Errors
    "PolymarketError",
    "TransportError",
    "HttpStatusError",
    "DecodeError",
    "EncodingError",
    # Market channel
    "MarketEvent",
    "MarketBook",
    "OrderSummary",
    "PriceChangeEntry",
    "PriceChangeMessage",
    "TickSizeChangeMessage",
    "LastTradeMessage",
    "market_channel_url",
    "parse_market_events",
    "parse_text_frame",
    "subscription_message",
]

__version__ = "0.1.0"
