"""Tests for market channel message parsing."""

import json
import logging
from decimal import Decimal
from pathlib import Path

import pytest

from polysqueeze import (
    DecodeError,
    LastTradeMessage,
    MarketBook,
    PriceChangeMessage,
    TickSizeChangeMessage,
    market_channel_url,
    parse_market_events,
    parse_text_frame,
    subscription_message,
)

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def channel_frame():
    """A real-shaped array frame with a book and a price change."""
    return (FIXTURES / "market_channel.json").read_text()


def test_array_frame_yields_events_in_order(channel_frame):
    events = parse_market_events(channel_frame)
    assert [type(e) for e in events] == [MarketBook, PriceChangeMessage]

    book = events[0]
    assert book.asset_id == "7187123"
    assert book.bids[0].price == Decimal("0.70")
    assert book.bids[1].size == Decimal("300.5")
    assert book.asks[0].size == Decimal("800")

    change = events[1].price_changes[0]
    assert change.side == "BUY"
    assert change.best_ask - change.best_bid == Decimal("0.01")


def test_single_object_frame():
    frame = json.dumps(
        {
            "event_type": "last_trade_price",
            "asset_id": "7187123",
            "fee_rate_bps": "0",
            "market": "0x1f3c",
            "price": "0.456",
            "size": "219.217767",
            "side": "BUY",
            "timestamp": "1750428146322",
        }
    )
    (trade,) = parse_market_events(frame)
    assert isinstance(trade, LastTradeMessage)
    assert trade.price == Decimal("0.456")
    assert trade.size == Decimal("219.217767")


def test_type_key_is_accepted_as_discriminator():
    frame = json.dumps(
        {
            "type": "tick_size_change",
            "asset_id": "7187123",
            "market": "0x1f3c",
            "old_tick_size": "0.01",
            "new_tick_size": "0.001",
            "side": "BUY",
            "timestamp": "100000000",
        }
    )
    (event,) = parse_market_events(frame)
    assert isinstance(event, TickSizeChangeMessage)
    assert event.event_type == "tick_size_change"
    assert event.new_tick_size == Decimal("0.001")


class TestErrors:
    def test_invalid_json(self):
        with pytest.raises(DecodeError):
            parse_market_events("{not json")

    def test_missing_event_type(self):
        with pytest.raises(DecodeError, match="event_type"):
            parse_market_events('{"asset_id": "1"}')

    def test_unknown_event_type(self):
        with pytest.raises(DecodeError, match="Unknown"):
            parse_market_events('{"event_type": "new_market"}')

    def test_missing_field(self):
        with pytest.raises(DecodeError, match="book"):
            parse_market_events('{"event_type": "book", "asset_id": "1"}')

    @pytest.mark.parametrize(
        "bids",
        [None, ["0.5"], [["0.5", "10"]], "0.5"],
        ids=["null", "string-level", "list-level", "string"],
    )
    def test_malformed_book_levels(self, bids):
        frame = json.dumps(
            {
                "event_type": "book",
                "asset_id": "1",
                "market": "m",
                "timestamp": "1",
                "hash": "h",
                "bids": bids,
                "asks": [],
            }
        )
        with pytest.raises(DecodeError, match="book"):
            parse_market_events(frame)

    def test_null_price_changes(self):
        frame = json.dumps(
            {
                "event_type": "price_change",
                "market": "m",
                "timestamp": "1",
                "price_changes": None,
            }
        )
        with pytest.raises(DecodeError, match="price_change"):
            parse_market_events(frame)

    def test_bad_decimal(self):
        frame = json.dumps(
            {
                "event_type": "book",
                "asset_id": "1",
                "market": "m",
                "timestamp": "1",
                "hash": "h",
                "bids": [{"price": "cheap", "size": "1"}],
                "asks": [],
            }
        )
        with pytest.raises(DecodeError):
            parse_market_events(frame)


class TestTextFrames:
    @pytest.mark.parametrize("text", ["PING", "pong", " ping \n"])
    def test_heartbeats_are_skipped(self, text):
        assert parse_text_frame(text) == []

    def test_non_json_text_is_logged_and_skipped(self, caplog):
        with caplog.at_level(logging.WARNING, logger="polysqueeze.wss"):
            assert parse_text_frame("INVALID OPERATION") == []
        assert "unexpected text frame" in caplog.text

    def test_json_frame_is_parsed(self, channel_frame):
        assert len(parse_text_frame(channel_frame)) == 2


def test_subscription_message():
    message = subscription_message(["111", "222"])
    assert message == {"type": "market", "assets_ids": ["111", "222"]}
    assert json.loads(json.dumps(message)) == message


def test_market_channel_url():
    assert market_channel_url("wss://example.test/") == "wss://example.test/ws/market"
    assert market_channel_url().endswith("/ws/market")
