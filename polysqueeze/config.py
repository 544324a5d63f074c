"""Configuration for polysqueeze clients.

Values can be overridden in the environment or a .env file:

    POLY_GAMMA_URL=https://gamma-api.polymarket.com
    POLY_WSS_URL=wss://ws-subscriptions-clob.polymarket.com
    POLY_HTTP_TIMEOUT=30
"""

import os

from dotenv import load_dotenv

load_dotenv()

# Direct Polymarket endpoints
DEFAULT_GAMMA_URL = "https://gamma-api.polymarket.com"
DEFAULT_WSS_URL = "wss://ws-subscriptions-clob.polymarket.com"

GAMMA_URL = os.getenv("POLY_GAMMA_URL", DEFAULT_GAMMA_URL)
WSS_URL = os.getenv("POLY_WSS_URL", DEFAULT_WSS_URL)
HTTP_TIMEOUT = float(os.getenv("POLY_HTTP_TIMEOUT", "30"))

# Page size used by get_markets when the caller sets no limit
DEFAULT_MARKETS_LIMIT = 50
