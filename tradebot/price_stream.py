"""Live trade price feed over a WebSocket."""

from __future__ import annotations

import json
import logging
import threading
import time
from collections.abc import Callable

import websocket

logger = logging.getLogger(__name__)

STREAM_ROOT = "wss://stream.binance.com:9443/ws/"


def trade_stream_url(symbol: str) -> str:
    """WebSocket URL of the public trade stream for *symbol*."""
    return f"{STREAM_ROOT}{symbol.lower()}@trade"


class PriceStream:
    """Feeds each traded price of a symbol to a callback."""

    def __init__(
        self,
        symbol: str,
        on_price: Callable[[float], None],
        print_interval: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.url = trade_stream_url(symbol)
        self._on_price = on_price
        self._print_interval = print_interval
        self._clock = clock
        self._last_print = clock()
        self._app: websocket.WebSocketApp | None = None
        self._thread: threading.Thread | None = None
        self.running = False

    def handle_message(self, message: str) -> float | None:
        """Process one stream message; return the price it carried, if any."""
        try:
            data = json.loads(message)
            if not isinstance(data, dict) or "p" not in data:
                logger.debug("message received but no price: %s", message)
                return None
            raw = data["p"]
            if not isinstance(raw, str):
                raise TypeError("price field is not a string")
            price = float(raw)
        except (ValueError, TypeError) as exc:
            logger.error("cannot parse message: %s", exc)
            return None

        try:
            self._on_price(price)
        except Exception:
            logger.exception("price callback failed")

        now = self._clock()
        if now - self._last_print >= self._print_interval:
            logger.info("Price received: %s", price)
            self._last_print = now
        return price

    def run(self) -> None:
        """Connect and process messages on a background thread."""
        logger.info("initializing WebSocket client")
        self._app = websocket.WebSocketApp(
            self.url,
            on_open=lambda ws: logger.info("WebSocket connection opened"),
            on_message=lambda ws, message: self.handle_message(message),
            on_error=lambda ws, error: logger.error("WebSocket error: %s", error),
            on_close=lambda ws, code, reason: logger.info("WebSocket connection closed"),
        )
        self.running = True
        self._thread = threading.Thread(
            target=self._app.run_forever, name="price-stream", daemon=True
        )
        self._thread.start()

    def stop(self) -> None:
        """Close the connection."""
        self.running = False
        if self._app is not None:
            self._app.close()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=5)