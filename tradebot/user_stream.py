"""Account user-data stream: order fills and balance updates."""

from __future__ import annotations

import json
import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import requests
import websocket

logger = logging.getLogger(__name__)

STREAM_ROOT = "wss://stream.binance.com:9443/ws/"


class UserStreamError(Exception):
    """Raised when the listen key cannot be obtained."""


@dataclass(frozen=True)
class OrderFill:
    """A fully filled order reported by the exchange."""

    symbol: str
    side: str
    quantity: float
    price: float


def _decimal(value: Any) -> float:
    if not isinstance(value, str):
        raise TypeError(f"expected a decimal string, got {value!r}")
    return float(value)


class UserStreamClient:
    """Listens to the account stream and reports fills and BTC balance."""

    def __init__(
        self,
        api_key: str,
        base_url: str,
        on_btc_balance: Callable[[float], None] | None = None,
        timeout: float = 10.0,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url
        self.on_btc_balance = on_btc_balance
        self.timeout = timeout
        self.listen_key: str | None = None
        self.running = False
        self._on_order_filled: Callable[[OrderFill], None] | None = None
        self._app: websocket.WebSocketApp | None = None
        self._thread: threading.Thread | None = None

    def fetch_listen_key(self) -> str:
        """Request a listen key for the user-data stream."""
        url = f"{self.base_url}/v3/userDataStream"
        try:
            response = requests.post(
                url, headers={"X-MBX-APIKEY": self.api_key}, timeout=self.timeout
            )
            data = response.json()
        except requests.RequestException as exc:
            raise UserStreamError(f"listen key request failed: {exc}") from exc
        except ValueError as exc:
            raise UserStreamError("listen key response is not JSON") from exc
        key = data.get("listenKey") if isinstance(data, dict) else None
        if not isinstance(key, str):
            raise UserStreamError(f"no listen key in response: {data!r}")
        self.listen_key = key
        return key

    def handle_message(self, message: str) -> OrderFill | None:
        """Process one stream event; return the fill it reports, if any."""
        data = json.loads(message)
        logger.info("received message: %s", message)
        if not isinstance(data, dict):
            return None
        event = data.get("e")
        if event == "executionReport":
            if data.get("X") != "FILLED":
                return None
            fill = OrderFill(
                symbol=data["s"],
                side=data["S"],
                quantity=_decimal(data["z"]),
                price=_decimal(data["L"]),
            )
            if self._on_order_filled is not None:
                self._on_order_filled(fill)
            return fill
        if event == "outboundAccountPosition":
            for asset in data.get("B", []):
                if asset.get("a") == "BTC":
                    balance = _decimal(asset["f"])
                    if self.on_btc_balance is not None:
                        self.on_btc_balance(balance)
                    break
        return None

    def _on_message(self, ws: websocket.WebSocketApp, message: str) -> None:
        try:
            self.handle_message(message)
        except Exception:
            logger.exception("failed to handle user stream message")

    def start(self, on_order_filled: Callable[[OrderFill], None]) -> None:
        """Obtain a listen key and start listening on a background thread."""
        self._on_order_filled = on_order_filled
        key = self.fetch_listen_key()
        self._app = websocket.WebSocketApp(
            STREAM_ROOT + key,
            on_message=self._on_message,
            on_error=lambda ws, error: logger.error("WebSocket error: %s", error),
        )
        self.running = True
        self._thread = threading.Thread(
            target=self._app.run_forever, name="user-stream", daemon=True
        )
        self._thread.start()
        logger.info("user stream loop started")

    def stop(self) -> None:
        """Close the connection and wait for the listener thread."""
        self.running = False
        if self._app is not None:
            self._app.close()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=5)
        self._thread = None