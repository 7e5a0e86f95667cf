"""Append-only log of executed trades."""

from __future__ import annotations

import functools
import threading
from datetime import datetime
from pathlib import Path

DEFAULT_LOG_FILE = "trade_log.txt"


class TradeLogger:
    """Writes one timestamped line per trade to a text file."""

    def __init__(self, path: str | Path = DEFAULT_LOG_FILE) -> None:
        self.path = Path(path)
        self._lock = threading.Lock()
        self._file = self.path.open("a", encoding="utf-8")

    def log_trade(self, action: str, symbol: str, quantity: str, price: float) -> None:
        """Append a trade record and flush it to disk."""
        stamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        line = f"[{stamp}] {action} {quantity} {symbol} at price {price:g}\n"
        with self._lock:
            self._file.write(line)
            self._file.flush()

    def close(self) -> None:
        """Close the underlying file."""
        with self._lock:
            self._file.close()

    def __enter__(self) -> TradeLogger:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


@functools.lru_cache(maxsize=None)
def get_trade_logger() -> TradeLogger:
    """Return the process-wide logger writing to trade_log.txt."""
    return TradeLogger(DEFAULT_LOG_FILE)