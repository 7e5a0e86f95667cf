"""Loading and validating the bot's JSON configuration."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

LIVE_BASE_URL = "https://api.binance.com/api"
TESTNET_BASE_URL = "https://testnet.binance.vision/api"

# (key in the JSON document, Config attribute, expected type)
_FIELDS = (
    ("api_key", "api_key", str),
    ("secret_key", "secret_key", str),
    ("symbol", "symbol", str),
    ("quantity", "quantity", str),
    ("isTestMode", "test_mode", bool),
)


class ConfigError(Exception):
    """Raised when the configuration file is missing, empty or malformed."""


def _require(data: Mapping[str, Any], key: str, kind: type) -> Any:
    if key not in data:
        raise ConfigError(f"missing configuration key: {key!r}")
    value = data[key]
    # bool is a subclass of int; only accept it where a bool is asked for.
    if kind is not bool and isinstance(value, bool):
        raise ConfigError(f"configuration key {key!r} must be {kind.__name__}")
    if not isinstance(value, kind):
        raise ConfigError(f"configuration key {key!r} must be {kind.__name__}")
    return value


@dataclass(frozen=True)
class Config:
    """Trading bot settings."""

    api_key: str = field(repr=False)
    secret_key: str = field(repr=False)
    symbol: str
    quantity: str
    test_mode: bool
    strategy: dict[str, Any]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Config:
        """Build a config from the parsed JSON document."""
        if not isinstance(data, Mapping):
            raise ConfigError("configuration must be a JSON object")
        if "strategy" not in data:
            raise ConfigError("missing configuration key: 'strategy'")
        values = {attr: _require(data, json_key, kind) for json_key, attr, kind in _FIELDS}
        return cls(**values, strategy=data["strategy"])

    @property
    def base_url(self) -> str:
        """REST API root, testnet or live depending on the mode."""
        return TESTNET_BASE_URL if self.test_mode else LIVE_BASE_URL


def load_config(path: str | Path = "config.json") -> Config:
    """Read and validate the configuration file at *path*."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"cannot open {path}: {exc}") from exc
    if not text:
        raise ConfigError(f"{path} is empty")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"{path} is not valid JSON: {exc}") from exc
    return Config.from_dict(data)