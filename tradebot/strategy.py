"""Trading strategies that decide when to buy and sell."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

logger = logging.getLogger(__name__)


class StrategyError(Exception):
    """Raised when a strategy configuration is invalid."""


class Strategy(ABC):
    """Base class holding the price of the last buy."""

    def __init__(self) -> None:
        self.last_buy_price = 0.0
        self.has_bought = False

    @abstractmethod
    def should_buy(self, price: float) -> bool:
        """Return True if a buy order should be placed at *price*."""

    @abstractmethod
    def should_sell(self, price: float) -> bool:
        """Return True if a sell order should be placed at *price*."""

    def set_last_buy_price(self, price: float) -> None:
        """Record an actual fill price for an open position."""
        self.last_buy_price = price
        self.has_bought = True


class PriceDropStrategy(Strategy):
    """Buy after a percentage drop; sell on take-profit or stop-loss."""

    def __init__(
        self,
        threshold_percent: float,
        take_profit_percent: float,
        stop_loss_percent: float,
    ) -> None:
        super().__init__()
        self.threshold_percent = threshold_percent
        self.take_profit_ratio = take_profit_percent / 100.0
        self.stop_loss_ratio = stop_loss_percent / 100.0
        self.last_price = 0.0

    def should_buy(self, price: float) -> bool:
        if self.last_price == 0.0:
            self.last_price = price
            return False
        if price < self.last_price * (1.0 - self.threshold_percent / 100.0):
            self.last_price = price
            self.last_buy_price = price
            self.has_bought = True
            return True
        return False

    def should_sell(self, price: float) -> bool:
        if not self.has_bought:
            return False
        if price >= self.last_buy_price * (1.0 + self.take_profit_ratio):
            logger.info("take profit reached at price %s", price)
            self.has_bought = False
            return True
        if price <= self.last_buy_price * (1.0 - self.stop_loss_ratio):
            logger.info("stop loss reached at price %s", price)
            self.has_bought = False
            return True
        return False


def _number(config: Mapping[str, Any], key: str) -> float:
    if key not in config:
        raise StrategyError(f"missing strategy key: {key!r}")
    value = config[key]
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise StrategyError(f"strategy key {key!r} must be a number")
    return float(value)


def create_strategy(config: Mapping[str, Any]) -> Strategy:
    """Build the strategy described by *config*."""
    if not isinstance(config, Mapping):
        raise StrategyError("strategy configuration must be an object")
    kind = config.get("type")
    if not isinstance(kind, str):
        raise StrategyError("strategy 'type' must be a string")
    if kind == "price_drop":
        return PriceDropStrategy(
            _number(config, "threshold_percent"),
            _number(config, "take_profit_percent"),
            _number(config, "stop_loss_percent"),
        )
    raise StrategyError(f"unknown strategy: {kind}")