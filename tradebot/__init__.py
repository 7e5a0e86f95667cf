"""Building blocks for a spot-market trading bot: config, strategy, price and user streams, trade log."""

__version__ = "0.1.0"