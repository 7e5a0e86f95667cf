# tradebot

Building blocks for a small spot-market trading bot:

- **Configuration** (`tradebot.config`) — loads a JSON file with API
  credentials, the traded symbol, the order quantity, a test-mode switch and
  strategy settings.
- **Strategy** (`tradebot.strategy`) — a price-drop strategy that buys after
  the price falls by a set percentage and sells at a take-profit or stop-loss
  level.
- **Price stream** (`tradebot.price_stream`) — follows the public trade stream
  for one symbol and hands each traded price to a callback.
- **User stream** (`tradebot.user_stream`) — obtains a listen key, follows the
  account's private event stream and reports filled orders and BTC balance
  updates.
- **Trade log** (`tradebot.trade_logger`) — appends every trade to a text file
  with a local timestamp.

## Configuration

A configuration file looks like this:

```json
{
  "api_key": "placeholder",
  "secret_key": "secret",
  "symbol": "BTCUSDT",
  "quantity": "0.001",
  "isTestMode": true,
  "strategy": {
    "type": "price_drop",
    "threshold_percent": 1.0,
    "take_profit_percent": 2.0,
    "stop_loss_percent": 1.5
  }
}
```

`load_config(path="config.json")` reads the file and returns a frozen `Config`
with the attributes `api_key`, `secret_key`, `symbol`, `quantity`, `test_mode`
and `strategy` (the strategy section as a dict). `Config.from_dict(data)`
builds one from an already parsed document. `api_key`, `secret_key`, `symbol`
and `quantity` must be strings and `isTestMode` a boolean.

The `base_url` property gives the REST root: the test network when
`test_mode` is true, the live endpoint otherwise.

```python
from tradebot.config import ConfigError, load_config

try:
    config = load_config("config.json")
except ConfigError as exc:
    print(f"bad configuration: {exc}")
else:
    print(config.base_url)
```

A missing, unreadable, empty or malformed file, a missing key or a value of
the wrong type raises `ConfigError`.

## Strategy

`create_strategy(config)` builds a strategy from the `strategy` section of the
configuration. The only type is `price_drop`, which needs the numbers
`threshold_percent`, `take_profit_percent` and `stop_loss_percent`; any other
type, a missing key or a non-numeric value raises `StrategyError`.

```python
from tradebot.strategy import create_strategy

strategy = create_strategy({
    "type": "price_drop",
    "threshold_percent": 1.0,
    "take_profit_percent": 2.0,
    "stop_loss_percent": 1.5,
})

strategy.should_buy(100.0)   # False: the first price only sets the reference
strategy.should_buy(98.5)    # True: more than 1 % below the reference
strategy.should_sell(100.6)  # True: at least 2 % above the buy price
```

The reference price only moves when a buy is signalled. After a sell signal
the strategy holds no position until the next buy. When an order is actually
filled at a different price, call `strategy.set_last_buy_price(price)` so that
take-profit and stop-loss are measured from the real fill.

Custom strategies subclass `Strategy` and implement `should_buy(price)` and
`should_sell(price)`.

## Price stream

`trade_stream_url(symbol)` gives the address of the public trade stream for a
symbol (lower-cased).

```python
from tradebot.price_stream import PriceStream

stream = PriceStream("BTCUSDT", on_price=lambda price: print(price))
stream.run()    # connects on a background thread
...
stream.stop()   # closes the connection
```

`PriceStream.handle_message(message)` parses one trade message, passes its
`p` field as a float to the callback and returns it; messages without a price
or that cannot be parsed return `None` and are logged. Exceptions raised by the
callback are logged, not propagated. At most once per `print_interval` seconds
(60 by default) the latest price is logged at INFO level through the
`logging` module.

## User stream

```python
from tradebot.user_stream import UserStreamClient

client = UserStreamClient(
    api_key="placeholder",
    base_url=config.base_url,
    on_btc_balance=lambda btc: print("BTC free:", btc),
)
client.start(lambda fill: print(fill.side, fill.quantity, fill.symbol, fill.price))
...
client.stop()
```

`fetch_listen_key()` posts to `<base_url>/v3/userDataStream` with the API key
header and returns the listen key; a failed request or a response without a
key raises `UserStreamError`. `start(on_order_filled)` fetches the key and
listens on a background thread.

`handle_message(message)` processes one event: an `executionReport` with
status `FILLED` becomes an `OrderFill` (`symbol`, `side`, `quantity`, `price`),
which is passed to the callback and returned. An `outboundAccountPosition`
event passes the free BTC balance to `on_btc_balance`. Errors while handling
messages received over the connection are logged.

## Trade log

```python
from tradebot.trade_logger import TradeLogger, get_trade_logger

get_trade_logger().log_trade("BUY", "BTCUSDT", "0.001", 65000.0)
```

appends a line such as

```
[2024-05-01 12:00:00] BUY 0.001 BTCUSDT at price 65000
```

to `trade_log.txt` in the current directory and flushes it.
`get_trade_logger()` always returns the same logger. A `TradeLogger(path)` can
also be created for another file and used as a context manager, which closes
the file on exit.

`current_timestamp_ms()` from `tradebot.utils` gives the current time in
milliseconds since the epoch.

## What the package does not do

The package has no order placement and no account balance queries over the
REST API, and no signed requests. There is no command and no main loop that
wires the streams, the strategy and the trade log together: an application
has to connect `PriceStream`, a `Strategy`, `UserStreamClient` and
`TradeLogger` itself and send its own orders.

## Tests

The test suite uses pytest and responses, installed with the `test` extra:

```
pip install -e .[test]
pytest
```