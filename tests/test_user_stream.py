import json

import pytest
import requests
import responses

from tradebot.user_stream import OrderFill, UserStreamClient, UserStreamError

BASE_URL = "https://testnet.binance.vision/api"
ENDPOINT = BASE_URL + "/v3/userDataStream"


@pytest.fixture
def balances():
    return []


@pytest.fixture
def client(balances):
    return UserStreamClient("placeholder", BASE_URL, on_btc_balance=balances.append)


def test_fetch_listen_key(client):
    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, ENDPOINT, json={"listenKey": "token"})
        assert client.fetch_listen_key() == "token"
        assert client.listen_key == "token"
        assert rsps.calls[0].request.headers["X-MBX-APIKEY"] == "placeholder"


def test_fetch_listen_key_missing(client):
    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, ENDPOINT, json={"code": -2014, "msg": "bad key"}, status=401)
        with pytest.raises(UserStreamError):
            client.fetch_listen_key()
    assert client.listen_key is None


def test_fetch_listen_key_connection_error(client):
    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, ENDPOINT, body=requests.ConnectionError("down"))
        with pytest.raises(UserStreamError):
            client.fetch_listen_key()


def test_fetch_listen_key_not_json(client):
    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, ENDPOINT, body="<html>")
        with pytest.raises(UserStreamError):
            client.fetch_listen_key()


def _execution_report(status):
    return json.dumps(
        {"e": "executionReport", "X": status, "s": "BTCUSDT", "S": "BUY", "z": "0.001", "L": "50000.5"}
    )


def test_filled_order(client):
    fill = client.handle_message(_execution_report("FILLED"))
    assert fill == OrderFill("BTCUSDT", "BUY", float("0.001"), float("50000.5"))


def test_filled_order_calls_callback(client):
    fills = []
    client._on_order_filled = fills.append
    fill = client.handle_message(_execution_report("FILLED"))
    assert fills == [fill]


def test_unfilled_order_ignored(client):
    assert client.handle_message(_execution_report("NEW")) is None


def test_btc_balance_update(client, balances):
    message = json.dumps(
        {
            "e": "outboundAccountPosition",
            "B": [{"a": "USDT", "f": "100.0"}, {"a": "BTC", "f": "0.5"}, {"a": "BTC", "f": "9"}],
        }
    )
    assert client.handle_message(message) is None
    assert balances == [0.5]


def test_balance_without_btc(client, balances):
    message = json.dumps({"e": "outboundAccountPosition", "B": [{"a": "ETH", "f": "1.0"}]})
    assert client.handle_message(message) is None
    assert balances == []


def test_message_without_event(client, balances):
    assert client.handle_message(json.dumps({"result": None})) is None
    assert balances == []


def test_invalid_json_raises(client):
    with pytest.raises(ValueError):
        client.handle_message("{broken")


def test_quantity_must_be_string(client):
    message = json.dumps(
        {"e": "executionReport", "X": "FILLED", "s": "BTCUSDT", "S": "SELL", "z": 1, "L": "2"}
    )
    with pytest.raises(TypeError):
        client.handle_message(message)


def test_stop_before_start(client):
    client.stop()
    assert client.running is False