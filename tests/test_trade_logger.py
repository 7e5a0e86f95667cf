import re

import pytest

from tradebot.trade_logger import TradeLogger, get_trade_logger

LINE = re.compile(r"^\[\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}\] (.*)$")


def test_log_trade_format(tmp_path):
    path = tmp_path / "log.txt"
    with TradeLogger(path) as logger:
        logger.log_trade("BUY", "BTCUSDT", "0.001", 50000.0)
    lines = path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 1
    match = LINE.match(lines[0])
    assert match is not None
    assert match.group(1) == "BUY 0.001 BTCUSDT at price 50000"


def test_log_appends_across_instances(tmp_path):
    path = tmp_path / "log.txt"
    with TradeLogger(path) as first:
        first.log_trade("BUY", "ETHUSDT", "1", 2.5)
    with TradeLogger(path) as second:
        second.log_trade("SELL", "ETHUSDT", "1", 3.5)
    lines = path.read_text(encoding="utf-8").splitlines()
    assert [LINE.match(line).group(1) for line in lines] == [
        "BUY 1 ETHUSDT at price 2.5",
        "SELL 1 ETHUSDT at price 3.5",
    ]


def test_written_before_close(tmp_path):
    path = tmp_path / "log.txt"
    logger = TradeLogger(path)
    logger.log_trade("SELL", "BTCUSDT", "0.5", 1.25)
    assert path.read_text(encoding="utf-8").endswith("SELL 0.5 BTCUSDT at price 1.25\n")
    logger.close()


def test_cannot_open_missing_directory(tmp_path):
    with pytest.raises(OSError):
        TradeLogger(tmp_path / "missing" / "log.txt")


def test_get_trade_logger_singleton(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    logger = get_trade_logger()
    assert get_trade_logger() is logger
    logger.log_trade("BUY", "BTCUSDT", "2", 7.0)
    content = (tmp_path / "trade_log.txt").read_text(encoding="utf-8")
    assert content.endswith("BUY 2 BTCUSDT at price 7\n")