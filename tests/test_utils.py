import time

from tradebot.utils import current_timestamp_ms


def test_timestamp_within_bounds():
    before = time.time_ns() // 1_000_000
    stamp = current_timestamp_ms()
    after = time.time_ns() // 1_000_000
    assert before <= stamp <= after


def test_timestamp_non_decreasing():
    first = current_timestamp_ms()
    second = current_timestamp_ms()
    assert second >= first