import json
import pytest
from unittest.mock import MagicMock, patch

from screener.store import rate_limit
from screener.store.rate_limit import admit


class Clock:
    def __init__(self, start=1_700_000_000_000):
        self.now = start

    def __call__(self):
        return self.now


@pytest.fixture
def clock(monkeypatch):
    c = Clock()
    monkeypatch.setattr(rate_limit, "now_ms", c)
    return c


def test_admits_up_to_ceiling_then_rejects(fake_redis, clock):
    results = []
    for _ in range(6):
        results.append(admit(42))
        clock.now += 1000
    assert results == [True, True, True, True, True, False]


def test_rejected_call_does_not_mutate_window(fake_redis, clock):
    for _ in range(5):
        assert admit(42) is True
    before = fake_redis.get("rl:42")

    clock.now += 500
    assert admit(42) is False
    assert fake_redis.get("rl:42") == before


def test_window_slides_after_ten_seconds(fake_redis, clock):
    start = clock.now
    for i in range(5):
        clock.now = start + i * 1000
        assert admit(7) is True

    # Flooding while over the limit is never recorded...
    for ms in range(5000, 10000, 250):
        clock.now = start + ms
        assert admit(7) is False

    # ...so the oldest admitted event ages out exactly at the window edge
    clock.now = start + 10_000
    assert admit(7) is True
    stamps = json.loads(fake_redis.get("rl:7"))["timestamps"]
    assert start not in stamps
    assert len(stamps) == 5


def test_never_more_than_five_in_any_trailing_window(fake_redis, clock):
    admitted = []
    start = clock.now
    for i in range(200):
        clock.now = start + i * 333
        if admit(9):
            admitted.append(clock.now)
    for t in admitted:
        in_window = [x for x in admitted if t - 10_000 < x <= t]
        assert len(in_window) <= 5


def test_identities_are_independent(fake_redis, clock):
    for _ in range(5):
        assert admit(1) is True
    assert admit(1) is False
    assert admit(2) is True


def test_window_key_has_short_ttl(fake_redis, clock):
    admit(5)
    assert fake_redis.ttls["rl:5"] == 60


@pytest.mark.parametrize("garbage", ["not json", "[1,2,3]", '{"timestamps": "abc"}', '{"timestamps": [null]}'])
def test_corrupt_window_is_treated_as_empty(fake_redis, clock, garbage):
    fake_redis.data["rl:3"] = garbage
    assert admit(3) is True
    assert json.loads(fake_redis.get("rl:3"))["timestamps"] == [clock.now]


@patch("screener.store.rate_limit.log")
def test_read_failure_fails_open(mock_log, monkeypatch, clock):
    r = MagicMock()
    r.get.side_effect = ConnectionError("redis down")
    monkeypatch.setattr(rate_limit, "get_redis", lambda: r)

    assert admit(11) is True
    r.set.assert_called_once()
    assert mock_log.call_args.kwargs["event"] == "rate_limit_read_failed"
