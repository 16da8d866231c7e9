import pytest
from unittest.mock import MagicMock

from screener.settings import settings


class FakeRedis:
    """In-memory stand-in for the handful of Redis commands the store uses."""

    def __init__(self):
        self.data = {}
        self.ttls = {}

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value, ex=None, px=None, nx=False):
        if nx and key in self.data:
            return None
        self.data[key] = value if isinstance(value, str) else str(value)
        if ex is not None:
            self.ttls[key] = ex
        return True

    def delete(self, *keys):
        n = 0
        for k in keys:
            if k in self.data:
                del self.data[k]
                self.ttls.pop(k, None)
                n += 1
        return n

    def exists(self, *keys):
        return sum(1 for k in keys if k in self.data)

    def incr(self, key, amount=1):
        v = int(self.data.get(key) or 0) + amount
        self.data[key] = str(v)
        return v


@pytest.fixture
def fake_redis(monkeypatch):
    r = FakeRedis()
    for mod in (
        "screener.store.session_repo",
        "screener.store.rate_limit",
        "screener.observability.metrics",
    ):
        monkeypatch.setattr(f"{mod}.get_redis", lambda: r)
    return r


@pytest.fixture
def presenter():
    return MagicMock()


@pytest.fixture
def dispatched(monkeypatch):
    """Captures result payloads instead of enqueueing them."""
    sent = []
    monkeypatch.setattr("screener.core.reporter.dispatch_result", lambda payload: sent.append(payload))
    return sent


@pytest.fixture(autouse=True)
def default_thresholds(monkeypatch):
    monkeypatch.delenv("MIN_WEEKLY_HOURS", raising=False)
    monkeypatch.delenv("MAX_AGE", raising=False)
    monkeypatch.setattr(settings, "SCREENING_VARIANT", "standard")
    monkeypatch.setattr(settings, "COORDINATOR_LINK", "https://t.me/coordinator")
