"""
Screening Counters
------------------
Lightweight Redis counters consumed by /admin/stats. Writes are best-effort:
a metrics failure must never interfere with the conversation flow.
"""
from __future__ import annotations

import time
from typing import Dict

from screener.store.redis_conn import get_redis
from screener.observability.logging import log

K_STARTED = "metrics:screening:started"
K_PASSED = "metrics:screening:passed"
K_FAILED = "metrics:screening:failed"
K_RATE_LIMITED = "metrics:screening:rate_limited"
K_DELIVERY_OK = "metrics:delivery:ok"
K_DELIVERY_FAIL = "metrics:delivery:failed"

COUNTERS = {
    "started": K_STARTED,
    "passed": K_PASSED,
    "failed": K_FAILED,
    "rate_limited": K_RATE_LIMITED,
    "delivery_ok": K_DELIVERY_OK,
    "delivery_failed": K_DELIVERY_FAIL,
}


def _incr(key: str) -> None:
    try:
        get_redis().incr(key, 1)
    except Exception as e:
        log(event="metrics_write_failed", key=key, error=str(e)[:200])


def increment_started() -> None:
    _incr(K_STARTED)

def increment_verdict(verdict: str) -> None:
    _incr(K_PASSED if verdict == "pass" else K_FAILED)

def increment_rate_limited() -> None:
    _incr(K_RATE_LIMITED)

def increment_delivery(ok: bool) -> None:
    _incr(K_DELIVERY_OK if ok else K_DELIVERY_FAIL)


def get_stats_snapshot() -> Dict[str, object]:
    r = get_redis()
    out: Dict[str, object] = {}
    for name, key in COUNTERS.items():
        try:
            out[name] = int(r.get(key) or 0)
        except (TypeError, ValueError):
            out[name] = 0
    finished = int(out["passed"]) + int(out["failed"])
    out["pass_rate"] = round(int(out["passed"]) / finished * 100.0, 3) if finished else 0.0
    out["snapshot_at"] = int(time.time())
    return out
