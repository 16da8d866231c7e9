"""
Per-chat sliding-window rate limiter backed by Redis.

The window is a JSON list of epoch-ms timestamps of *admitted* events under
rl:<chat_id>. Rejected attempts are never written, so a client that keeps
hammering is re-admitted as soon as its older admitted events slide out.

The read-modify-write is not atomic; under concurrent bursts for one chat the
ceiling can be overshot by a small margin, which is acceptable here.
"""
import json
from typing import List

from screener.settings import settings
from screener.store.redis_conn import get_redis
from screener.observability.logging import log
from screener.utils.time import now_ms

PREFIX = "rl:"


def _key(chat_id) -> str:
    return f"{PREFIX}{chat_id}"


def _read_window(r, chat_id) -> List[int]:
    try:
        raw = r.get(_key(chat_id))
    except Exception as e:
        log(event="rate_limit_read_failed", chatId=chat_id, error=str(e)[:200])
        return []
    if not raw:
        return []
    try:
        data = json.loads(raw)
        stamps = data.get("timestamps") or []
        return [int(t) for t in stamps]
    except (TypeError, ValueError, AttributeError):
        # Corrupt window: fail open on read
        return []


def admit(chat_id) -> bool:
    """
    Returns True if the event is allowed (and records it), False if rate-limited.
    """
    r = get_redis()
    now = now_ms()
    window_ms = int(settings.RATE_LIMIT_WINDOW_MS)

    recent = [t for t in _read_window(r, chat_id) if now - t < window_ms]
    if len(recent) >= int(settings.RATE_LIMIT_MAX_ACTIONS):
        return False

    recent.append(now)
    r.set(_key(chat_id), json.dumps({"timestamps": recent}), ex=settings.RATE_LIMIT_TTL_SEC)
    return True
