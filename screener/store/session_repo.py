import json
import inspect
from typing import Optional

from screener.settings import settings
from screener.store.redis_conn import get_redis
from screener.store.models import Session
from screener.observability.logging import log

PREFIX = "session:"
DONE_PREFIX = "done:"


def _key(chat_id) -> str:
    return f"{PREFIX}{chat_id}"


def _done_key(chat_id) -> str:
    return f"{DONE_PREFIX}{chat_id}"


def _filter_session_kwargs(data: dict) -> dict:
    """
    Drop unknown fields so Session(**kwargs) never explodes
    """
    sig = inspect.signature(Session)
    allowed = set(sig.parameters.keys())
    return {k: v for k, v in data.items() if k in allowed}


def _decode(chat_id, raw: str) -> Optional[Session]:
    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as e:
        log(event="session_corrupt", chatId=chat_id, error=str(e)[:200])
        return None
    if not isinstance(data, dict):
        log(event="session_corrupt", chatId=chat_id, error="not_an_object")
        return None

    data = _filter_session_kwargs(data)
    if not isinstance(data.get("answers", {}), dict):
        data["answers"] = {}

    # Shape check before anything hashes or strips these fields
    str_fields_ok = all(isinstance(data.get(k, ""), str) for k in ("applicantToken", "step", "variant"))
    chat_id_ok = isinstance(data.get("chatId", 0), int) and not isinstance(data.get("chatId"), bool)
    if not (str_fields_ok and chat_id_ok):
        log(event="session_corrupt", chatId=chat_id, error="bad_field_type")
        return None

    try:
        session = Session(**data)
        valid = bool(session.applicantToken) and session.catalog.has_step(session.step)
    except (TypeError, AttributeError) as e:
        log(event="session_corrupt", chatId=chat_id, error=str(e)[:200])
        return None

    if not valid:
        log(event="session_corrupt", chatId=chat_id, error="unknown_step_or_token", step=session.step)
        return None
    return session


def load_session(chat_id) -> Optional[Session]:
    r = get_redis()
    raw = r.get(_key(chat_id))
    if not raw:
        return None
    return _decode(chat_id, raw)


def save_session(session: Session) -> None:
    r = get_redis()
    data = dict(session.__dict__)
    r.set(_key(session.chatId), json.dumps(data, ensure_ascii=False), ex=settings.SESSION_TTL_SEC)


def delete_session(chat_id) -> None:
    # Best-effort: the TTL eventually cleans up anything we fail to delete here.
    try:
        get_redis().delete(_key(chat_id))
    except Exception as e:
        log(event="session_delete_failed", chatId=chat_id, error=str(e)[:200])


# ---------------------------------------------------------------------------
# Completion marker: one verdict per screening run
# ---------------------------------------------------------------------------
def claim_completion(session: Session) -> bool:
    """
    Atomically claim the terminal transition for this run (SET NX).
    Returns False if another handler already dispatched a verdict.
    """
    r = get_redis()
    acquired = r.set(_done_key(session.chatId), session.startedAt or "1", nx=True, ex=settings.SESSION_TTL_SEC)
    return bool(acquired)


def is_completed(chat_id) -> bool:
    try:
        return bool(get_redis().exists(_done_key(chat_id)))
    except Exception as e:
        log(event="completion_marker_read_failed", chatId=chat_id, error=str(e)[:200])
        return False


def clear_completion(chat_id) -> None:
    get_redis().delete(_done_key(chat_id))
