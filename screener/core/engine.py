"""
Conversation Engine
-------------------
Per-chat state machine over the question catalog.

States are the catalog's step ids plus steps.COMPLETED. A transition happens
only for an input that matches the session's *current* step:

  record answer -> evaluate fail predicate -> finish(fail)
                                           -> finish(pass) on the last step
                                           -> advance, save, render next

Inputs for another step (buttons on an old message) and any input on a
completed session are dropped without a reply. Malformed trigger codes are
logged and dropped. Free-text steps re-prompt on unparseable or out-of-range
input without touching the session.

`presenter` is anything with send_message(chat_id, text, keyboard=None)
(see screener.telegram.client.TelegramClient).
"""
from __future__ import annotations

import re
from typing import Optional, Union

from screener.settings import settings
from screener.core import messages, steps
from screener.core.catalog import Catalog, InvalidTrigger, decode_trigger, get_catalog
from screener.core.conditions import fail_reason
from screener.core.reporter import finish
from screener.observability.logging import log
import screener.observability.metrics as metrics
import screener.store.session_repo as session_repo
from screener.store.models import Session
from screener.utils.time import utc_now_iso

MIN_TOKEN_LENGTH = 4
INTEGER_RE = re.compile(r"[+-]?\d+", re.ASCII)

# Outcomes (returned for logging/tests; callers do not branch on them)
STARTED = "started"
REJECTED = "rejected"
ADVANCED = "advanced"
FINISHED = "finished"
REPROMPTED = "reprompted"
REMINDED = "reminded"
EXPIRED = "expired"
NO_SESSION = "no_session"
STALE = "stale"
INVALID = "invalid"
IGNORED = "ignored"


def send_question(chat_id: int, catalog: Catalog, index: int, presenter) -> None:
    rendered = catalog.render(index)
    presenter.send_message(chat_id, rendered.text, rendered.keyboard)


def start_session(
    chat_id: int,
    token: Optional[str],
    presenter,
    *,
    display_name: Optional[str] = None,
    first_name: str = "",
) -> Optional[Session]:
    """
    Create (or overwrite) the chat's session at the first step and render
    question 1. Tokens shorter than MIN_TOKEN_LENGTH are rejected.
    """
    token = (token or "").strip()
    if len(token) < MIN_TOKEN_LENGTH:
        log(event="start_rejected", chatId=chat_id, tokenLength=len(token))
        presenter.send_message(chat_id, messages.INVALID_TOKEN)
        return None

    catalog = get_catalog(settings.SCREENING_VARIANT)
    session = Session(
        chatId=chat_id,
        applicantToken=token,
        step=catalog.step_for(0),
        answers={},
        startedAt=utc_now_iso(),
        displayName=display_name,
        variant=catalog.name,
    )
    # Restart semantics: a new run gets a fresh verdict claim
    session_repo.clear_completion(chat_id)
    session_repo.save_session(session)
    metrics.increment_started()
    log(event="session_started", chatId=chat_id, variant=catalog.name, token=token)

    presenter.send_message(chat_id, messages.welcome(first_name, catalog.step_count))
    send_question(chat_id, catalog, 0, presenter)
    return session


def apply_answer(session: Session, value: Union[str, int], presenter) -> str:
    """Record `value` for the current step and run the transition."""
    if session.completed:
        return IGNORED

    catalog = session.catalog
    index = catalog.index_of(session.step)
    if index is None:
        log(event="session_step_unknown", chatId=session.chatId, step=session.step)
        return INVALID

    key = catalog.key_for(index)
    try:
        session.record_answer(key, value)
    except ValueError as e:
        log(event="answer_rejected", chatId=session.chatId, step=session.step, error=str(e))
        return INVALID

    reason = fail_reason(
        key,
        value,
        min_weekly_hours=settings.min_weekly_hours(),
        max_age=settings.max_age(),
    )
    if reason:
        finish(session, steps.FAIL, reason, presenter)
        return FINISHED

    next_index = index + 1
    if next_index >= catalog.step_count:
        finish(session, steps.PASS, "", presenter)
        return FINISHED

    session.step = catalog.step_for(next_index)
    session_repo.save_session(session)
    log(event="step_advanced", chatId=session.chatId, answered=key, step=session.step)
    send_question(session.chatId, catalog, next_index, presenter)
    return ADVANCED


def handle_button(chat_id: int, data: Optional[str], presenter) -> str:
    """Button press carrying callback_data `data` (e.g. "q2:ft")."""
    session = session_repo.load_session(chat_id)
    if session is None:
        # Buttons on a finished screening's messages: nothing to say
        if session_repo.is_completed(chat_id):
            return IGNORED
        presenter.send_message(chat_id, messages.SESSION_EXPIRED)
        return EXPIRED

    if session.completed:
        return IGNORED

    decoded = decode_trigger(data)
    if isinstance(decoded, InvalidTrigger):
        log(event="trigger_invalid", chatId=chat_id, raw=decoded.raw, reason=decoded.reason)
        return INVALID

    catalog = session.catalog
    question = catalog.question_for_prefix(decoded.prefix)
    if question is None:
        log(event="trigger_invalid", chatId=chat_id, raw=data, reason="unknown_prefix")
        return INVALID

    if question.step != session.step:
        log(event="trigger_stale", chatId=chat_id, prefix=decoded.prefix, step=session.step)
        return STALE

    value = question.value_for(decoded.code)
    if value is None:
        log(event="trigger_invalid", chatId=chat_id, raw=data, reason="unknown_code")
        return INVALID

    return apply_answer(session, value, presenter)


def _parse_int(text: Optional[str]) -> Optional[int]:
    # ASCII digits only: int() alone also takes "3_5" and non-Latin numerals
    raw = (text or "").strip()
    if not INTEGER_RE.fullmatch(raw):
        return None
    return int(raw)


def handle_free_text(chat_id: int, text: Optional[str], presenter) -> str:
    """Plain (non-command) message."""
    session = session_repo.load_session(chat_id)
    if session is None:
        presenter.send_message(chat_id, messages.START_HINT)
        return NO_SESSION
    if session.completed:
        return IGNORED

    catalog = session.catalog
    question = catalog.question_for_step(session.step)
    if question is None:
        log(event="session_step_unknown", chatId=chat_id, step=session.step)
        return INVALID

    if not question.free_text:
        presenter.send_message(chat_id, messages.USE_BUTTONS)
        return REMINDED

    value = _parse_int(text)
    if value is None or not question.accepts(value):
        log(event="free_text_rejected", chatId=chat_id, step=session.step, text=text or "")
        note = messages.INVALID_NUMBER.format(low=question.min_value, high=question.max_value)
        rendered = catalog.render(catalog.index_of(session.step))
        presenter.send_message(chat_id, f"{note}\n\n{rendered.text}")
        return REPROMPTED

    return apply_answer(session, value, presenter)
