from typing import Optional

from screener.api.schemas import CallbackQuery, TelegramMessage, TelegramUpdate, TelegramUser
from screener.core import engine, messages
from screener.core.catalog import get_catalog
from screener.observability.logging import log
import screener.observability.metrics as metrics
from screener.settings import settings
from screener.store.rate_limit import admit
from screener.store.session_repo import load_session
from screener.telegram.client import get_telegram


def _command(text: str) -> str:
    """'/start@SomeBot abc' -> '/start'"""
    head = text.split(maxsplit=1)[0] if text else ""
    return head.split("@", 1)[0].lower()


def handle_message(chat_id: int, user: TelegramUser, text: Optional[str], presenter) -> str:
    if not admit(chat_id):
        metrics.increment_rate_limited()
        log(event="rate_limited", chatId=chat_id, kind="message")
        presenter.send_message(chat_id, messages.TOO_FAST_MESSAGE)
        return "rate_limited"

    trimmed = (text or "").strip()
    command = _command(trimmed) if trimmed.startswith("/") else ""

    if command == "/start":
        parts = trimmed.split()
        token = parts[1] if len(parts) > 1 else ""
        if not token:
            presenter.send_message(chat_id, messages.NO_TOKEN)
            return engine.REJECTED
        session = engine.start_session(
            chat_id, token, presenter, display_name=user.username, first_name=user.first_name
        )
        return engine.STARTED if session else engine.REJECTED

    if command == "/restart":
        session = load_session(chat_id)
        if session is not None and session.applicantToken:
            engine.start_session(
                chat_id, session.applicantToken, presenter,
                display_name=user.username, first_name=user.first_name,
            )
            return engine.STARTED
        presenter.send_message(chat_id, messages.NO_ACTIVE_SESSION)
        return engine.NO_SESSION

    if command == "/help":
        count = get_catalog(settings.SCREENING_VARIANT).step_count
        presenter.send_message(chat_id, messages.HELP.format(count=count))
        return "help"

    return engine.handle_free_text(chat_id, trimmed, presenter)


def handle_callback_query(cq: CallbackQuery, presenter) -> str:
    chat_id = cq.message.chat.id if cq.message is not None else cq.from_.id

    # Always acknowledge first so Telegram clears the loading spinner
    presenter.answer_callback_query(cq.id)

    if not admit(chat_id):
        metrics.increment_rate_limited()
        log(event="rate_limited", chatId=chat_id, kind="callback")
        presenter.send_message(chat_id, messages.TOO_FAST_BUTTON)
        return "rate_limited"

    return engine.handle_button(chat_id, cq.data, presenter)


def handle_update(update: TelegramUpdate, presenter=None) -> Optional[str]:
    """
    Entry point for one Telegram update. Never raises: Telegram redelivers
    anything that is not answered with 200, so errors are logged and dropped.
    """
    presenter = presenter or get_telegram()

    if update.callback_query is not None:
        cq = update.callback_query
        try:
            return handle_callback_query(cq, presenter)
        except Exception as e:
            log(event="update_unhandled_error", kind="callback", chatId=cq.from_.id,
                updateId=update.update_id, errorType=type(e).__name__, error=str(e)[:500])
            return None

    if update.message is not None:
        msg: TelegramMessage = update.message
        chat_id = msg.chat.id
        user = msg.from_ or TelegramUser(id=chat_id, first_name="there")
        try:
            return handle_message(chat_id, user, msg.text, presenter)
        except Exception as e:
            log(event="update_unhandled_error", kind="message", chatId=chat_id,
                updateId=update.update_id, errorType=type(e).__name__, error=str(e)[:500])
            return None

    # edited_message, channel_post, etc. are ignored
    return None
