"""
Minimal Telegram Bot API client (sendMessage / answerCallbackQuery).

This is the presentation sink for the conversation engine. Delivery problems
are logged and swallowed: a failed send must never abort a state transition
that has already been persisted.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx

from screener.settings import settings
from screener.observability.logging import log


class TelegramClient:
    def __init__(self, token: Optional[str] = None, base_url: Optional[str] = None, timeout: Optional[float] = None):
        self.token = token if token is not None else settings.BOT_TOKEN
        self.base_url = (base_url or settings.TELEGRAM_API_BASE).rstrip("/")
        self.timeout = float(timeout or settings.TELEGRAM_TIMEOUT_SEC)

    def _url(self, method: str) -> str:
        return f"{self.base_url}/bot{self.token}/{method}"

    def _call(self, method: str, body: Dict[str, Any]) -> bool:
        try:
            with httpx.Client(timeout=self.timeout) as client:
                resp = client.post(self._url(method), json=body)
        except httpx.HTTPError as e:
            log(event="telegram_call_exception", method=method, errorType=type(e).__name__, error=str(e)[:300])
            return False

        if 200 <= resp.status_code < 300:
            return True
        log(
            event="telegram_call_failed",
            method=method,
            statusCode=int(resp.status_code),
            responseText=(resp.text or "")[:300],
        )
        return False

    def send_message(
        self,
        chat_id: int,
        text: str,
        keyboard: Optional[List[List[Dict[str, str]]]] = None,
    ) -> bool:
        body: Dict[str, Any] = {"chat_id": chat_id, "text": text, "parse_mode": "Markdown"}
        if keyboard:
            body["reply_markup"] = {"inline_keyboard": keyboard}
        return self._call("sendMessage", body)

    def answer_callback_query(self, callback_query_id: str, text: Optional[str] = None) -> bool:
        body: Dict[str, Any] = {"callback_query_id": callback_query_id}
        if text:
            body["text"] = text
            body["show_alert"] = False
        return self._call("answerCallbackQuery", body)

    def set_webhook(self, url: str, secret_token: str = "") -> bool:
        body: Dict[str, Any] = {"url": url, "allowed_updates": ["message", "callback_query"]}
        if secret_token:
            body["secret_token"] = secret_token
        return self._call("setWebhook", body)


_client: Optional[TelegramClient] = None


def get_telegram() -> TelegramClient:
    global _client
    if _client is None:
        _client = TelegramClient()
    return _client
