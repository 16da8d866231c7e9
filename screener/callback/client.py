import time
from typing import Any, Dict

import httpx

from screener.settings import settings
from screener.observability.logging import log
import screener.observability.metrics as metrics


def post_result(payload: Dict[str, Any]) -> bool:
    """
    Single POST of a finished-screening record to RESULT_WEBHOOK_URL.
    No retries: failures are logged and counted, never raised.
    """
    chat_id = payload.get("telegram_chat_id")
    if not settings.RESULT_WEBHOOK_URL:
        log(event="result_post_skipped_no_url", chatId=chat_id)
        return False

    start = time.time()
    try:
        with httpx.Client(timeout=settings.RESULT_TIMEOUT_SEC) as client:
            resp = client.post(settings.RESULT_WEBHOOK_URL, json=payload)
    except Exception as e:
        log(
            event="result_post_exception",
            chatId=chat_id,
            elapsedMs=int((time.time() - start) * 1000),
            errorType=type(e).__name__,
            error=str(e)[:500],
        )
        metrics.increment_delivery(False)
        return False

    elapsed_ms = int((time.time() - start) * 1000)
    if 200 <= resp.status_code < 300:
        log(
            event="result_post_success",
            chatId=chat_id,
            result=payload.get("result"),
            statusCode=int(resp.status_code),
            elapsedMs=elapsed_ms,
        )
        metrics.increment_delivery(True)
        return True

    log(
        event="result_post_failed",
        chatId=chat_id,
        statusCode=int(resp.status_code),
        elapsedMs=elapsed_ms,
        responseText=(resp.text or "")[:500],
    )
    metrics.increment_delivery(False)
    return False
