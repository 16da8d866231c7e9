from typing import Any, Dict

from screener.callback.client import post_result
from screener.observability.logging import log


def deliver_result_job(payload: Dict[str, Any]) -> bool:
    """
    Background job: POST the result record once. Never raises, so RQ does not
    treat a delivery failure as something to retry.
    """
    chat_id = payload.get("telegram_chat_id")
    log(event="result_job_start", chatId=chat_id, result=payload.get("result"))
    try:
        return post_result(payload)
    except Exception as e:
        log(event="result_job_exception", chatId=chat_id, error=str(e)[:500])
        return False
