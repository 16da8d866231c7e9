"""
Detached Result Delivery
------------------------
dispatch_result() hands a result payload to the background and returns
immediately. The caller never waits for the downstream webhook and never sees
its failures; those are captured by logging only.

Modes (settings.DELIVERY_MODE):
  - "rq":     enqueue deliver_result_job on the results queue (no RQ retry)
  - "thread": post from a daemon thread in this process
"""
from __future__ import annotations

import threading
from typing import Any, Dict

from screener.settings import settings
from screener.callback.client import post_result
from screener.observability.logging import log
from screener.queue.jobs import deliver_result_job
from screener.queue.rq_conn import get_queue


def _run_detached(payload: Dict[str, Any]) -> None:
    try:
        post_result(payload)
    except Exception as e:
        log(event="result_dispatch_failed", chatId=payload.get("telegram_chat_id"), mode="thread", error=str(e)[:500])


def dispatch_result(payload: Dict[str, Any]) -> None:
    chat_id = payload.get("telegram_chat_id")
    mode = (settings.DELIVERY_MODE or "rq").lower()
    try:
        if mode == "thread":
            t = threading.Thread(target=_run_detached, args=(payload,), name=f"result-{chat_id}", daemon=True)
            t.start()
        else:
            job = get_queue().enqueue(deliver_result_job, payload)
            log(event="result_enqueued", chatId=chat_id, jobId=getattr(job, "id", None))
    except Exception as e:
        log(event="result_dispatch_failed", chatId=chat_id, mode=mode, errorType=type(e).__name__, error=str(e)[:500])
