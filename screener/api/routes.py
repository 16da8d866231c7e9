from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from screener.api.auth import require_webhook_secret
from screener.api.schemas import TelegramUpdate, WebhookAck
from screener.core.orchestrator import handle_update
from screener.observability.logging import log

router = APIRouter()

WEBHOOK_PATH = "/telegram/webhook"


@router.post(WEBHOOK_PATH, response_model=WebhookAck, dependencies=[Depends(require_webhook_secret)])
async def telegram_webhook(request: Request):
    """
    Telegram retries any non-2xx answer, so this always returns 200 once the
    secret check has passed; bad bodies are logged and dropped.
    """
    try:
        payload = await request.json()
    except Exception as e:
        log(event="update_body_unparseable", error=str(e)[:200])
        return WebhookAck()

    try:
        update = TelegramUpdate.model_validate(payload)
    except ValidationError as e:
        log(event="update_invalid", errors=e.error_count())
        return WebhookAck()

    await run_in_threadpool(handle_update, update)
    return WebhookAck()
