import hmac
from fastapi import Header, HTTPException
from screener.settings import settings


def require_webhook_secret(
    secret: str = Header(default="", alias="X-Telegram-Bot-Api-Secret-Token"),
):
    """
    Telegram echoes the secret_token given to setWebhook in this header.
    - If TELEGRAM_WEBHOOK_SECRET is empty: allow all requests.
    - Otherwise the header must match.
    """
    expected = getattr(settings, "TELEGRAM_WEBHOOK_SECRET", "")
    if not expected:
        return
    if not hmac.compare_digest(secret or "", expected):
        raise HTTPException(status_code=401, detail="Invalid webhook secret")


def require_admin(x_admin_key: str = Header(default="", alias="x-admin-key")):
    # Secure default: no key configured means admin endpoints are closed.
    if not settings.ADMIN_API_KEY:
        raise HTTPException(status_code=403, detail="Admin access disabled (no key configured)")
    if not hmac.compare_digest(x_admin_key or "", settings.ADMIN_API_KEY):
        raise HTTPException(status_code=403, detail="Invalid admin key")
