import os
from typing import Optional
from dotenv import load_dotenv

load_dotenv()

DEFAULT_MIN_WEEKLY_HOURS = 15


class Settings:
    # Telegram transport
    BOT_TOKEN: str = os.getenv("BOT_TOKEN", "")
    TELEGRAM_API_BASE: str = os.getenv("TELEGRAM_API_BASE", "https://api.telegram.org")
    TELEGRAM_TIMEOUT_SEC: float = float(os.getenv("TELEGRAM_TIMEOUT_SEC", "10"))
    # Shared secret Telegram echoes back in X-Telegram-Bot-Api-Secret-Token (empty disables the check)
    TELEGRAM_WEBHOOK_SECRET: str = os.getenv("TELEGRAM_WEBHOOK_SECRET", "")

    REDIS_URL: str = os.getenv("REDIS_URL", "redis://localhost:6379/0")
    RQ_QUEUE_NAME: str = os.getenv("RQ_QUEUE_NAME", "results")

    # Store TTLs (seconds)
    SESSION_TTL_SEC: int = int(os.getenv("SESSION_TTL_SEC", str(60 * 60 * 24 * 7)))
    RATE_LIMIT_TTL_SEC: int = int(os.getenv("RATE_LIMIT_TTL_SEC", "60"))

    # Sliding-window admission control
    RATE_LIMIT_WINDOW_MS: int = int(os.getenv("RATE_LIMIT_WINDOW_MS", "10000"))
    RATE_LIMIT_MAX_ACTIONS: int = int(os.getenv("RATE_LIMIT_MAX_ACTIONS", "5"))

    # Result delivery
    RESULT_WEBHOOK_URL: str = os.getenv("RESULT_WEBHOOK_URL", "")
    RESULT_TIMEOUT_SEC: float = float(os.getenv("RESULT_TIMEOUT_SEC", "10"))
    # Modes:
    # - "rq": enqueue a one-shot job on RQ_QUEUE_NAME (worker posts it)
    # - "thread": post from a daemon thread inside the web process
    DELIVERY_MODE: str = os.getenv("DELIVERY_MODE", "rq").lower()

    COORDINATOR_LINK: str = os.getenv("COORDINATOR_LINK", "")
    # "standard" (5 questions) or "extended" (adds English level, age, student types)
    SCREENING_VARIANT: str = os.getenv("SCREENING_VARIANT", "standard").lower()

    CORS_ORIGINS: str = os.getenv("CORS_ORIGINS", "")
    ENABLE_PII_REDACTION: bool = os.getenv("ENABLE_PII_REDACTION", "true").lower() == "true"
    ADMIN_API_KEY: str = os.getenv("ADMIN_API_KEY", "")

    # Thresholds are read from the environment on every evaluation so that an
    # operator can tune them without restarting workers.
    def min_weekly_hours(self) -> int:
        raw = os.getenv("MIN_WEEKLY_HOURS", str(DEFAULT_MIN_WEEKLY_HOURS))
        try:
            value = int(raw.strip())
        except (ValueError, AttributeError):
            return DEFAULT_MIN_WEEKLY_HOURS
        return value or DEFAULT_MIN_WEEKLY_HOURS

    def max_age(self) -> Optional[int]:
        """Upper age bound (exclusive) for the extended variant; None disables the gate."""
        raw = (os.getenv("MAX_AGE") or "").strip()
        if not raw:
            return None
        try:
            value = int(raw)
        except ValueError:
            return None
        return value if value > 0 else None


settings = Settings()
