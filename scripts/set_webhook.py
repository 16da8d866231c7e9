#!/usr/bin/env python3
"""
Register the public webhook URL (and secret) with Telegram.

Usage:
    python scripts/set_webhook.py https://screening.example.com
"""
import sys

from screener.api.routes import WEBHOOK_PATH
from screener.settings import settings
from screener.telegram.client import TelegramClient


def main(argv) -> int:
    if len(argv) < 2:
        print("usage: set_webhook.py <public-base-url>")
        return 2
    if not settings.BOT_TOKEN:
        print("BOT_TOKEN is not set")
        return 1

    url = argv[1].rstrip("/") + WEBHOOK_PATH
    ok = TelegramClient().set_webhook(url, secret_token=settings.TELEGRAM_WEBHOOK_SECRET)
    print(f"setWebhook {url}: {'OK' if ok else 'FAILED'}")
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main(sys.argv))
