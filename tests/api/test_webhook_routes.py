import pytest
from fastapi.testclient import TestClient
from unittest.mock import patch

from screener.main import app
from screener.settings import settings
from screener.api.schemas import TelegramUpdate

client = TestClient(app)

UPDATE = {
    "update_id": 1,
    "message": {"message_id": 3, "chat": {"id": 77}, "from": {"id": 77, "first_name": "Ana"}, "text": "/help"},
}


def test_health():
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


@patch("screener.api.routes.handle_update")
def test_webhook_dispatches_update(mock_handle):
    with patch.object(settings, "TELEGRAM_WEBHOOK_SECRET", ""):
        response = client.post("/telegram/webhook", json=UPDATE)
    assert response.status_code == 200
    assert response.json() == {"ok": True}
    update = mock_handle.call_args.args[0]
    assert isinstance(update, TelegramUpdate)
    assert update.message.text == "/help"
    assert update.message.from_.first_name == "Ana"


@patch("screener.api.routes.handle_update")
def test_webhook_rejects_bad_secret(mock_handle):
    with patch.object(settings, "TELEGRAM_WEBHOOK_SECRET", "s3cret"):
        response = client.post("/telegram/webhook", json=UPDATE, headers={"X-Telegram-Bot-Api-Secret-Token": "nope"})
    assert response.status_code == 401
    mock_handle.assert_not_called()


@patch("screener.api.routes.handle_update")
def test_webhook_accepts_matching_secret(mock_handle):
    with patch.object(settings, "TELEGRAM_WEBHOOK_SECRET", "s3cret"):
        response = client.post("/telegram/webhook", json=UPDATE, headers={"X-Telegram-Bot-Api-Secret-Token": "s3cret"})
    assert response.status_code == 200
    mock_handle.assert_called_once()


@pytest.mark.parametrize("body", [b"not json", b'{"message": {"text": "no chat"}}', b"[]"])
@patch("screener.api.routes.handle_update")
def test_webhook_always_acks_bad_bodies(mock_handle, body):
    with patch.object(settings, "TELEGRAM_WEBHOOK_SECRET", ""):
        response = client.post("/telegram/webhook", content=body, headers={"content-type": "application/json"})
    assert response.status_code == 200
    assert response.json() == {"ok": True}
    mock_handle.assert_not_called()


def test_unknown_path_is_404():
    assert client.get("/nope").status_code == 404
