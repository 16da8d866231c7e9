from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

# Minimal Telegram Update shapes; unknown fields are ignored.


class TelegramUser(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int
    username: Optional[str] = None
    first_name: str = ""


class Chat(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int


class TelegramMessage(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    message_id: int = 0
    from_: Optional[TelegramUser] = Field(default=None, alias="from")
    chat: Chat
    text: Optional[str] = None


class CallbackQuery(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str
    from_: TelegramUser = Field(alias="from")
    message: Optional[TelegramMessage] = None
    data: Optional[str] = None


class TelegramUpdate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    update_id: int = 0
    message: Optional[TelegramMessage] = None
    callback_query: Optional[CallbackQuery] = None


class WebhookAck(BaseModel):
    ok: bool = True
