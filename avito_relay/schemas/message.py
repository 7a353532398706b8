from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class SendMessageRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    chat_id: str | None = Field(default=None, alias="chatId")
    message: str | None = None
    integration_id: str | None = Field(default=None, alias="integrationId")
    user_id: str | None = Field(default=None, alias="userId")

    def has_required_fields(self) -> bool:
        return bool(self.chat_id) and bool(self.message)


class SendMessageResponse(BaseModel):
    success: bool = True
    message: str = "Message sent successfully"
    avito_response: Any = None
