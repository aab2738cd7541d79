from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict
from app.models.enums import MessageRole


class ConversationCreate(BaseModel):
    model_config = ConfigDict(extra='forbid')

    title: Optional[str] = None
    provider: Optional[str] = None
    site: Optional[str] = None


class ConversationUpdate(BaseModel):
    model_config = ConfigDict(extra='forbid')

    title: Optional[str] = None


class MessageOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    role: MessageRole
    content: str
    ts: datetime
    provider: str


class ConversationOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    title: str
    provider: str
    site: str
    created_at: datetime
    updated_at: datetime


class ConversationWithMessages(ConversationOut):
    messages: list[MessageOut] = []
