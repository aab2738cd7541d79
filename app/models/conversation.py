from datetime import datetime
from typing import Optional

import sqlalchemy as sa
from sqlalchemy import DateTime
from sqlmodel import Field, Relationship, SQLModel

from app.models.base import IDModel, OwnedModel, TimestampModel, utc_now
from app.models.enums import MessageRole, enum_column


class Conversation(IDModel, OwnedModel, TimestampModel, SQLModel, table=True):
    __tablename__ = 'conversations'

    title: str = Field(sa_column=sa.Column(sa.Text, nullable=False))
    provider: str = Field(index=True)
    site: str = Field(index=True)

    messages: list['Message'] = Relationship(
        back_populates='conversation',
        sa_relationship_kwargs={'order_by': 'Message.ts', 'passive_deletes': True},
    )


class Message(IDModel, SQLModel, table=True):
    """A captured chat turn; owned through its conversation."""

    __tablename__ = 'messages'

    conversation_id: str = Field(foreign_key='conversations.id', ondelete='CASCADE', index=True)
    role: MessageRole = Field(sa_column=enum_column(MessageRole, 'message_role'))
    content: str = Field(sa_column=sa.Column(sa.Text, nullable=False))
    ts: datetime = Field(
        default_factory=utc_now,
        sa_type=DateTime(timezone=True),
        sa_column_kwargs={"nullable": False},
    )
    provider: str

    conversation: Optional[Conversation] = Relationship(back_populates='messages')
