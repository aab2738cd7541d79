from datetime import datetime
from typing import Any

import sqlalchemy as sa
from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

from app.models.base import IDModel, OwnedModel, utc_now


class Event(IDModel, OwnedModel, SQLModel, table=True):
    __tablename__ = 'events'

    kind: str = Field(index=True)
    payload: dict[str, Any] = Field(default_factory=dict, sa_column=sa.Column(sa.JSON, nullable=False))
    ts: datetime = Field(
        default_factory=utc_now,
        sa_type=DateTime(timezone=True),
        index=True,
        sa_column_kwargs={"nullable": False},
    )
