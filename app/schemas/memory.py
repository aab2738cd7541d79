from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from app.models.enums import MemoryType


class MemoryWrite(BaseModel):
    """Body shared by create and update; ``content`` presence is checked by the route."""

    model_config = ConfigDict(extra='forbid')

    type: Optional[MemoryType] = None
    content: Optional[str] = None
    importance: Optional[int] = Field(default=None, ge=1, le=10)
    pii: Optional[bool] = None


class MemoryCreate(MemoryWrite):
    pass


class MemoryUpdate(MemoryWrite):
    pass


class MemoryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    type: MemoryType
    content: str
    importance: int
    pii: bool
    created_at: datetime
    updated_at: datetime
