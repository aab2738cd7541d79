from typing import Any, Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict


class EventCreate(BaseModel):
    model_config = ConfigDict(extra='forbid')

    kind: Optional[str] = None
    payload: Optional[dict[str, Any]] = None
    site: Optional[str] = None
    provider: Optional[str] = None


class EventOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    kind: str
    payload: dict[str, Any]
    ts: datetime
