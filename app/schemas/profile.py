from typing import Any, Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from app.models.enums import ProfileScope


class ProfileWrite(BaseModel):
    """Body shared by create and update; ``name`` presence is checked by the route."""

    model_config = ConfigDict(extra='forbid')

    name: Optional[str] = None
    scope: Optional[ProfileScope] = None
    redaction_rules: Optional[dict[str, Any]] = None
    token_budget: Optional[int] = Field(default=None, ge=0)
    default_for_sites: Optional[list[str]] = None


class ProfileCreate(ProfileWrite):
    pass


class ProfileUpdate(ProfileWrite):
    pass


class ProfileOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    name: str
    scope: ProfileScope
    redaction_rules: dict[str, Any]
    token_budget: int
    default_for_sites: list[str]
    created_at: datetime
    updated_at: datetime
