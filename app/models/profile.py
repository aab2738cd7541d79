from typing import Any

import sqlalchemy as sa
from sqlmodel import Field, SQLModel

from app.models.base import IDModel, OwnedModel, TimestampModel
from app.models.enums import ProfileScope, enum_column

DEFAULT_TOKEN_BUDGET = 1000

# Seeded for every account; never removable through the API.
PROTECTED_PROFILE_SCOPES = (ProfileScope.PERSONAL, ProfileScope.WORK)


class Profile(IDModel, OwnedModel, TimestampModel, SQLModel, table=True):
    __tablename__ = 'profiles'

    name: str = Field(sa_column=sa.Column(sa.Text, nullable=False))
    scope: ProfileScope = Field(
        default=ProfileScope.PERSONAL,
        sa_column=enum_column(ProfileScope, 'profile_scope', default=ProfileScope.PERSONAL),
    )
    redaction_rules: dict[str, Any] = Field(default_factory=dict, sa_column=sa.Column(sa.JSON, nullable=False))
    token_budget: int = DEFAULT_TOKEN_BUDGET
    default_for_sites: list[str] = Field(default_factory=list, sa_column=sa.Column(sa.JSON, nullable=False))
