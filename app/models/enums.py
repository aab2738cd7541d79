from enum import Enum
import sqlalchemy as sa
from sqlalchemy import Column


class MemoryType(str, Enum):
    FACT = 'fact'
    PREFERENCE = 'preference'
    SKILL = 'skill'
    PROJECT = 'project'
    NOTE = 'note'


class ProfileScope(str, Enum):
    PERSONAL = 'personal'
    WORK = 'work'
    CUSTOM = 'custom'


class MessageRole(str, Enum):
    USER = 'user'
    ASSISTANT = 'assistant'
    SYSTEM = 'system'


class OAuthProvider(str, Enum):
    GOOGLE = 'google'
    GITHUB = 'github'


def enum_column(enum_cls: type[Enum], name: str, default: Enum | None = None) -> Column:
    return Column(
        sa.Enum(
            enum_cls,
            values_callable=lambda enum: [item.value for item in enum],
            name=name,
            native_enum=False,
        ),
        nullable=False,
        default=default,
    )
