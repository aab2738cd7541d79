import sqlalchemy as sa
from sqlmodel import Field, SQLModel

from app.models.base import IDModel, OwnedModel, TimestampModel
from app.models.enums import MemoryType, enum_column

DEFAULT_MEMORY_IMPORTANCE = 5


class Memory(IDModel, OwnedModel, TimestampModel, SQLModel, table=True):
    __tablename__ = 'memories'
    __table_args__ = (
        sa.CheckConstraint('importance >= 1 AND importance <= 10', name='memories_importance_range'),
    )

    type: MemoryType = Field(
        default=MemoryType.NOTE,
        sa_column=enum_column(MemoryType, 'memory_type', default=MemoryType.NOTE),
    )
    content: str = Field(sa_column=sa.Column(sa.Text, nullable=False))
    importance: int = Field(default=DEFAULT_MEMORY_IMPORTANCE, index=True)
    pii: bool = False
