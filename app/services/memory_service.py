from typing import Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, col, select
from app.core.errors import StoreError
from app.models.enums import MemoryType
from app.models.memory import DEFAULT_MEMORY_IMPORTANCE, Memory
from app.schemas.memory import MemoryCreate, MemoryUpdate
from app.services.owned_rows import delete_owned, insert_row, update_owned

DEFAULT_MEMORY_LIMIT = 50

# Columns that are NOT NULL in the store; an explicit null leaves them untouched.
_NON_NULLABLE_FIELDS = {'type', 'importance', 'pii'}


def create_memory(session: Session, user_id: str, payload: MemoryCreate) -> Memory:
    record = Memory(
        user_id=user_id,
        type=payload.type or MemoryType.NOTE,
        content=payload.content,
        importance=payload.importance or DEFAULT_MEMORY_IMPORTANCE,
        pii=bool(payload.pii),
    )
    return insert_row(session, record, 'memories.insert')


def list_memories(
    session: Session,
    user_id: str,
    type: Optional[str] = None,
    limit: int = DEFAULT_MEMORY_LIMIT,
    offset: int = 0,
) -> list[Memory]:
    if limit < 1:
        return []
    statement = select(Memory).where(Memory.user_id == user_id)
    if type:
        statement = statement.where(Memory.type == type)
    statement = (
        statement.order_by(col(Memory.importance).desc(), col(Memory.created_at).desc())
        .offset(max(offset, 0))
        .limit(limit)
    )
    try:
        return list(session.exec(statement).all())
    except SQLAlchemyError as exc:
        raise StoreError('memories.select', exc) from exc


def update_memory(session: Session, user_id: str, memory_id: str, payload: MemoryUpdate) -> Optional[Memory]:
    """Apply the fields present in ``payload`` to the caller's memory.

    Returns ``None`` when no memory matches both ``memory_id`` and ``user_id``.
    """
    changes = {
        key: value
        for key, value in payload.model_dump(exclude_unset=True).items()
        if value is not None or key not in _NON_NULLABLE_FIELDS
    }
    if not changes:
        raise ValueError('update_memory needs at least one field')
    return update_owned(session, Memory, user_id, memory_id, changes, 'memories.update')


def delete_memory(session: Session, user_id: str, memory_id: str) -> int:
    return delete_owned(session, Memory, user_id, memory_id, 'memories.delete')
