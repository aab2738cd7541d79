"""Single-statement writes against tables that carry a ``user_id`` owner column.

Every mutating statement here carries both the row id and the owner id in its
WHERE clause, so a request can never touch another user's row.
"""

from typing import Any, Optional, TypeVar
from sqlalchemy import delete, update
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel
from app.core.errors import StoreError

RowT = TypeVar('RowT', bound=SQLModel)


def insert_row(session: Session, record: RowT, operation: str) -> RowT:
    # Defaults are generated client-side, so the INSERT alone yields the full row.
    try:
        session.add(record)
        session.commit()
    except SQLAlchemyError as exc:
        session.rollback()
        raise StoreError(operation, exc) from exc
    return record


def update_owned(
    session: Session,
    model: type[RowT],
    user_id: str,
    record_id: str,
    changes: dict[str, Any],
    operation: str,
) -> Optional[RowT]:
    """UPDATE ... WHERE id AND user_id RETURNING *; ``None`` when nothing matched."""
    statement = (
        update(model)
        .where(model.id == record_id, model.user_id == user_id)
        .values(**changes)
        .returning(model)
    )
    try:
        record = session.exec(statement).scalars().first()
        session.commit()
    except SQLAlchemyError as exc:
        session.rollback()
        raise StoreError(operation, exc) from exc
    return record


def delete_owned(
    session: Session,
    model: type[SQLModel],
    user_id: str,
    record_id: str,
    operation: str,
    *criteria: Any,
) -> int:
    """DELETE ... WHERE id AND user_id [AND criteria]; returns the number of rows removed."""
    statement = delete(model).where(model.id == record_id, model.user_id == user_id, *criteria)
    try:
        result = session.exec(statement)
        session.commit()
    except SQLAlchemyError as exc:
        session.rollback()
        raise StoreError(operation, exc) from exc
    return result.rowcount
