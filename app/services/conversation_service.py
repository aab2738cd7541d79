from typing import Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import joinedload
from sqlmodel import Session, col, select
from app.core.errors import StoreError
from app.models.conversation import Conversation
from app.schemas.conversation import ConversationCreate
from app.services.owned_rows import delete_owned, insert_row, update_owned

DEFAULT_CONVERSATION_LIMIT = 20


def _with_messages():
    return select(Conversation).options(joinedload(Conversation.messages))


def list_conversations(
    session: Session,
    user_id: str,
    provider: Optional[str] = None,
    site: Optional[str] = None,
    limit: int = DEFAULT_CONVERSATION_LIMIT,
    offset: int = 0,
) -> list[Conversation]:
    if limit < 1:
        return []
    statement = _with_messages().where(Conversation.user_id == user_id)
    if provider:
        statement = statement.where(Conversation.provider == provider)
    if site:
        statement = statement.where(Conversation.site == site)
    statement = statement.order_by(col(Conversation.updated_at).desc()).offset(max(offset, 0)).limit(limit)
    try:
        return list(session.exec(statement).unique().all())
    except SQLAlchemyError as exc:
        raise StoreError('conversations.select', exc) from exc


def get_conversation(session: Session, user_id: str, conversation_id: str) -> Optional[Conversation]:
    statement = _with_messages().where(Conversation.id == conversation_id, Conversation.user_id == user_id)
    try:
        return session.exec(statement).unique().first()
    except SQLAlchemyError as exc:
        raise StoreError('conversations.select', exc) from exc


def create_conversation(session: Session, user_id: str, payload: ConversationCreate) -> Conversation:
    record = Conversation(
        user_id=user_id,
        title=payload.title,
        provider=payload.provider,
        site=payload.site,
    )
    return insert_row(session, record, 'conversations.insert')


def rename_conversation(session: Session, user_id: str, conversation_id: str, title: str) -> Optional[Conversation]:
    return update_owned(
        session, Conversation, user_id, conversation_id, {'title': title}, 'conversations.update'
    )


def delete_conversation(session: Session, user_id: str, conversation_id: str) -> int:
    # Messages go with it through the foreign key's ON DELETE CASCADE.
    return delete_owned(session, Conversation, user_id, conversation_id, 'conversations.delete')
