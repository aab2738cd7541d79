from typing import Optional
from fastapi import APIRouter, Depends
from loguru import logger
from sqlmodel import Session
from app.api.v1.pagination import resolve_page
from app.core.errors import BadRequest, NotFound, StoreError, StoreFailure
from app.db.session import get_session
from app.schemas.conversation import (
    ConversationCreate,
    ConversationOut,
    ConversationUpdate,
    ConversationWithMessages,
)
from app.schemas.session import SessionUser
from app.services.auth_service import get_current_user
from app.services.conversation_service import (
    DEFAULT_CONVERSATION_LIMIT,
    create_conversation,
    delete_conversation,
    get_conversation,
    list_conversations,
    rename_conversation,
)

router = APIRouter(prefix='/conversations', tags=['conversations'])


@router.get('', response_model=list[ConversationWithMessages])
def list_conversations_endpoint(
    provider: Optional[str] = None,
    site: Optional[str] = None,
    limit: Optional[str] = None,
    offset: Optional[str] = None,
    session: Session = Depends(get_session),
    user: SessionUser = Depends(get_current_user),
) -> list[ConversationWithMessages]:
    limit_value, offset_value = resolve_page(limit, offset, DEFAULT_CONVERSATION_LIMIT)
    try:
        conversations = list_conversations(
            session, user.id, provider=provider, site=site, limit=limit_value, offset=offset_value
        )
    except StoreError as exc:
        logger.error('conversations.select_failed', user_id=user.id, error=str(exc.cause))
        raise StoreFailure('Failed to fetch conversations') from exc
    return [ConversationWithMessages.model_validate(record) for record in conversations]


@router.post('', response_model=ConversationOut)
def create_conversation_endpoint(
    body: ConversationCreate,
    session: Session = Depends(get_session),
    user: SessionUser = Depends(get_current_user),
) -> ConversationOut:
    if not body.title or not body.provider or not body.site:
        raise BadRequest('Title, provider, and site required')
    try:
        record = create_conversation(session, user.id, body)
    except StoreError as exc:
        logger.error('conversations.insert_failed', user_id=user.id, error=str(exc.cause))
        raise StoreFailure('Failed to create conversation') from exc
    return ConversationOut.model_validate(record)


@router.get('/{conversation_id}', response_model=ConversationWithMessages)
def get_conversation_endpoint(
    conversation_id: str,
    session: Session = Depends(get_session),
    user: SessionUser = Depends(get_current_user),
) -> ConversationWithMessages:
    try:
        record = get_conversation(session, user.id, conversation_id)
    except StoreError as exc:
        logger.error(
            'conversations.select_failed', user_id=user.id, conversation_id=conversation_id, error=str(exc.cause)
        )
        raise StoreFailure('Failed to fetch conversation') from exc
    if record is None:
        raise NotFound('Conversation not found')
    return ConversationWithMessages.model_validate(record)


@router.put('/{conversation_id}', response_model=ConversationOut)
def update_conversation_endpoint(
    conversation_id: str,
    body: ConversationUpdate,
    session: Session = Depends(get_session),
    user: SessionUser = Depends(get_current_user),
) -> ConversationOut:
    if not body.title:
        raise BadRequest('Title required')
    try:
        record = rename_conversation(session, user.id, conversation_id, body.title)
    except StoreError as exc:
        logger.error(
            'conversations.update_failed', user_id=user.id, conversation_id=conversation_id, error=str(exc.cause)
        )
        raise StoreFailure('Failed to update conversation') from exc
    if record is None:
        logger.warning('conversations.update_no_match', user_id=user.id, conversation_id=conversation_id)
        raise StoreFailure('Failed to update conversation')
    return ConversationOut.model_validate(record)


@router.delete('/{conversation_id}')
def delete_conversation_endpoint(
    conversation_id: str,
    session: Session = Depends(get_session),
    user: SessionUser = Depends(get_current_user),
) -> dict:
    try:
        deleted = delete_conversation(session, user.id, conversation_id)
    except StoreError as exc:
        logger.error(
            'conversations.delete_failed', user_id=user.id, conversation_id=conversation_id, error=str(exc.cause)
        )
        raise StoreFailure('Failed to delete conversation') from exc
    logger.debug('conversations.deleted', user_id=user.id, conversation_id=conversation_id, count=deleted)
    return {'success': True}
