from typing import Optional
from fastapi import APIRouter, Depends
from loguru import logger
from sqlmodel import Session
from app.api.v1.pagination import resolve_page
from app.core.errors import BadRequest, StoreError, StoreFailure
from app.db.session import get_session
from app.schemas.memory import MemoryCreate, MemoryOut, MemoryUpdate
from app.schemas.session import SessionUser
from app.services.auth_service import get_current_user
from app.services.memory_service import (
    DEFAULT_MEMORY_LIMIT,
    create_memory,
    delete_memory,
    list_memories,
    update_memory,
)

router = APIRouter(prefix='/memories', tags=['memories'])


@router.get('', response_model=list[MemoryOut])
def list_memories_endpoint(
    type: Optional[str] = None,
    limit: Optional[str] = None,
    offset: Optional[str] = None,
    session: Session = Depends(get_session),
    user: SessionUser = Depends(get_current_user),
) -> list[MemoryOut]:
    limit_value, offset_value = resolve_page(limit, offset, DEFAULT_MEMORY_LIMIT)
    try:
        memories = list_memories(session, user.id, type=type, limit=limit_value, offset=offset_value)
    except StoreError as exc:
        logger.error('memories.select_failed', user_id=user.id, error=str(exc.cause))
        raise StoreFailure('Failed to fetch memories') from exc
    return [MemoryOut.model_validate(record) for record in memories]


@router.post('', response_model=MemoryOut)
def create_memory_endpoint(
    body: MemoryCreate,
    session: Session = Depends(get_session),
    user: SessionUser = Depends(get_current_user),
) -> MemoryOut:
    if not body.content:
        raise BadRequest('Content required')
    try:
        record = create_memory(session, user.id, body)
    except StoreError as exc:
        logger.error('memories.insert_failed', user_id=user.id, error=str(exc.cause))
        raise StoreFailure('Failed to create memory') from exc
    return MemoryOut.model_validate(record)


@router.put('/{memory_id}', response_model=MemoryOut)
def update_memory_endpoint(
    memory_id: str,
    body: MemoryUpdate,
    session: Session = Depends(get_session),
    user: SessionUser = Depends(get_current_user),
) -> MemoryOut:
    if not body.content:
        raise BadRequest('Content required')
    try:
        record = update_memory(session, user.id, memory_id, body)
    except StoreError as exc:
        logger.error('memories.update_failed', user_id=user.id, memory_id=memory_id, error=str(exc.cause))
        raise StoreFailure('Failed to update memory') from exc
    if record is None:
        # No row matched (id, user_id); reported on the store-failure path.
        logger.warning('memories.update_no_match', user_id=user.id, memory_id=memory_id)
        raise StoreFailure('Failed to update memory')
    return MemoryOut.model_validate(record)


@router.delete('/{memory_id}')
def delete_memory_endpoint(
    memory_id: str,
    session: Session = Depends(get_session),
    user: SessionUser = Depends(get_current_user),
) -> dict:
    try:
        deleted = delete_memory(session, user.id, memory_id)
    except StoreError as exc:
        logger.error('memories.delete_failed', user_id=user.id, memory_id=memory_id, error=str(exc.cause))
        raise StoreFailure('Failed to delete memory') from exc
    logger.debug('memories.deleted', user_id=user.id, memory_id=memory_id, count=deleted)
    return {'success': True}
