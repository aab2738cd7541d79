from typing import Optional
from fastapi import APIRouter, Depends
from loguru import logger
from sqlmodel import Session
from app.api.v1.pagination import resolve_page
from app.core.errors import BadRequest, StoreError, StoreFailure
from app.db.session import get_session
from app.schemas.event import EventCreate, EventOut
from app.schemas.session import SessionUser
from app.services.auth_service import get_current_user
from app.services.event_service import DEFAULT_EVENT_LIMIT, create_event, list_events

router = APIRouter(prefix='/events', tags=['events'])


@router.post('', response_model=EventOut)
def create_event_endpoint(
    body: EventCreate,
    session: Session = Depends(get_session),
    user: SessionUser = Depends(get_current_user),
) -> EventOut:
    if not body.kind or body.payload is None:
        raise BadRequest('Kind and payload required')
    try:
        record = create_event(
            session,
            user.id,
            body.kind,
            body.payload,
            site=body.site,
            provider=body.provider,
        )
    except StoreError as exc:
        logger.error('events.insert_failed', user_id=user.id, kind=body.kind, error=str(exc.cause))
        raise StoreFailure('Failed to log event') from exc
    return EventOut.model_validate(record)


@router.get('', response_model=list[EventOut])
def list_events_endpoint(
    kind: Optional[str] = None,
    limit: Optional[str] = None,
    offset: Optional[str] = None,
    session: Session = Depends(get_session),
    user: SessionUser = Depends(get_current_user),
) -> list[EventOut]:
    limit_value, offset_value = resolve_page(limit, offset, DEFAULT_EVENT_LIMIT)
    try:
        events = list_events(session, user.id, kind=kind, limit=limit_value, offset=offset_value)
    except StoreError as exc:
        logger.error('events.select_failed', user_id=user.id, error=str(exc.cause))
        raise StoreFailure('Failed to fetch events') from exc
    return [EventOut.model_validate(record) for record in events]
