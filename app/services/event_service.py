from typing import Any, Optional
from datetime import datetime, timezone
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, col, select
from app.core.errors import StoreError
from app.models.event import Event
from app.services.owned_rows import insert_row

DEFAULT_EVENT_LIMIT = 50


def iso_timestamp(now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def enrich_payload(
    payload: dict[str, Any],
    site: Optional[str] = None,
    provider: Optional[str] = None,
    now: Optional[datetime] = None,
) -> dict[str, Any]:
    # payload.timestamp is kept alongside the ts column; clients read both.
    return {
        **payload,
        'site': site,
        'provider': provider,
        'timestamp': iso_timestamp(now),
    }


def create_event(
    session: Session,
    user_id: str,
    kind: str,
    payload: dict[str, Any],
    site: Optional[str] = None,
    provider: Optional[str] = None,
) -> Event:
    record = Event(user_id=user_id, kind=kind, payload=enrich_payload(payload, site, provider))
    return insert_row(session, record, 'events.insert')


def list_events(
    session: Session,
    user_id: str,
    kind: Optional[str] = None,
    limit: int = DEFAULT_EVENT_LIMIT,
    offset: int = 0,
) -> list[Event]:
    if limit < 1:
        return []
    statement = select(Event).where(Event.user_id == user_id)
    if kind:
        statement = statement.where(Event.kind == kind)
    statement = statement.order_by(col(Event.ts).desc()).offset(max(offset, 0)).limit(limit)
    try:
        return list(session.exec(statement).all())
    except SQLAlchemyError as exc:
        raise StoreError('events.select', exc) from exc
