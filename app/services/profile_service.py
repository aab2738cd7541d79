from typing import Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, col, select
from app.core.errors import StoreError
from app.models.enums import ProfileScope
from app.models.profile import DEFAULT_TOKEN_BUDGET, PROTECTED_PROFILE_SCOPES, Profile
from app.schemas.profile import ProfileCreate, ProfileUpdate
from app.services.owned_rows import delete_owned, insert_row, update_owned

_NON_NULLABLE_FIELDS = {'scope', 'redaction_rules', 'token_budget', 'default_for_sites'}


def list_profiles(session: Session, user_id: str) -> list[Profile]:
    statement = (
        select(Profile)
        .where(Profile.user_id == user_id)
        .order_by(col(Profile.scope).asc(), col(Profile.name).asc())
    )
    try:
        return list(session.exec(statement).all())
    except SQLAlchemyError as exc:
        raise StoreError('profiles.select', exc) from exc


def create_profile(session: Session, user_id: str, payload: ProfileCreate) -> Profile:
    record = Profile(
        user_id=user_id,
        name=payload.name,
        scope=payload.scope or ProfileScope.CUSTOM,
        redaction_rules=payload.redaction_rules or {},
        token_budget=payload.token_budget or DEFAULT_TOKEN_BUDGET,
        default_for_sites=payload.default_for_sites or [],
    )
    return insert_row(session, record, 'profiles.insert')


def update_profile(session: Session, user_id: str, profile_id: str, payload: ProfileUpdate) -> Optional[Profile]:
    changes = {
        key: value
        for key, value in payload.model_dump(exclude_unset=True).items()
        if value is not None or key not in _NON_NULLABLE_FIELDS
    }
    if not changes:
        raise ValueError('update_profile needs at least one field')
    return update_owned(session, Profile, user_id, profile_id, changes, 'profiles.update')


def delete_profile(session: Session, user_id: str, profile_id: str) -> int:
    """Delete a custom profile; the seeded personal and work profiles never match."""
    return delete_owned(
        session,
        Profile,
        user_id,
        profile_id,
        'profiles.delete',
        col(Profile.scope).not_in(PROTECTED_PROFILE_SCOPES),
    )


def get_profile_scope(session: Session, user_id: str, profile_id: str) -> Optional[ProfileScope]:
    statement = select(Profile.scope).where(Profile.id == profile_id, Profile.user_id == user_id)
    try:
        return session.exec(statement).first()
    except SQLAlchemyError as exc:
        raise StoreError('profiles.select', exc) from exc
