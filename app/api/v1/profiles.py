from fastapi import APIRouter, Depends
from loguru import logger
from sqlmodel import Session
from app.core.errors import BadRequest, NotFound, StoreError, StoreFailure
from app.db.session import get_session
from app.schemas.profile import ProfileCreate, ProfileOut, ProfileUpdate
from app.schemas.session import SessionUser
from app.services.auth_service import get_current_user
from app.services.profile_service import (
    create_profile,
    delete_profile,
    get_profile_scope,
    list_profiles,
    update_profile,
)

router = APIRouter(prefix='/profiles', tags=['profiles'])


@router.get('', response_model=list[ProfileOut])
def list_profiles_endpoint(
    session: Session = Depends(get_session),
    user: SessionUser = Depends(get_current_user),
) -> list[ProfileOut]:
    try:
        profiles = list_profiles(session, user.id)
    except StoreError as exc:
        logger.error('profiles.select_failed', user_id=user.id, error=str(exc.cause))
        raise StoreFailure('Failed to fetch profiles') from exc
    return [ProfileOut.model_validate(record) for record in profiles]


@router.post('', response_model=ProfileOut)
def create_profile_endpoint(
    body: ProfileCreate,
    session: Session = Depends(get_session),
    user: SessionUser = Depends(get_current_user),
) -> ProfileOut:
    if not body.name:
        raise BadRequest('Name required')
    try:
        record = create_profile(session, user.id, body)
    except StoreError as exc:
        logger.error('profiles.insert_failed', user_id=user.id, error=str(exc.cause))
        raise StoreFailure('Failed to create profile') from exc
    return ProfileOut.model_validate(record)


@router.put('/{profile_id}', response_model=ProfileOut)
def update_profile_endpoint(
    profile_id: str,
    body: ProfileUpdate,
    session: Session = Depends(get_session),
    user: SessionUser = Depends(get_current_user),
) -> ProfileOut:
    if not body.name:
        raise BadRequest('Name required')
    try:
        record = update_profile(session, user.id, profile_id, body)
    except StoreError as exc:
        logger.error('profiles.update_failed', user_id=user.id, profile_id=profile_id, error=str(exc.cause))
        raise StoreFailure('Failed to update profile') from exc
    if record is None:
        logger.warning('profiles.update_no_match', user_id=user.id, profile_id=profile_id)
        raise StoreFailure('Failed to update profile')
    return ProfileOut.model_validate(record)


@router.delete('/{profile_id}')
def delete_profile_endpoint(
    profile_id: str,
    session: Session = Depends(get_session),
    user: SessionUser = Depends(get_current_user),
) -> dict:
    try:
        deleted = delete_profile(session, user.id, profile_id)
        # Only a refused delete pays for the lookup that explains it.
        scope = get_profile_scope(session, user.id, profile_id) if not deleted else None
    except StoreError as exc:
        logger.error('profiles.delete_failed', user_id=user.id, profile_id=profile_id, error=str(exc.cause))
        raise StoreFailure('Failed to delete profile') from exc
    if not deleted:
        if scope is None:
            raise NotFound('Profile not found')
        raise BadRequest('Cannot delete default profiles')
    return {'success': True}
