from typing import Optional
from fastapi import APIRouter, Request
from fastapi.responses import RedirectResponse
from loguru import logger
from app.core.errors import BadRequest
from app.models.enums import OAuthProvider
from app.services.oauth_service import (
    callback_url,
    is_extension_origin,
    request_origin,
    sign_in_with_oauth,
)

router = APIRouter(prefix='/auth', tags=['auth'])

POST_SIGN_IN_PATH = '/context'


@router.get('/sign-in/{provider}')
def sign_in(provider: str, request: Request) -> RedirectResponse:
    try:
        oauth_provider = OAuthProvider(provider)
    except ValueError as exc:
        raise BadRequest('Unsupported provider') from exc
    store = request.app.state.store
    return sign_in_with_oauth(store, oauth_provider, callback_url(request_origin(request)))


@router.get('/callback')
def auth_callback(request: Request, origin: Optional[str] = None) -> RedirectResponse:
    # Session cookies are set by the provider's own redirect; only routing happens here.
    if origin:
        if is_extension_origin(origin):
            return RedirectResponse(f'{origin}?auth=success', status_code=302)
        logger.warning('auth.callback_origin_rejected', origin=origin)
    return RedirectResponse(f'{request_origin(request)}{POST_SIGN_IN_PATH}', status_code=302)
