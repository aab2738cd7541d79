from urllib.parse import urlencode, urlsplit
from fastapi import Request
from fastapi.responses import RedirectResponse
from app.core.config import StoreConfig
from app.models.enums import OAuthProvider

CALLBACK_PATH = '/auth/callback'
EXTENSION_SCHEMES = ('chrome-extension', 'moz-extension')


def request_origin(request: Request) -> str:
    return f'{request.url.scheme}://{request.url.netloc}'


def callback_url(origin: str) -> str:
    return f"{origin.rstrip('/')}{CALLBACK_PATH}"


def build_authorize_url(store: StoreConfig, provider: OAuthProvider, redirect_to: str) -> str:
    query = urlencode({'provider': provider.value, 'redirect_to': redirect_to})
    return f'{store.auth_url}/authorize?{query}'


def sign_in_with_oauth(store: StoreConfig, provider: OAuthProvider, redirect_to: str) -> RedirectResponse:
    """Send the browser to the provider's consent flow; the outcome arrives as a new session."""
    return RedirectResponse(build_authorize_url(store, provider, redirect_to), status_code=302)


def is_extension_origin(origin: str) -> bool:
    parts = urlsplit(origin)
    return parts.scheme in EXTENSION_SCHEMES and bool(parts.netloc)
