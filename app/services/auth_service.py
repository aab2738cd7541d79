import base64
import json
from typing import Mapping, Optional
from fastapi import Depends, Request
from jose import JWTError, jwt
from loguru import logger
from app.core.config import Settings
from app.core.errors import AuthError, Unauthorized
from app.schemas.session import SessionUser

_BASE64_COOKIE_PREFIX = 'base64-'


def _token_from_cookie(raw: str) -> Optional[str]:
    """Accept a bare JWT or the JSON session blob the provider's helpers store."""
    value = raw.strip()
    if value.startswith(_BASE64_COOKIE_PREFIX):
        encoded = value[len(_BASE64_COOKIE_PREFIX):]
        try:
            value = base64.urlsafe_b64decode(encoded + '=' * (-len(encoded) % 4)).decode('utf-8')
        except (ValueError, UnicodeDecodeError):
            return None
    if value.startswith('['):
        try:
            parts = json.loads(value)
        except ValueError:
            return None
        return parts[0] if parts and isinstance(parts[0], str) else None
    if value.startswith('{'):
        try:
            blob = json.loads(value)
        except ValueError:
            return None
        token = blob.get('access_token') if isinstance(blob, dict) else None
        return token if isinstance(token, str) else None
    return value or None


class SessionVerifier:
    """Verifies session credentials issued by the hosted identity provider."""

    def __init__(self, secret: str, audience: Optional[str], algorithm: str, cookie_name: str) -> None:
        self.secret = secret
        self.audience = audience
        self.algorithm = algorithm
        self.cookie_name = cookie_name

    @classmethod
    def from_settings(cls, settings: Settings) -> 'SessionVerifier':
        return cls(
            secret=settings.SUPABASE_JWT_SECRET,
            audience=settings.SESSION_JWT_AUDIENCE or None,
            algorithm=settings.SESSION_JWT_ALGORITHM,
            cookie_name=settings.SESSION_COOKIE_NAME,
        )

    def extract_token(self, cookies: Mapping[str, str], authorization: Optional[str] = None) -> Optional[str]:
        raw = cookies.get(self.cookie_name)
        if raw:
            return _token_from_cookie(raw)
        if authorization:
            scheme, _, credentials = authorization.partition(' ')
            if scheme.lower() == 'bearer' and credentials.strip():
                return credentials.strip()
        return None

    def get_session_user(self, cookies: Mapping[str, str], authorization: Optional[str] = None) -> SessionUser:
        token = self.extract_token(cookies, authorization)
        if not token:
            raise AuthError('Missing session')
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm], audience=self.audience)
        except JWTError as exc:
            raise AuthError('Invalid session') from exc
        user_id = payload.get('sub')
        if not user_id:
            raise AuthError('Session has no subject')
        return SessionUser(id=str(user_id), email=payload.get('email'))

    def resolve(self, request: Request) -> Optional[SessionUser]:
        try:
            return self.get_session_user(request.cookies, request.headers.get('authorization'))
        except AuthError:
            return None


def get_session_verifier(request: Request) -> SessionVerifier:
    return request.app.state.session_verifier


def get_current_user(
    request: Request,
    verifier: SessionVerifier = Depends(get_session_verifier),
) -> SessionUser:
    try:
        return verifier.get_session_user(request.cookies, request.headers.get('authorization'))
    except AuthError as exc:
        logger.debug('auth.session_rejected', path=request.url.path, reason=str(exc))
        raise Unauthorized() from exc
