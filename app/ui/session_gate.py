"""Rendering guard that shows protected content only once a session exists.

The gate improves the signed-out experience; it is not a security boundary.
API routes enforce the session on their own.
"""

from __future__ import annotations

from enum import Enum
from html import escape
from typing import AsyncIterator, Optional

from app.core.config import StoreConfig
from app.models.enums import OAuthProvider
from app.schemas.session import SessionState, SessionUser
from app.services.oauth_service import build_authorize_url, callback_url

PROVIDER_LABELS = {
    OAuthProvider.GOOGLE: 'Sign in with Google',
    OAuthProvider.GITHUB: 'Sign in with GitHub',
}

LOADING_MARKUP = (
    '<div class="session-gate session-gate--loading" aria-busy="true">'
    '<div class="spinner"></div>'
    '</div>'
)


class GateStatus(str, Enum):
    LOADING = 'loading'
    AUTHENTICATED = 'authenticated'
    UNAUTHENTICATED = 'unauthenticated'


class SessionGate:
    def __init__(
        self,
        children: str,
        store: StoreConfig,
        origin: str,
        fallback: Optional[str] = None,
    ) -> None:
        self.children = children
        self.fallback = fallback
        self.store = store
        self.origin = origin
        self.status = GateStatus.LOADING
        self.user: Optional[SessionUser] = None

    def apply(self, state: SessionState) -> GateStatus:
        # Resolves once per mount; later session states are ignored.
        if self.status is not GateStatus.LOADING or state.loading:
            return self.status
        self.user = state.user
        self.status = GateStatus.AUTHENTICATED if state.user else GateStatus.UNAUTHENTICATED
        return self.status

    async def follow(self, states: AsyncIterator[SessionState]) -> GateStatus:
        async for state in states:
            if self.apply(state) is not GateStatus.LOADING:
                break
        return self.status

    def sign_in_url(self, provider: OAuthProvider) -> str:
        return build_authorize_url(self.store, provider, callback_url(self.origin))

    def render_sign_in_panel(self) -> str:
        buttons = ''.join(
            f'<a class="button button--{provider.value}" href="{escape(self.sign_in_url(provider))}">'
            f'{escape(label)}</a>'
            for provider, label in PROVIDER_LABELS.items()
        )
        return (
            '<div class="session-gate session-gate--signed-out">'
            '<h2>Sign in required</h2>'
            '<p>You need to sign in to access this page and manage your AI context.</p>'
            f'<div class="session-gate__actions">{buttons}</div>'
            '</div>'
        )

    def render(self) -> str:
        if self.status is GateStatus.LOADING:
            return LOADING_MARKUP
        if self.status is GateStatus.AUTHENTICATED:
            return self.children
        if self.fallback is not None:
            return self.fallback
        return self.render_sign_in_panel()


def render_document(title: str, body: str) -> str:
    return (
        '<!DOCTYPE html>'
        '<html lang="en"><head><meta charset="utf-8">'
        f'<title>{escape(title)}</title>'
        '</head>'
        f'<body>{body}</body></html>'
    )
