from typing import AsyncIterator
from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from app.schemas.session import SessionState
from app.services.auth_service import SessionVerifier, get_session_verifier
from app.services.oauth_service import request_origin
from app.ui.session_gate import SessionGate, render_document

router = APIRouter(tags=['pages'])

CONTEXT_PAGE_BODY = (
    '<main class="context">'
    '<h1>Your AI context</h1>'
    '<section id="memories" data-source="/api/memories"></section>'
    '<section id="events" data-source="/api/events"></section>'
    '</main>'
)


async def session_states(request: Request, verifier: SessionVerifier) -> AsyncIterator[SessionState]:
    yield SessionState(loading=True)
    yield SessionState(loading=False, user=verifier.resolve(request))


@router.get('/context', response_class=HTMLResponse, include_in_schema=False)
async def context_page(
    request: Request,
    verifier: SessionVerifier = Depends(get_session_verifier),
) -> HTMLResponse:
    gate = SessionGate(
        children=CONTEXT_PAGE_BODY,
        store=request.app.state.store,
        origin=request_origin(request),
    )
    await gate.follow(session_states(request, verifier))
    return HTMLResponse(render_document(request.app.title, gate.render()))
