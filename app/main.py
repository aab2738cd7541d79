from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.api.v1.router import api_router, page_router
from app.core.config import Settings, StoreConfig, get_settings
from app.core.errors import register_exception_handlers
from app.core.logging import configure_logging
from app.db.init_db import init_db
from app.db.session import build_engine
from app.services.auth_service import SessionVerifier


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)
    store = StoreConfig.from_settings(settings)
    engine = build_engine(store)

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        init_db(engine, settings)
        yield
        engine.dispose()

    app = FastAPI(title=settings.PROJECT_NAME, debug=settings.DEBUG, lifespan=lifespan)
    app.state.settings = settings
    app.state.store = store
    app.state.engine = engine
    app.state.session_verifier = SessionVerifier.from_settings(settings)

    allow_origins = settings.CORS_ORIGINS
    allow_credentials = '*' not in allow_origins

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_credentials=allow_credentials,
        allow_methods=['*'],
        allow_headers=['*'],
    )

    register_exception_handlers(app)
    app.include_router(api_router, prefix=settings.API_PREFIX)
    app.include_router(page_router)
    return app


app = create_app()
