from fastapi import Request
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from app.core.config import StoreConfig


def build_engine(store: StoreConfig) -> Engine:
    """Create the engine lazily; nothing connects until the first query."""
    url = store.database_url
    if url.startswith('sqlite'):
        kwargs = {'connect_args': {'check_same_thread': False}}
        if ':memory:' in url or url.rstrip('/') == 'sqlite:':
            kwargs['poolclass'] = StaticPool
        return create_engine(url, **kwargs)
    return create_engine(url, pool_pre_ping=True)


def get_session(request: Request):
    # Rows handed back to routes keep their loaded values; no refresh query after commit.
    with Session(request.app.state.engine, expire_on_commit=False) as session:
        yield session
