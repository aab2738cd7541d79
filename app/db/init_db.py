from loguru import logger
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel

from app.core.config import PLACEHOLDER_DATABASE_URL, Settings
from app.models import conversation, event, memory, profile  # noqa: F401


def init_db(engine: Engine, settings: Settings, drop_all: bool = False) -> None:
    if settings.DATABASE_URL == PLACEHOLDER_DATABASE_URL:
        logger.warning('db.init_skipped', reason='DATABASE_URL not configured')
        return
    if drop_all:
        SQLModel.metadata.drop_all(engine)
    if settings.AUTO_CREATE_TABLES or settings.DATABASE_URL.startswith('sqlite') or settings.ENV != 'production':
        SQLModel.metadata.create_all(engine)
