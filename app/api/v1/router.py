from fastapi import APIRouter
from app.api.v1 import auth, conversations, events, memories, pages, profiles

api_router = APIRouter()
api_router.include_router(events.router)
api_router.include_router(memories.router)
api_router.include_router(profiles.router)
api_router.include_router(conversations.router)

page_router = APIRouter()
page_router.include_router(auth.router)
page_router.include_router(pages.router)
