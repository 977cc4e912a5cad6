"""API router aggregation."""

from fastapi import APIRouter

from botdesk.api.bots import router as bots_router
from botdesk.api.chat import router as chat_router
from botdesk.api.system import router as system_router

api_router = APIRouter(prefix="/api")
api_router.include_router(system_router)
api_router.include_router(bots_router)
api_router.include_router(chat_router)
