"""FastAPI application entrypoint."""

import logging
import os
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from botdesk.api import api_router
from botdesk.core.config import get_settings
from botdesk.core.database import close_db, init_db
from botdesk.core.errors import BotDeskError

_settings = get_settings()

logging.basicConfig(
    level=_settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    # Startup: create tables if absent
    await init_db()
    if not _settings.hf_api_key:
        logger.info("HF_API_KEY not set; replies use local fallbacks only")
    yield
    await close_db()


app = FastAPI(
    title="BotDesk",
    version="0.1.0",
    description="Multi-tenant chatbot backend with document lookup",
    lifespan=lifespan,
)

# ── CORS ─────────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in _settings.allowed_origins.split(",")],
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Error handlers ───────────────────────────────────────────
@app.exception_handler(BotDeskError)
async def botdesk_error_handler(_request: Request, exc: BotDeskError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": exc.errors()[0]["msg"] if exc.errors() else "Invalid request"},
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": str(exc)},
    )


# ── API routes ───────────────────────────────────────────────
app.include_router(api_router)


# ── Widget / embed static files ──────────────────────────────
if os.path.isdir(_settings.public_dir):
    app.mount(
        "/",
        StaticFiles(directory=_settings.public_dir, html=True),
        name="public",
    )
