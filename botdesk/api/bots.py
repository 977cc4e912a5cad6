"""Bot profile, settings and document upload routes."""

from fastapi import APIRouter, UploadFile
from pydantic import BaseModel

from botdesk.api.deps import Session
from botdesk.models.bot import BotCreate, BotCreated, BotSettingsRead, BotSettingsUpdate
from botdesk.models.document import DocumentRead
from botdesk.services import ingest, registry

router = APIRouter(prefix="/bot", tags=["bots"])


class StatusResponse(BaseModel):
    status: str = "ok"


class UploadResponse(StatusResponse):
    filename: str


@router.post("", response_model=BotCreated)
async def create_bot(body: BotCreate, session: Session) -> BotCreated:
    bot_id = await registry.create_bot(session, body)
    return BotCreated(bot_id=bot_id)


@router.get("/{bot_id}/settings", response_model=BotSettingsRead)
async def get_bot_settings(bot_id: str, session: Session) -> BotSettingsRead:
    return await registry.get_bot_settings(session, bot_id)


@router.post("/{bot_id}/settings", response_model=StatusResponse)
async def update_bot_settings(
    bot_id: str,
    body: BotSettingsUpdate,
    session: Session,
) -> StatusResponse:
    await registry.update_bot_settings(session, bot_id, body)
    return StatusResponse()


@router.post("/{bot_id}/upload", response_model=UploadResponse)
async def upload_document(
    bot_id: str,
    session: Session,
    file: UploadFile | None = None,
) -> UploadResponse:
    """Extract text from the uploaded file and attach it to the bot."""
    doc = await ingest.ingest_upload(session, bot_id, file)
    return UploadResponse(filename=doc.filename)


@router.get("/{bot_id}/documents", response_model=list[DocumentRead])
async def list_documents(bot_id: str, session: Session) -> list[DocumentRead]:
    await registry.get_bot(session, bot_id)
    docs = await ingest.list_documents(session, bot_id)
    return [ingest.to_read(d) for d in docs]
