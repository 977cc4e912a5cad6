"""Document ingestion — extract text from an upload and store it for a bot."""

from __future__ import annotations

import logging

from fastapi import UploadFile
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from botdesk.core.errors import ProcessingError, ValidationError
from botdesk.models.document import Document, DocumentRead
from botdesk.services.extract import extract_text
from botdesk.services.registry import get_bot

logger = logging.getLogger(__name__)


async def ingest_document(
    session: AsyncSession,
    bot_id: str,
    filename: str,
    content: bytes | None,
    content_type: str | None = None,
) -> Document:
    """Extract text from raw file bytes and persist it as a Document.

    Raises:
        NotFoundError: If the bot does not exist.
        ValidationError: If no file content was supplied.
        ProcessingError: If extraction or the database write fails.
    """
    await get_bot(session, bot_id)

    if content is None:
        raise ValidationError("file required")

    try:
        text = extract_text(filename, content, content_type)
    except Exception as exc:
        logger.exception("Text extraction failed for %s (bot %s)", filename, bot_id)
        raise ProcessingError(str(exc)) from exc

    doc = Document(bot_id=bot_id, filename=filename, text=text)
    session.add(doc)
    try:
        await session.commit()
    except SQLAlchemyError as exc:
        await session.rollback()
        logger.exception("Failed to store document %s for bot %s", filename, bot_id)
        raise ProcessingError(str(exc)) from exc

    logger.info("Ingested %s for bot %s (%d chars)", filename, bot_id, len(text))
    return doc


async def ingest_upload(
    session: AsyncSession,
    bot_id: str,
    upload: UploadFile | None,
) -> Document:
    """Ingest a multipart upload, always releasing its temporary file."""
    try:
        await get_bot(session, bot_id)
        if upload is None:
            raise ValidationError("file required")

        content = await upload.read()
        return await ingest_document(
            session,
            bot_id,
            upload.filename or "",
            content,
            upload.content_type,
        )
    finally:
        if upload is not None:
            await upload.close()


async def list_documents(session: AsyncSession, bot_id: str) -> list[Document]:
    """All documents of a bot in the order they were added."""
    stmt = (
        select(Document)
        .where(Document.bot_id == bot_id)
        .order_by(Document.seq.asc())  # type: ignore[union-attr]
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


def to_read(doc: Document) -> DocumentRead:
    return DocumentRead(
        id=doc.id,
        bot_id=doc.bot_id,
        filename=doc.filename,
        char_count=len(doc.text),
        added_at=doc.added_at,
    )
