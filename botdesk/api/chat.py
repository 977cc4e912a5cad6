"""Chat endpoints — the widget's message route and the legacy per-bot route."""

from fastapi import APIRouter

from botdesk.api.deps import Inference, Session
from botdesk.core.errors import ValidationError
from botdesk.models.base import CamelModel
from botdesk.services.resolver import resolve_reply

router = APIRouter(tags=["chat"])


# ── Request / Response schemas ────────────────────────────────

class MessageRequest(CamelModel):
    bot_id: str | None = None
    message: str | None = None


class BotChatRequest(CamelModel):
    message: str | None = None


class ChatReplyResponse(CamelModel):
    reply: str
    quick_replies: list[str]


# ── Routes ────────────────────────────────────────────────────

@router.post("/message", response_model=ChatReplyResponse)
async def post_message(
    body: MessageRequest,
    session: Session,
    inference: Inference,
) -> ChatReplyResponse:
    """Resolve a reply for ``message`` from bot ``botId``."""
    if not body.bot_id or not body.message:
        raise ValidationError("botId and message required")
    return await _reply(session, body.bot_id, body.message, inference)


@router.post("/bot/{bot_id}/chat", response_model=ChatReplyResponse)
async def bot_chat(
    bot_id: str,
    body: BotChatRequest,
    session: Session,
    inference: Inference,
) -> ChatReplyResponse:
    if not body.message:
        raise ValidationError("message required")
    return await _reply(session, bot_id, body.message, inference)


async def _reply(session, bot_id: str, message: str, inference) -> ChatReplyResponse:
    result = await resolve_reply(session, bot_id, message, inference)
    return ChatReplyResponse(reply=result.reply, quick_replies=result.quick_replies)
