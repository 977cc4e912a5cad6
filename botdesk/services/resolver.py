"""Reply resolver — picks the chat reply for a bot.

Flow (first applicable wins):
  1. Look up document context for the message
  2. If an inference client is configured, ask it (context + question)
  3. Greeting ("hello" / "hi" anywhere in the message) -> bot's welcome text
  4. Context found -> its first four lines
  5. Fixed "don't know" reply

Inference failures are logged and fall through to step 3; they never
reach the caller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from sqlalchemy.ext.asyncio import AsyncSession

from botdesk.core.errors import UpstreamError
from botdesk.services.inference import InferenceClient
from botdesk.services.registry import decode_quick_replies, get_bot
from botdesk.services.retriever import find_context

logger = logging.getLogger(__name__)

GREETINGS = ("hello", "hi")
CONTEXT_REPLY_LINES = 4
PARTIAL_ANSWER_REPLY = "I found something but can't make a full answer."
UNKNOWN_ANSWER_REPLY = "Sorry, I don't know the answer to that yet. Try one of the options."


@dataclass
class ChatReply:
    reply: str
    quick_replies: list[str] = field(default_factory=list)


def build_prompt(context: str, message: str) -> str:
    return (
        "You are an assistant that answers based on context:\n"
        f"{context}\n\n"
        f"Question: {message}\n"
        "Answer:"
    )


def is_greeting(message: str) -> bool:
    lower = message.lower()
    return any(word in lower for word in GREETINGS)


def reply_from_context(context: str) -> str:
    answer = "\n".join(context.split("\n")[:CONTEXT_REPLY_LINES])
    return answer if answer.strip() else PARTIAL_ANSWER_REPLY


async def resolve_reply(
    session: AsyncSession,
    bot_id: str,
    message: str,
    inference: InferenceClient | None = None,
) -> ChatReply:
    """Produce the reply and quick replies for one user message.

    Raises:
        NotFoundError: If the bot does not exist.
    """
    bot = await get_bot(session, bot_id)
    quick_replies = decode_quick_replies(bot.quick_replies)

    context = await find_context(session, bot_id, message)

    if inference is not None:
        try:
            text = await inference.generate(build_prompt(context, message))
            return ChatReply(reply=text, quick_replies=quick_replies)
        except UpstreamError as exc:
            logger.warning("Inference failed for bot %s, falling back: %s", bot_id, exc.message)

    if is_greeting(message):
        return ChatReply(reply=bot.welcome, quick_replies=quick_replies)

    if context:
        return ChatReply(reply=reply_from_context(context), quick_replies=quick_replies)

    return ChatReply(reply=UNKNOWN_ANSWER_REPLY, quick_replies=quick_replies)
