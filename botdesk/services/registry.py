"""Bot registry — create, read and patch bot profiles."""

from __future__ import annotations

import json
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from botdesk.core.errors import NotFoundError, ValidationError
from botdesk.models.base import utcnow
from botdesk.models.bot import (
    DEFAULT_THEME_COLOR,
    DEFAULT_WELCOME,
    Bot,
    BotCreate,
    BotSettingsRead,
    BotSettingsUpdate,
)

logger = logging.getLogger(__name__)


def encode_quick_replies(replies: list[str]) -> str:
    return json.dumps(list(replies))


def decode_quick_replies(raw: str | None) -> list[str]:
    if not raw:
        return []
    return list(json.loads(raw))


async def create_bot(session: AsyncSession, body: BotCreate) -> str:
    """Persist a new bot, filling defaults for omitted fields.

    Raises:
        ValidationError: If ``name`` is missing or blank.
    """
    if not body.name or not body.name.strip():
        raise ValidationError("name required")

    bot = Bot(
        name=body.name,
        avatar="" if body.avatar is None else body.avatar,
        theme_color=DEFAULT_THEME_COLOR if body.theme_color is None else body.theme_color,
        welcome=DEFAULT_WELCOME if body.welcome is None else body.welcome,
        quick_replies=encode_quick_replies([] if body.quick_replies is None else body.quick_replies),
    )
    session.add(bot)
    await session.commit()
    logger.info("Created bot %s (%s)", bot.id, bot.name)
    return bot.id


async def get_bot(session: AsyncSession, bot_id: str) -> Bot:
    bot = await session.get(Bot, bot_id)
    if bot is None:
        raise NotFoundError("bot not found")
    return bot


def to_settings(bot: Bot) -> BotSettingsRead:
    return BotSettingsRead(
        id=bot.id,
        name=bot.name,
        avatar=bot.avatar,
        theme_color=bot.theme_color,
        welcome=bot.welcome,
        quick_replies=decode_quick_replies(bot.quick_replies),
    )


async def get_bot_settings(session: AsyncSession, bot_id: str) -> BotSettingsRead:
    return to_settings(await get_bot(session, bot_id))


async def update_bot_settings(
    session: AsyncSession,
    bot_id: str,
    body: BotSettingsUpdate,
) -> None:
    """Apply a partial patch; omitted or null fields keep their stored value."""
    bot = await get_bot(session, bot_id)

    update_data = body.model_dump(exclude_unset=True, exclude_none=True)

    if "quick_replies" in update_data:
        update_data["quick_replies"] = encode_quick_replies(update_data["quick_replies"])

    for field, value in update_data.items():
        setattr(bot, field, value)

    bot.updated_at = utcnow()
    session.add(bot)
    await session.commit()
    logger.info("Updated bot %s settings: %s", bot_id, sorted(update_data))
