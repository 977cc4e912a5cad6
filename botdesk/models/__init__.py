"""Import all models so SQLModel.metadata picks them up."""

from botdesk.models.bot import Bot, BotCreate, BotCreated, BotSettingsRead, BotSettingsUpdate
from botdesk.models.document import Document, DocumentRead

__all__ = [
    "Bot",
    "BotCreate",
    "BotCreated",
    "BotSettingsRead",
    "BotSettingsUpdate",
    "Document",
    "DocumentRead",
]
