"""Bot model — a chat persona with its widget settings."""

from sqlalchemy import Text
from sqlmodel import Column, Field, SQLModel

from botdesk.models.base import CamelModel, TimestampMixin, new_id

DEFAULT_THEME_COLOR = "#4CAF50"
DEFAULT_WELCOME = "Hi! How can I help?"


class Bot(TimestampMixin, SQLModel, table=True):
    __tablename__ = "bots"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)

    name: str = Field(max_length=255, nullable=False)
    avatar: str = Field(default="")
    theme_color: str = Field(default=DEFAULT_THEME_COLOR, max_length=32)
    welcome: str = Field(default=DEFAULT_WELCOME, sa_column=Column(Text, nullable=False))

    # JSON-encoded list of strings; decode with registry.decode_quick_replies().
    quick_replies: str = Field(default="[]", sa_column=Column(Text, nullable=False, server_default="[]"))


# ── Pydantic schemas ─────────────────────────────────────────

class BotCreate(CamelModel):
    # Checked in registry.create_bot; a missing name is a 400.
    name: str | None = None
    avatar: str | None = None
    theme_color: str | None = None
    welcome: str | None = None
    quick_replies: list[str] | None = None


class BotCreated(CamelModel):
    bot_id: str


class BotSettingsUpdate(CamelModel):
    avatar: str | None = None
    theme_color: str | None = None
    welcome: str | None = None
    quick_replies: list[str] | None = None


class BotSettingsRead(CamelModel):
    id: str
    name: str
    avatar: str
    theme_color: str
    welcome: str
    quick_replies: list[str]
