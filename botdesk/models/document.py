"""Document model — plain text extracted from an uploaded file."""

from datetime import datetime

from sqlalchemy import Text
from sqlmodel import Column, Field, SQLModel

from botdesk.models.base import CamelModel, new_id, timestamp_field


class Document(SQLModel, table=True):
    __tablename__ = "documents"

    # Autoincrement key; gives documents a stable insertion order.
    seq: int | None = Field(default=None, primary_key=True)
    id: str = Field(default_factory=new_id, unique=True, index=True, max_length=36)
    bot_id: str = Field(foreign_key="bots.id", nullable=False, index=True, max_length=36)

    # Stored exactly as uploaded, never sanitized
    filename: str = Field(default="", sa_column=Column(Text, nullable=False, server_default=""))
    text: str = Field(default="", sa_column=Column(Text, nullable=False, server_default=""))

    added_at: datetime = timestamp_field()


# ── Pydantic schemas ─────────────────────────────────────────

class DocumentRead(CamelModel):
    id: str
    bot_id: str
    filename: str
    char_count: int
    added_at: datetime
