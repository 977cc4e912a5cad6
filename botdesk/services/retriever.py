"""Context retriever — naive first-token keyword lookup over a bot's documents.

Takes the first whitespace-delimited token of the lowercased message and
returns the first document (in the order documents were added) whose
lowercased text contains it, cut to ``MAX_CONTEXT_CHARS``. No ranking,
no scoring, no merging of several documents.
"""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy.ext.asyncio import AsyncSession

from botdesk.models.document import Document
from botdesk.services.ingest import list_documents

MAX_CONTEXT_CHARS = 800


def match_context(documents: Iterable[Document], message: str) -> str:
    tokens = message.lower().split()
    if not tokens:
        return ""
    keyword = tokens[0]

    for doc in documents:
        if doc.text and keyword in doc.text.lower():
            return doc.text[:MAX_CONTEXT_CHARS]
    return ""


async def find_context(session: AsyncSession, bot_id: str, message: str) -> str:
    documents = await list_documents(session, bot_id)
    return match_context(documents, message)
