"""Text extraction from uploaded files (PDF, anything else as UTF-8)."""

from __future__ import annotations

from io import BytesIO
from pathlib import Path

PDF_CONTENT_TYPE = "application/pdf"


def is_pdf(filename: str, content_type: str | None) -> bool:
    """A file is a PDF if either its declared type or its extension says so."""
    if content_type and content_type.split(";")[0].strip().lower() == PDF_CONTENT_TYPE:
        return True
    return Path(filename).suffix.lower() == ".pdf"


def extract_text(filename: str, content: bytes, content_type: str | None = None) -> str:
    """Extract plain text from file bytes.

    Args:
        filename: Original filename (used to detect PDFs).
        content: Raw file bytes.
        content_type: Declared MIME type of the upload, if any.

    Returns:
        Extracted text as a string. Undecodable bytes in non-PDF files
        are replaced rather than rejected.
    """
    if is_pdf(filename, content_type):
        return _extract_pdf(content)

    return content.decode("utf-8", errors="replace")


def _extract_pdf(content: bytes) -> str:
    from pypdf import PdfReader

    reader = PdfReader(BytesIO(content))
    pages = [page.extract_text() or "" for page in reader.pages]
    return "\n".join(pages)
