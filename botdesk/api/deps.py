"""FastAPI dependencies for DB sessions and the inference client."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from botdesk.core.config import get_settings
from botdesk.core.database import get_session
from botdesk.services.inference import InferenceClient


def get_inference_client() -> InferenceClient | None:
    """Inference client built from settings, or None if no key is set."""
    return InferenceClient.from_settings(get_settings())


# Typed shorthand for use in route signatures
Session = Annotated[AsyncSession, Depends(get_session)]
Inference = Annotated[InferenceClient | None, Depends(get_inference_client)]
