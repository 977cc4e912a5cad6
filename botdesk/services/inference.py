"""Inference client — one HTTP call to a hosted text-generation model."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any

import httpx

from botdesk.core.config import Settings
from botdesk.core.errors import UpstreamError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InferenceClient:
    """Immutable provider config; every ``generate`` call opens its own client."""

    api_key: str
    url: str
    timeout: float = 120.0
    max_new_tokens: int = 200
    transport: httpx.AsyncBaseTransport | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> InferenceClient | None:
        """Return a client, or None when no API key is configured."""
        if not settings.hf_api_key:
            return None
        return cls(
            api_key=settings.hf_api_key,
            url=settings.inference_url,
            timeout=settings.inference_timeout,
            max_new_tokens=settings.inference_max_new_tokens,
        )

    async def generate(self, prompt: str) -> str:
        """Send ``prompt`` to the provider and return the generated text.

        Raises:
            UpstreamError: On timeout, transport failure, non-2xx status
                or a body that is not JSON.
        """
        payload = {
            "inputs": prompt,
            "parameters": {"max_new_tokens": self.max_new_tokens},
        }
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(
                    self.url,
                    json=payload,
                    headers={"Authorization": f"Bearer {self.api_key}"},
                )
                response.raise_for_status()
                data = response.json()
        except httpx.TimeoutException as exc:
            raise UpstreamError(f"Inference request timed out after {self.timeout}s") from exc
        except httpx.HTTPStatusError as exc:
            raise UpstreamError(
                f"Inference provider returned {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            raise UpstreamError(f"Inference request failed: {exc}") from exc
        except ValueError as exc:
            raise UpstreamError("Inference provider returned a non-JSON body") from exc

        return parse_generated_text(data)


def parse_generated_text(data: Any) -> str:
    """Pull ``generated_text`` from a list-of-results or a single result.

    Anything else, including a non-string ``generated_text``, is returned
    as its JSON serialization.
    """
    if isinstance(data, list) and data and isinstance(data[0], dict):
        text = data[0].get("generated_text")
        if isinstance(text, str) and text:
            return text
    if isinstance(data, dict):
        text = data.get("generated_text")
        if isinstance(text, str) and text:
            return text
    return json.dumps(data)
