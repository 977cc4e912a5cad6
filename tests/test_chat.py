"""Chat endpoint tests — /api/message and the legacy per-bot route."""

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from botdesk.core.database import get_session
from botdesk.core.errors import UpstreamError
from botdesk.main import app
from botdesk.services.inference import InferenceClient
from botdesk.services.resolver import UNKNOWN_ANSWER_REPLY


async def _setup_chat(client: AsyncClient, quick_replies: list[str] | None = None) -> str:
    """Create a bot with one uploaded FAQ document, return its id."""
    resp = await client.post("/api/bot", json={
        "name": "FAQ Bot",
        "welcome": "Hello! Ask me about our store.",
        "quickReplies": quick_replies or ["Opening hours", "Returns"],
    })
    bot_id = resp.json()["botId"]

    resp = await client.post(
        f"/api/bot/{bot_id}/upload",
        files={"file": (
            "faq.txt",
            b"Returns are accepted within 30 days.\nKeep your receipt.\n"
            b"Refunds take 5 days.\nStore credit is instant.\nLine five.",
            "text/plain",
        )},
    )
    assert resp.status_code == 200
    return bot_id


@pytest.mark.asyncio
async def test_message_greeting(client: AsyncClient):
    bot_id = await _setup_chat(client)

    resp = await client.post("/api/message", json={"botId": bot_id, "message": "hi there"})

    assert resp.status_code == 200, resp.text
    assert resp.json() == {
        "reply": "Hello! Ask me about our store.",
        "quickReplies": ["Opening hours", "Returns"],
    }


@pytest.mark.asyncio
async def test_message_context_answer(client: AsyncClient):
    bot_id = await _setup_chat(client)

    resp = await client.post("/api/message", json={"botId": bot_id, "message": "returns policy?"})

    data = resp.json()
    assert data["reply"] == (
        "Returns are accepted within 30 days.\nKeep your receipt.\n"
        "Refunds take 5 days.\nStore credit is instant."
    )
    assert data["quickReplies"] == ["Opening hours", "Returns"]


@pytest.mark.asyncio
async def test_message_unknown_answer(client: AsyncClient):
    bot_id = await _setup_chat(client)

    resp = await client.post("/api/message", json={"botId": bot_id, "message": "warranty?"})

    assert resp.json()["reply"] == UNKNOWN_ANSWER_REPLY


@pytest.mark.asyncio
async def test_quick_replies_follow_settings(client: AsyncClient):
    bot_id = await _setup_chat(client)
    await client.post(f"/api/bot/{bot_id}/settings", json={"quickReplies": ["Talk to a human"]})

    for message in ("hello", "returns", "warranty"):
        resp = await client.post(f"/api/bot/{bot_id}/chat", json={"message": message})
        assert resp.json()["quickReplies"] == ["Talk to a human"]


@pytest.mark.asyncio
async def test_message_missing_fields(client: AsyncClient):
    resp = await client.post("/api/message", json={"message": "hi"})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "botId and message required"

    resp = await client.post("/api/message", json={"botId": "abc", "message": ""})
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_message_unknown_bot(client: AsyncClient):
    resp = await client.post("/api/message", json={"botId": "ghost", "message": "hello"})
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_legacy_chat_route(client: AsyncClient):
    bot_id = await _setup_chat(client)

    resp = await client.post(f"/api/bot/{bot_id}/chat", json={"message": "Hello"})
    assert resp.status_code == 200
    assert resp.json()["reply"] == "Hello! Ask me about our store."

    resp = await client.post(f"/api/bot/{bot_id}/chat", json={})
    assert resp.status_code == 400

    resp = await client.post("/api/bot/ghost/chat", json={"message": "hello"})
    assert resp.status_code == 404


def _mock_inference(reply: str | None = None, error: Exception | None = None) -> MagicMock:
    client = MagicMock(spec=InferenceClient)
    client.generate = AsyncMock(return_value=reply, side_effect=error)
    return client


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "inference_client",
    [_mock_inference(reply="Model says hi")],
)
async def test_message_uses_inference_when_configured(client: AsyncClient, inference_client):
    bot_id = await _setup_chat(client)

    resp = await client.post("/api/message", json={"botId": bot_id, "message": "hello"})

    assert resp.json() == {
        "reply": "Model says hi",
        "quickReplies": ["Opening hours", "Returns"],
    }
    inference_client.generate.assert_awaited_once()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "inference_client",
    [_mock_inference(error=UpstreamError("Inference request timed out after 120.0s"))],
)
async def test_inference_outage_never_fails_chat(client: AsyncClient, inference_client):
    bot_id = await _setup_chat(client)

    resp = await client.post("/api/message", json={"botId": bot_id, "message": "hello"})

    assert resp.status_code == 200
    assert resp.json()["reply"] == "Hello! Ask me about our store."


def _mock_transport_client(payload) -> InferenceClient:
    return InferenceClient(
        api_key="hf_test",
        url="https://inference.test/models/demo",
        transport=httpx.MockTransport(lambda r: httpx.Response(200, json=payload)),
    )


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "inference_client",
    [
        _mock_transport_client([{"generated_text": 42}]),
        _mock_transport_client({"generated_text": ["a", "b"]}),
    ],
)
async def test_malformed_provider_text_never_fails_chat(client: AsyncClient, inference_client):
    bot_id = await _setup_chat(client)

    resp = await client.post("/api/message", json={"botId": bot_id, "message": "hello"})

    assert resp.status_code == 200, resp.text
    assert isinstance(resp.json()["reply"], str)
    assert resp.json()["quickReplies"] == ["Opening hours", "Returns"]


@pytest.mark.asyncio
async def test_unexpected_error_renders_500(session):
    async def _broken_session():
        raise RuntimeError("kaboom")
        yield session

    app.dependency_overrides[get_session] = _broken_session
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            resp = await ac.post("/api/message", json={"botId": "any", "message": "hello"})
    finally:
        app.dependency_overrides.clear()

    assert resp.status_code == 500
    assert resp.json() == {"detail": "kaboom"}
