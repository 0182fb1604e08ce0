"""
Integration tests for the HTTP API over SQLite with a stubbed assistant.
"""
import httpx
import openai
import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from proworker.ai.assistant import AssistantUnavailableError
from proworker.api.app import app
from proworker.api.dependencies import get_chat_gateway, get_db
from proworker.services.chat_gateway import ChatGateway


class StubAssistant:
    def __init__(self, error: Exception = None):
        self.error = error
        self.calls = 0

    def is_available(self):
        return self.error is None

    async def answer(self, question, context):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return f"{context.profile.name}, you have {context.order_summary.total} orders."


@pytest.fixture
def assistant():
    return StubAssistant()


@pytest.fixture
def gateway(assistant, frozen_clock):
    return ChatGateway(
        assistant,
        clock=frozen_clock,
        cache_ttl_seconds=300,
        daily_limit=2,
        max_pending=5,
        delay_seconds=0,
    )


@pytest_asyncio.fixture
async def client(seeded, gateway):
    def override_get_db():
        db = seeded()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_chat_gateway] = lambda: gateway

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.mark.integration
@pytest.mark.asyncio
async def test_health_reports_quota(client):
    response = await client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["requests_used"] == 0
    assert data["requests_remaining"] == 2
    assert "timestamp" in data
    assert "X-Correlation-ID" in response.headers


@pytest.mark.integration
@pytest.mark.asyncio
async def test_worker_context(client):
    response = await client.get("/api/workers/1/context")

    assert response.status_code == 200
    data = response.json()
    assert data["profile"]["name"] == "Karim"
    assert data["order_summary"]["total"] == 3
    assert data["analytics"]["rank"]["total_workers"] == 3
    assert data["analytics"]["top_cities"][0]["latitude"] == 23.8
    assert len(data["week_summary"]) == 7


@pytest.mark.integration
@pytest.mark.asyncio
async def test_worker_context_not_found(client):
    response = await client.get("/api/workers/999/context")

    assert response.status_code == 404
    assert response.json()["error"] == "Worker profile unavailable"


@pytest.mark.integration
@pytest.mark.asyncio
async def test_chat_answers_then_caches(client, assistant):
    payload = {"user_question": "How many orders do I have?", "worker_id": 1}

    first = await client.post("/api/chat", json=payload)
    second = await client.post("/api/chat", json=payload)

    assert first.status_code == 200
    body = first.json()
    assert body["success"] is True
    assert body["response"] == "Karim, you have 3 orders."
    assert body["cached"] is False
    assert "timestamp" in body

    assert second.json()["cached"] is True
    assert assistant.calls == 1

    health = (await client.get("/health")).json()
    assert health["requests_used"] == 1
    assert health["requests_remaining"] == 1


@pytest.mark.integration
@pytest.mark.asyncio
async def test_chat_blank_question(client):
    response = await client.post("/api/chat", json={"user_question": "   ", "worker_id": 1})

    assert response.status_code == 400
    assert response.json()["success"] is False


@pytest.mark.integration
@pytest.mark.asyncio
async def test_chat_missing_field(client):
    response = await client.post("/api/chat", json={"worker_id": 1})
    assert response.status_code == 422


@pytest.mark.integration
@pytest.mark.asyncio
async def test_chat_unknown_worker(client):
    response = await client.post("/api/chat", json={"user_question": "Hi", "worker_id": 999})

    assert response.status_code == 404
    assert response.json()["error"] == "Worker profile unavailable"


@pytest.mark.integration
@pytest.mark.asyncio
async def test_chat_quota_exceeded(client):
    for question in ("one", "two"):
        assert (await client.post("/api/chat", json={"user_question": question, "worker_id": 1})).status_code == 200

    response = await client.post("/api/chat", json={"user_question": "three", "worker_id": 1})

    assert response.status_code == 429
    assert "reset_at" in response.json()["details"]


@pytest.mark.integration
@pytest.mark.asyncio
async def test_chat_queue_full(client, gateway):
    gateway.max_pending = 0

    response = await client.post("/api/chat", json={"user_question": "Hi", "worker_id": 1})

    assert response.status_code == 503


@pytest.mark.integration
@pytest.mark.asyncio
async def test_chat_assistant_unavailable(client, assistant):
    assistant.error = AssistantUnavailableError("not configured")

    response = await client.post("/api/chat", json={"user_question": "Hi", "worker_id": 1})

    assert response.status_code == 503


@pytest.mark.integration
@pytest.mark.asyncio
async def test_chat_provider_rate_limited(client, assistant):
    request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
    assistant.error = openai.RateLimitError(
        "Rate limit reached",
        response=httpx.Response(429, request=request),
        body=None,
    )

    response = await client.post("/api/chat", json={"user_question": "Hi", "worker_id": 1})

    assert response.status_code == 429


@pytest.mark.integration
@pytest.mark.asyncio
async def test_metrics_endpoint(client):
    await client.post("/api/chat", json={"user_question": "Hi", "worker_id": 1})

    response = await client.get("/metrics")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert 'chat_requests_total{outcome="answered"} 1' in response.text
    assert 'worker_context_aggregations_total{outcome="success"} 1' in response.text
