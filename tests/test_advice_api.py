"""Tests for the advice HTTP endpoints."""

import pytest
from httpx import AsyncClient

from krishi_sakhi.advisor.errors import CompletionServiceError
from krishi_sakhi.advisor.messages import OUTCOME_MESSAGES
from krishi_sakhi.advisor.types import OutcomeKind


@pytest.mark.asyncio
async def test_advice_success(client: AsyncClient, scripted_client, advisor_factory, override_advisor):
    fake = scripted_client({"model-a": "Remove the infected leaves. Confidence: 85%"})
    override_advisor(advisor_factory(fake))

    resp = await client.post("/api/v1/advice", json={"utterance": "My tomato leaves have spots"})

    assert resp.status_code == 200
    data = resp.json()
    assert data["outcome"] == "success"
    assert data["ok"] is True
    assert data["text"] == "Remove the infected leaves. Confidence: 85%"
    assert data["message"] == data["text"]
    assert data["language"] == "English"
    assert data["model"] == "model-a"


@pytest.mark.asyncio
async def test_advice_throttled(client: AsyncClient, fake_client, advisor_factory, override_advisor):
    override_advisor(advisor_factory(fake_client))

    first = await client.post("/api/v1/advice", json={"utterance": "Hello"})
    second = await client.post("/api/v1/advice", json={"utterance": "Hello"})

    assert first.json()["outcome"] == "success"
    assert second.status_code == 200
    assert second.json()["outcome"] == "throttled"
    assert second.json()["message"] == OUTCOME_MESSAGES[OutcomeKind.THROTTLED]


@pytest.mark.asyncio
async def test_advice_unknown_failure_hides_detail(client: AsyncClient, scripted_client, advisor_factory, override_advisor):
    fake = scripted_client({"model-a": CompletionServiceError("[500 INTERNAL] secret backend trace")})
    override_advisor(advisor_factory(fake))

    resp = await client.post("/api/v1/advice", json={"utterance": "Hello"})

    data = resp.json()
    assert data["outcome"] == "unknown_failure"
    assert data["ok"] is False
    assert data["text"] == ""
    assert "secret backend trace" not in resp.text


@pytest.mark.asyncio
async def test_advice_not_configured(client: AsyncClient, fake_client, advisor_factory, override_advisor):
    override_advisor(advisor_factory(fake_client, api_key=""))

    resp = await client.post("/api/v1/advice", json={"utterance": "Hello"})

    assert resp.status_code == 503
    assert "GEMINI_API_KEY" in resp.json()["detail"]
    assert fake_client.calls == []


@pytest.mark.asyncio
@pytest.mark.parametrize("utterance", ["", "   ", "\n\t"])
async def test_advice_rejects_blank(client: AsyncClient, fake_client, advisor_factory, override_advisor, utterance):
    override_advisor(advisor_factory(fake_client))

    resp = await client.post("/api/v1/advice", json={"utterance": utterance})

    assert resp.status_code == 422
    assert fake_client.calls == []


@pytest.mark.asyncio
async def test_advisor_status(client: AsyncClient, fake_client, advisor_factory, override_advisor):
    override_advisor(advisor_factory(fake_client, models=["gemini-2.0-flash"], min_interval_ms=1500))

    resp = await client.get("/api/v1/advice/status")

    assert resp.status_code == 200
    assert resp.json() == {"configured": True, "models": ["gemini-2.0-flash"], "min_interval_ms": 1500}


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    resp = await client.get("/api/v1/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "configured": True}


@pytest.mark.asyncio
async def test_metrics_exposes_outcomes(client: AsyncClient, fake_client, advisor_factory, override_advisor):
    override_advisor(advisor_factory(fake_client))
    await client.post("/api/v1/advice", json={"utterance": "Hello"})

    resp = await client.get("/metrics")

    assert resp.status_code == 200
    assert "advice_outcomes_total" in resp.text
