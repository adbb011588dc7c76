import json
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from bizvaluation.core.errors import UpstreamModelError
from bizvaluation.mail.email_client import MockEmail
from bizvaluation.main import create_app
from bizvaluation.models.mock_model import MockModel
from bizvaluation.models.openai_model import OpenAIModel
from bizvaluation.services.prompt import build_prompt
from bizvaluation.services.valuation_service import ValuationService


def _openai_client(content=None, error=None):
    client = MagicMock()
    client.chat.completions.create = AsyncMock(
        return_value=SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))]),
        side_effect=error,
    )
    return client


@pytest.mark.asyncio
async def test_openai_model_requests_json_mode():
    client = _openai_client(content='{"confidence": "High"}')
    model = OpenAIModel(model="gpt-4.1-mini", client=client)

    assert await model.complete_json("prompt text") == '{"confidence": "High"}'
    kwargs = client.chat.completions.create.await_args.kwargs
    assert kwargs["model"] == "gpt-4.1-mini"
    assert kwargs["response_format"] == {"type": "json_object"}
    assert kwargs["messages"][-1] == {"role": "user", "content": "prompt text"}


@pytest.mark.asyncio
async def test_openai_model_empty_content_becomes_empty_string():
    model = OpenAIModel(model="gpt-4.1-mini", client=_openai_client(content=None))
    assert await model.complete_json("prompt") == ""


@pytest.mark.asyncio
async def test_openai_model_wraps_sdk_errors():
    model = OpenAIModel(model="gpt-4.1-mini", client=_openai_client(error=TimeoutError("read timeout")))

    with pytest.raises(UpstreamModelError):
        await model.complete_json("prompt")


def test_openai_model_requires_api_key(monkeypatch):
    monkeypatch.setattr("bizvaluation.models.openai_model.settings.OPENAI_API_KEY", None)
    with pytest.raises(RuntimeError):
        OpenAIModel()


@pytest.mark.asyncio
async def test_mock_model_is_deterministic_and_profit_based(bondi_request):
    prompt = build_prompt(bondi_request)
    first = json.loads(await MockModel().complete_json(prompt))
    second = json.loads(await MockModel().complete_json(prompt))

    assert first == second
    assert 150000 * 1.5 <= first["lowEstimate"] < first["highEstimate"] <= 150000 * 3.6
    assert first["imageCategory"] == "cafe"
    assert first["listingTitle"] == "Established Cafe in Bondi"


def test_offline_providers_run_end_to_end():
    mailer = MockEmail()
    client = TestClient(create_app(service=ValuationService(model=MockModel(), mailer=mailer)))

    response = client.post(
        "/api/valuation",
        json={"businessType": "Pilates studio", "annualProfit": "90000", "email": "owner@example.com"},
    )

    assert response.status_code == 200
    assert len(mailer.sent) == 1
    assert mailer.sent[0].to == ["owner@example.com"]
    assert "fitness.jpg" in mailer.sent[0].html
