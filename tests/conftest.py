"""
Pytest configuration and fixtures
"""
import json
from datetime import date
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from bizvaluation.mail.base import SendResult
from bizvaluation.main import create_app
from bizvaluation.schemas import ValuationRequest
from bizvaluation.services.valuation_service import ValuationService

ISSUED_ON = date(2026, 10, 17)

MODEL_REPLY = {
    "lowEstimate": 300000,
    "highEstimate": 420000,
    "recommendedPrice": 365000.4,
    "multipleRange": "2.0x–2.8x SDE",
    "confidence": "High",
    "sellTime": "3–6 months",
    "notes": "Strong beachside foot traffic.\nLease has 6 years remaining.",
    "improvementIdeas": "Add catering.\nExtend trading hours.\nReduce owner hours.",
    "listingTitle": "Busy Bondi cafe with loyal locals",
    "listingIntro": "A well loved cafe steps from the beach. Consistent trade all year.",
    "listingBullets": ["Prime location", "Loyal customers", "Experienced staff", "Low rent"],
    "imageCategory": "cafe",
}


@pytest.fixture
def model_reply():
    return dict(MODEL_REPLY)


@pytest.fixture
def model(model_reply):
    """Language-model double returning a well-formed reply."""
    fake = AsyncMock()
    fake.complete_json.return_value = json.dumps(model_reply)
    return fake


@pytest.fixture
def mailer():
    """Email client double that always accepts the message."""
    fake = AsyncMock()
    fake.send.return_value = SendResult(ok=True, provider="fake", message_id="fake-1")
    return fake


@pytest.fixture
def service(model, mailer):
    return ValuationService(model=model, mailer=mailer, today=lambda: ISSUED_ON)


@pytest.fixture
def client(service):
    return TestClient(create_app(service=service))


@pytest.fixture
def bondi_request():
    return ValuationRequest(
        businessType="Cafe in Bondi",
        location="Bondi, NSW",
        annualRevenue=820000,
        annualProfit=150000,
        yearsOperating=7,
        staffCount=9,
        email="a@b.com",
    )
