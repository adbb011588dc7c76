import logging
import time
from datetime import date
from typing import Callable, Optional

from ..core.config import settings
from ..core.errors import EmailDeliveryError
from ..core.metrics import EMAIL_FAILURES, MODEL_LATENCY
from ..mail.base import EmailClient, EmailMessage, SendResult
from ..mail.email_client import email_client
from ..models.base import ValuationModel
from ..models.mock_model import MockModel
from ..models.openai_model import OpenAIModel
from ..schemas import ValuationRequest
from .email_renderer import render_valuation_email
from .normalizer import NormalizedValuation, normalize_reply, parse_model_reply
from .prompt import build_prompt

logger = logging.getLogger(__name__)

def valuation_model() -> ValuationModel:
    """
    Factory picks the language-model provider based on env.
    """
    provider = settings.MODEL_PROVIDER
    if provider == "openai":
        if not settings.OPENAI_API_KEY:
            raise RuntimeError("OPENAI_API_KEY is required for the openai model provider")
        return OpenAIModel()
    return MockModel()

class ValuationService:
    """
    Orchestrates one validated request:
      prompt → model → normalize → render → send
    Clients are built once at app start and shared; the service itself keeps
    no per-request state.
    """
    def __init__(
        self,
        model: Optional[ValuationModel] = None,
        mailer: Optional[EmailClient] = None,
        today: Callable[[], date] = date.today,
    ):
        self.model = model if model is not None else valuation_model()
        self.mailer = mailer if mailer is not None else email_client()
        self.today = today

    async def appraise(self, req: ValuationRequest) -> NormalizedValuation:
        prompt = build_prompt(req)
        start = time.perf_counter()
        content = await self.model.complete_json(prompt)
        MODEL_LATENCY.observe(time.perf_counter() - start)
        reply = parse_model_reply(content)
        return normalize_reply(reply, req, settings.THUMBNAIL_BASE_URL)

    def render(self, valuation: NormalizedValuation) -> str:
        return render_valuation_email(
            valuation,
            issued_on=self.today(),
            brand=settings.BRAND_NAME,
            cta_url=settings.CTA_URL,
        )

    async def deliver(self, recipient: str, html: str) -> SendResult:
        """
        Send the report. A provider failure is logged and returned in the
        result, never raised.
        """
        message = EmailMessage(
            sender=settings.EMAIL_FROM,
            to=[recipient],
            subject=settings.EMAIL_SUBJECT,
            html=html,
        )
        result = await self.mailer.send(message)
        if not result.ok:
            EMAIL_FAILURES.inc()
            logger.error(
                "%s email error: %s", result.provider, result.error,
                exc_info=EmailDeliveryError(result.error or "unknown provider error"),
            )
        else:
            logger.info("valuation email sent via %s (id=%s)", result.provider, result.message_id)
        return result

    async def run(self, req: ValuationRequest) -> SendResult:
        valuation = await self.appraise(req)
        html = self.render(valuation)
        return await self.deliver(req.email.strip(), html)
