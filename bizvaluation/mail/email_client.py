import logging
import httpx
from starlette.concurrency import run_in_threadpool
from .base import EmailClient, EmailMessage, SendResult
from ..core.config import settings

logger = logging.getLogger(__name__)

class MockEmail(EmailClient):
    """
    Logs the message instead of sending it. Default for local development.
    """
    def __init__(self):
        self.sent: list[EmailMessage] = []

    async def send(self, message: EmailMessage) -> SendResult:
        self.sent.append(message)
        logger.info("mock email to %s: %s (%d bytes html)", ",".join(message.to), message.subject, len(message.html))
        return SendResult(ok=True, provider="mock", message_id=f"mock-{len(self.sent)}")

class HttpResend(EmailClient):
    """
    Resend transactional email over its REST API.
    """
    def __init__(self, api_key: str, base_url: str = "https://api.resend.com", transport: httpx.AsyncBaseTransport | None = None):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.transport = transport

    async def send(self, message: EmailMessage) -> SendResult:
        try:
            async with httpx.AsyncClient(timeout=15, transport=self.transport) as client:
                r = await client.post(
                    f"{self.base_url}/emails",
                    headers={"Authorization": f"Bearer {self.api_key}"},
                    json={
                        "from": message.sender,
                        "to": message.to,
                        "subject": message.subject,
                        "html": message.html,
                    },
                )
        except httpx.HTTPError as exc:
            return SendResult(ok=False, provider="resend", error=f"transport error: {exc}")

        try:
            body = r.json()
        except ValueError:
            body = {"raw": r.text}
        if not isinstance(body, dict):
            body = {"raw": body}
        if r.is_success:
            return SendResult(ok=True, provider="resend", message_id=body.get("id"), details=body)
        return SendResult(
            ok=False, provider="resend",
            error=f"HTTP {r.status_code}: {body.get('message') or body.get('raw') or 'unknown error'}",
            details=body,
        )

class SendGridEmail(EmailClient):
    """
    SendGrid v3 mail send. The SDK is synchronous, so it runs in the threadpool.
    """
    def __init__(self, api_key: str, client=None):
        if client is None:
            from sendgrid import SendGridAPIClient
            client = SendGridAPIClient(api_key)
        self.client = client

    def _send_sync(self, message: EmailMessage) -> SendResult:
        from sendgrid.helpers.mail import Mail
        try:
            mail = Mail(
                from_email=message.sender,
                to_emails=message.to,
                subject=message.subject,
                html_content=message.html,
            )
            response = self.client.send(mail)
        except Exception as exc:  # bad addresses, or python_http_client per HTTP status
            return SendResult(ok=False, provider="sendgrid", error=str(exc))
        if 200 <= response.status_code < 300:
            message_id = response.headers.get("X-Message-Id") if response.headers else None
            return SendResult(ok=True, provider="sendgrid", message_id=message_id)
        return SendResult(ok=False, provider="sendgrid", error=f"HTTP {response.status_code}")

    async def send(self, message: EmailMessage) -> SendResult:
        return await run_in_threadpool(self._send_sync, message)

def email_client() -> EmailClient:
    """
    Factory picks mock, resend or sendgrid based on env flags.
    """
    if settings.EMAIL_PROVIDER == "resend":
        if not settings.RESEND_API_KEY:
            raise RuntimeError("RESEND_API_KEY is required for the resend email provider")
        return HttpResend(settings.RESEND_API_KEY, settings.RESEND_BASE_URL)
    if settings.EMAIL_PROVIDER == "sendgrid":
        if not settings.SENDGRID_API_KEY:
            raise RuntimeError("SENDGRID_API_KEY is required for the sendgrid email provider")
        return SendGridEmail(settings.SENDGRID_API_KEY)
    return MockEmail()
