from typing import Protocol, List, Optional
from dataclasses import dataclass, field

# ----- Data shapes (thin & explicit) -----

@dataclass
class EmailMessage:
    sender: str               # e.g. "BizTradeHub <onboarding@resend.dev>"
    to: List[str]
    subject: str
    html: str

@dataclass
class SendResult:
    ok: bool
    provider: str
    message_id: Optional[str] = None
    error: Optional[str] = None
    # Raw provider payload for logs only; never returned to the caller
    details: dict = field(default_factory=dict)

# ----- Protocols (interfaces) -----

class EmailClient(Protocol):
    async def send(self, message: EmailMessage) -> SendResult:
        """Deliver one message. Provider failures come back as ok=False, not as exceptions."""
        ...
