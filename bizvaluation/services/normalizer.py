"""Turns the language model's untrusted JSON reply into render-ready values.

No field of the reply is trusted: every value is checked and defaulted so the
email template never shows ``None``, ``null`` or a half-formatted number.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from markupsafe import Markup, escape

from ..core.errors import UpstreamModelError
from ..core.utils import round_half_up, to_finite_number
from ..schemas import ValuationRequest
from .categories import Category, select_category, thumbnail_url

CONFIDENCE_LEVELS = ("Low", "Medium", "High")
DEFAULT_CONFIDENCE = "Medium"
DEFAULT_SELL_TIME = "3–9 months"
DEFAULT_LISTING_TITLE = "Profitable business opportunity"
PLACEHOLDER = "-"

# Listing preview shows at most this many bullets.
MAX_LISTING_BULLETS = 3

LINE_BREAK = Markup("<br>")


@dataclass(frozen=True)
class NormalizedValuation:
    business_type: str
    location: str
    years_operating: str
    staff_count: str
    low_estimate: str
    high_estimate: str
    recommended_price: str
    annual_revenue: str
    annual_profit: str
    multiple_range: str
    confidence: str
    sell_time: str
    notes_html: Markup
    improvement_html: Markup
    listing_title: str
    listing_intro: str
    listing_bullets: Tuple[str, ...]
    category: Category
    thumbnail_url: str


def parse_model_reply(content: Optional[str]) -> Dict[str, Any]:
    """Parse the model's reply; it must be a single JSON object.

    An empty reply counts as ``{}`` so every field falls back to its default.
    """
    if not content:
        return {}
    try:
        data = json.loads(content)
    except (TypeError, ValueError) as exc:
        raise UpstreamModelError("model reply is not valid JSON") from exc
    if not isinstance(data, dict):
        raise UpstreamModelError(f"model reply is a JSON {type(data).__name__}, expected an object")
    return data


def format_aud(value: Any) -> str:
    """Whole-dollar amount with en-AU thousands grouping, or ``-``."""
    number = to_finite_number(value)
    if number is None:
        return PLACEHOLDER
    return f"{round_half_up(number):,}"


def _text(value: Any, default: str = "") -> str:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return default


def lines_to_html(value: Any) -> Markup:
    """Escape multi-line text and turn each newline into a <br>."""
    if not isinstance(value, str):
        return Markup("")
    lines = value.replace("\r\n", "\n").split("\n")
    return LINE_BREAK.join(escape(line) for line in lines)


def first_sentence(value: Any) -> str:
    text = _text(value)
    if not text:
        return ""
    return re.split(r"(?<=\.)\s+", text)[0] or text


def listing_bullets(value: Any, limit: int = MAX_LISTING_BULLETS) -> Tuple[str, ...]:
    if not isinstance(value, list):
        return ()
    bullets = [b.strip() for b in value if isinstance(b, str) and b.strip()]
    return tuple(bullets[:limit])


def normalize_confidence(value: Any) -> str:
    return value if value in CONFIDENCE_LEVELS else DEFAULT_CONFIDENCE


def normalize_reply(reply: Dict[str, Any], request: ValuationRequest, thumbnail_base_url: str) -> NormalizedValuation:
    """Default every reply field, the echoed request fields, and pick the listing category."""
    category = select_category(reply.get("imageCategory"), request.businessType)
    return NormalizedValuation(
        business_type=_text(request.businessType),
        location=_text(request.location, PLACEHOLDER),
        years_operating=_text(request.yearsOperating, PLACEHOLDER),
        staff_count=_text(request.staffCount, PLACEHOLDER),
        low_estimate=format_aud(reply.get("lowEstimate")),
        high_estimate=format_aud(reply.get("highEstimate")),
        recommended_price=format_aud(reply.get("recommendedPrice")),
        annual_revenue=format_aud(request.annualRevenue),
        annual_profit=format_aud(request.annualProfit),
        multiple_range=_text(reply.get("multipleRange"), PLACEHOLDER),
        confidence=normalize_confidence(reply.get("confidence")),
        sell_time=_text(reply.get("sellTime"), DEFAULT_SELL_TIME),
        notes_html=lines_to_html(reply.get("notes")),
        improvement_html=lines_to_html(reply.get("improvementIdeas")),
        listing_title=_text(reply.get("listingTitle"), DEFAULT_LISTING_TITLE),
        listing_intro=first_sentence(reply.get("listingIntro")),
        listing_bullets=listing_bullets(reply.get("listingBullets")),
        category=category,
        thumbnail_url=thumbnail_url(category, thumbnail_base_url),
    )
