from typing import Any

from ..schemas import ValuationRequest
from .categories import ALLOWED_CATEGORIES

# Keys the model must return, in the order the email consumes them
REPLY_KEYS = (
    "lowEstimate",
    "highEstimate",
    "recommendedPrice",
    "multipleRange",
    "confidence",
    "sellTime",
    "notes",
    "improvementIdeas",
    "listingTitle",
    "listingIntro",
    "listingBullets",
    "imageCategory",
)

SYSTEM_MESSAGE = "Reply with a single valid JSON object and nothing else."

PROMPT_TEMPLATE = """You are a small-business valuation assistant for Australia.

Estimate a realistic SALE price range using SDE (owner's earnings) multiples.

Return ONLY a single JSON object containing exactly these keys and no others:
- lowEstimate (number, AUD)
- highEstimate (number, AUD)
- recommendedPrice (number, AUD)
- multipleRange (string, e.g. "2.1x–2.8x SDE")
- confidence (string, one of: "Low", "Medium", "High")
- sellTime (string, e.g. "3–6 months", "6–12 months")
- notes (string, 2–3 short bullet-style sentences joined with line breaks)
- improvementIdeas (string, 3 concise suggestions joined with line breaks)
- listingTitle (string, short, compelling listing title for a marketplace)
- listingIntro (string, 2–3 sentence paragraph as if it were the opening of a listing)
- listingBullets (array of 3–5 short strings highlighting key strengths)
- imageCategory (string, one of: {categories})

Inputs:
- Business type: {business_type}
- Location: {location}
- Annual revenue: {annual_revenue}
- Annual profit / owner's earnings: {annual_profit}
- Years operating: {years_operating}
- Staff count: {staff_count}

Rules:
- The sale price is a multiple of owner's earnings, typically in the 1x–4x range, adjusted for risk factors such as business age, niche concentration, and operational stability.
- Be slightly conservative.
- Currency is AUD.
- Make the listing text sound clear, confident and professional, not salesy.
- For imageCategory, choose the single best-fitting category from the allowed list only.
"""

def _field(value: Any) -> str:
    if value is None or (isinstance(value, str) and not value.strip()):
        return "not provided"
    return str(value)

def build_prompt(req: ValuationRequest) -> str:
    """Render the valuation instruction for one request. Pure and deterministic."""
    return PROMPT_TEMPLATE.format(
        categories=", ".join(f'"{c}"' for c in ALLOWED_CATEGORIES),
        business_type=_field(req.businessType),
        location=_field(req.location),
        annual_revenue=_field(req.annualRevenue),
        annual_profit=_field(req.annualProfit),
        years_operating=_field(req.yearsOperating),
        staff_count=_field(req.staffCount),
    )
