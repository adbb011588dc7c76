from typing import Any

from ..core.errors import ValidationError
from ..core.utils import to_finite_number
from ..schemas import ValuationRequest

REQUIRED_FIELDS = ("businessType", "annualProfit", "email")

def _is_blank_text(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()

def validate_request(body: Any) -> ValuationRequest:
    """
    Check the raw request body and return it as a ValuationRequest.

    A body that is not a JSON object is treated as empty. annualProfit must be
    a finite, non-zero number (or numeric string). Field values are passed
    through untouched; formatting happens later in the normalizer.
    """
    data = body if isinstance(body, dict) else {}

    missing = []
    if _is_blank_text(data.get("businessType")):
        missing.append("businessType")
    profit = to_finite_number(data.get("annualProfit"))
    if profit is None or profit == 0:
        missing.append("annualProfit")
    if _is_blank_text(data.get("email")):
        missing.append("email")
    if missing:
        raise ValidationError(missing)

    return ValuationRequest(**{name: data.get(name) for name in ValuationRequest.model_fields})
