from typing import Any
from pydantic import BaseModel, ConfigDict

class ValuationRequest(BaseModel):
    """
    Inbound business details, carried exactly as the caller sent them.
    Only businessType, annualProfit and email are required; the validator
    checks them so values here are never coerced.
    """
    model_config = ConfigDict(frozen=True)

    businessType: Any = None
    location: Any = None
    annualRevenue: Any = None
    annualProfit: Any = None
    yearsOperating: Any = None
    staffCount: Any = None
    email: Any = None

class OkResponse(BaseModel):
    ok: bool = True

class ErrorResponse(BaseModel):
    error: str
