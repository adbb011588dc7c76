import json
import re
from .base import ValuationModel
from ..core.utils import fnv1a_32, seeded_rand, to_finite_number
from ..services.categories import infer_category

_PROFIT_LINE = re.compile(r"Annual profit / owner's earnings: (.+)")
_TYPE_LINE = re.compile(r"Business type: (.+)")

class MockModel(ValuationModel):
    """
    Deterministic placeholder model. Reads the profit and business type
    back out of the prompt and answers with plausible SDE multiples, so the
    service runs end to end without an API key.
    """
    async def complete_json(self, prompt: str) -> str:
        seed = fnv1a_32(prompt)
        profit_match = _PROFIT_LINE.search(prompt)
        type_match = _TYPE_LINE.search(prompt)
        profit = to_finite_number(profit_match.group(1)) if profit_match else None
        business_type = type_match.group(1).strip() if type_match else ""
        profit = profit or 100_000

        # Multiples between ~1.5x and ~3.5x, spread of about 0.6x
        low_mult = 1.5 + seeded_rand(seed, 1)[0] * 1.4
        high_mult = low_mult + 0.6
        low = int(profit * low_mult)
        high = int(profit * high_mult)

        reply = {
            "lowEstimate": low,
            "highEstimate": high,
            "recommendedPrice": int((low + high) / 2),
            "multipleRange": f"{low_mult:.1f}x–{high_mult:.1f}x SDE",
            "confidence": "Medium",
            "sellTime": "3–9 months",
            "notes": "Offline estimate from typical SDE multiples.\nNo market data was consulted.",
            "improvementIdeas": "Document recurring revenue.\nReduce owner dependence.\nTidy up financial records.",
            "listingTitle": f"Established {business_type}" if business_type else "Profitable business opportunity",
            "listingIntro": "A well established business with steady owner earnings. Ready for a new owner.",
            "listingBullets": ["Consistent profit", "Established customer base", "Simple handover"],
            "imageCategory": infer_category(business_type).value,
        }
        return json.dumps(reply)
