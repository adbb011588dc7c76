from datetime import date
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from .normalizer import NormalizedValuation

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
EMAIL_TEMPLATE = "valuation_email.html"

_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

# Model text is autoescaped; a missing template variable raises.
jinja_env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=select_autoescape(["html", "xml"]),
    undefined=StrictUndefined,
    keep_trailing_newline=True,
)

def format_issued_date(day: date) -> str:
    """en-AU short date, e.g. 17 Oct 2026."""
    return f"{day.day} {_MONTHS[day.month - 1]} {day.year}"

def render_valuation_email(
    valuation: NormalizedValuation,
    issued_on: date,
    brand: str,
    cta_url: str,
) -> str:
    """Render the complete HTML email for one normalized valuation."""
    template = jinja_env.get_template(EMAIL_TEMPLATE)
    return template.render(
        v=valuation,
        issued_date=format_issued_date(issued_on),
        year=issued_on.year,
        brand=brand,
        cta_url=cta_url,
    )
