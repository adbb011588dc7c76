"""Business categories used to pick the listing thumbnail in the email.

The language model is asked for an ``imageCategory``. When it returns
something outside the closed set, the category is inferred from the
free-text business type with ordered keyword rules.
"""

import re
from enum import Enum


class Category(str, Enum):
    CAFE = "cafe"
    RESTAURANT = "restaurant"
    RETAIL = "retail"
    SERVICES = "services"
    TRADES = "trades"
    BEAUTY = "beauty"
    FITNESS = "fitness"
    HEALTHCARE = "healthcare"
    AUTOMOTIVE = "automotive"
    ONLINE = "online"
    GENERIC = "generic"


ALLOWED_CATEGORIES = tuple(c.value for c in Category)

# Priority order matters: first matching rule wins.
CATEGORY_RULES: list[tuple[Category, re.Pattern]] = [
    (Category.CAFE, re.compile(r"cafe|coffee|espresso")),
    (Category.RESTAURANT, re.compile(r"restaurant|bistro|takeaway|take-away|food truck|burger|pizza")),
    (Category.RETAIL, re.compile(r"retail|shop|store|boutique|florist|grocery|supermarket")),
    (Category.BEAUTY, re.compile(r"salon|barber|spa|beauty|nail")),
    (Category.FITNESS, re.compile(r"gym|fitness|pilates|yoga|personal training")),
    (Category.HEALTHCARE, re.compile(r"clinic|medical|dental|dentist|physio|chiro|pharmacy")),
    (Category.AUTOMOTIVE, re.compile(r"auto|mechanic|panel beat|car wash|detailing|tyre")),
    (Category.TRADES, re.compile(r"plumb|electric|air[- ]?con|hvac|construction|builder|trade")),
    (Category.ONLINE, re.compile(r"online|e[- ]?commerce|dropship|saas|software")),
    (Category.SERVICES, re.compile(r"office|consult|accountant|law|legal|agency|marketing|design")),
]


def infer_category(business_type: str | None) -> Category:
    """Map a business description to a category. Never fails."""
    text = (business_type or "").lower()
    for category, pattern in CATEGORY_RULES:
        if pattern.search(text):
            return category
    return Category.GENERIC


def select_category(model_guess, business_type: str | None) -> Category:
    """Prefer the model's guess when it names a known category exactly."""
    if isinstance(model_guess, str):
        lowered = model_guess.lower().strip()
        if lowered in ALLOWED_CATEGORIES:
            return Category(lowered)
    return infer_category(business_type)


def thumbnail_url(category: Category, base_url: str) -> str:
    return f"{base_url.rstrip('/')}/{category.value}.jpg"
