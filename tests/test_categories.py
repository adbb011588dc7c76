"""Category inference and selection for the listing thumbnail."""

import pytest

from bizvaluation.services.categories import (
    ALLOWED_CATEGORIES,
    Category,
    infer_category,
    select_category,
    thumbnail_url,
)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("Cafe in Bondi", Category.CAFE),
        ("Espresso bar", Category.CAFE),
        ("Wood fired pizza", Category.RESTAURANT),
        ("Take-away noodles", Category.RESTAURANT),
        ("Florist", Category.RETAIL),
        ("Barber", Category.BEAUTY),
        ("Pilates studio", Category.FITNESS),
        ("Dental practice", Category.HEALTHCARE),
        ("Mechanic and tyre centre", Category.AUTOMOTIVE),
        ("Plumbing contractor", Category.TRADES),
        ("Air-con installer", Category.TRADES),
        ("E-commerce brand", Category.ONLINE),
        ("Bookkeeping and accountant practice", Category.SERVICES),
        ("Dog walking", Category.GENERIC),
        ("", Category.GENERIC),
    ],
)
def test_infer_category_keyword_rules(text, expected):
    assert infer_category(text) == expected


@pytest.mark.parametrize(
    "text, expected",
    [
        # Each string matches two neighbouring rules; the earlier rule wins.
        ("cafe and restaurant", Category.CAFE),
        ("pizza shop", Category.RESTAURANT),
        ("beauty supply store", Category.RETAIL),
        ("day spa and yoga studio", Category.BEAUTY),
        ("gym with physio clinic", Category.FITNESS),
        ("dental clinic car wash", Category.HEALTHCARE),
        ("auto electrician", Category.AUTOMOTIVE),
        ("online plumbing supplies", Category.TRADES),
        ("saas marketing agency", Category.ONLINE),
        ("online beauty store", Category.RETAIL),
    ],
)
def test_infer_category_tie_break_follows_rule_order(text, expected):
    assert infer_category(text) == expected


def test_infer_category_is_case_insensitive():
    assert infer_category("COFFEE ROASTER") == Category.CAFE


def test_infer_category_total_and_deterministic():
    samples = ["", "   ", "???", "Cafe", "x" * 500, "多语言 text", None]
    for sample in samples:
        first = infer_category(sample)
        assert first.value in ALLOWED_CATEGORIES
        assert infer_category(sample) == first


@pytest.mark.parametrize("guess", ["fitness", " Fitness ", "FITNESS"])
def test_select_category_prefers_valid_model_guess(guess):
    assert select_category(guess, "Cafe in Bondi") == Category.FITNESS


@pytest.mark.parametrize("guess", [None, "", "fancyshop", 42, ["cafe"]])
def test_select_category_falls_back_to_inference(guess):
    assert select_category(guess, "Cafe in Bondi") == Category.CAFE


def test_thumbnail_mapping_is_one_to_one():
    urls = {thumbnail_url(c, "https://cdn.example.com/thumbs/") for c in Category}
    assert len(urls) == len(Category)
    assert thumbnail_url(Category.CAFE, "https://cdn.example.com/thumbs/") == "https://cdn.example.com/thumbs/cafe.jpg"
