"""Tests for categories, colour ordering and item drafts."""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from closet.catalog import (
    COLOR_ORDER,
    ClothingCategory,
    ClothingItemValidationError,
    build_draft,
    color_rank,
    sort_by_color,
)


@dataclass
class _Item:
    title: str | None
    color: str | None


def test_category_ordinals_follow_declaration() -> None:
    assert [category.ordinal for category in ClothingCategory] == list(range(6))
    assert ClothingCategory.PANTS.ordinal < ClothingCategory.DRESS.ordinal


@pytest.mark.parametrize("raw", ["shirt", "SHIRT", " Shirt "])
def test_parse_is_case_insensitive(raw: str) -> None:
    assert ClothingCategory.parse(raw) is ClothingCategory.SHIRT


def test_parse_rejects_unknown_category() -> None:
    with pytest.raises(ValueError, match="Tops"):
        ClothingCategory.parse("Tops")


def test_every_category_has_other_subcategory() -> None:
    for category in ClothingCategory:
        assert category.subcategories[-1] == "Other"
    assert "Dress Shoes" in ClothingCategory.SHOES.subcategories


def test_color_rank_uses_first_palette_match() -> None:
    assert color_rank("White") == 0
    assert color_rank("Light Gray") == COLOR_ORDER.index("gray")
    assert color_rank("navy blue") == COLOR_ORDER.index("blue")
    assert color_rank(None) == COLOR_ORDER.index("other")
    assert color_rank("chartreuse") == len(COLOR_ORDER)


def test_sort_by_color_breaks_ties_by_title() -> None:
    items = [
        _Item("Zip Hoodie", "Black"),
        _Item("Oxford", "white"),
        _Item("Anorak", "black"),
        _Item("Mystery", "chartreuse"),
        _Item("Linen Shirt", "Cream"),
    ]

    ordered = [item.title for item in sort_by_color(items)]

    assert ordered == ["Oxford", "Linen Shirt", "Anorak", "Zip Hoodie", "Mystery"]


def test_build_draft_normalises_fields() -> None:
    draft = build_draft(
        title="  Navy Blue Button-Down ",
        category="shirt",
        subcategory="Button-Down",
        color=" Navy ",
        image_data=b"jpeg",
    )

    assert draft.title == "Navy Blue Button-Down"
    assert draft.category is ClothingCategory.SHIRT
    assert draft.color == "Navy"


@pytest.mark.parametrize(
    ("overrides", "message"),
    [
        ({"image_data": None}, "Please select a photo"),
        ({"title": "   "}, "Please enter a title"),
        ({"category": None}, "Please select a category"),
        ({"category": "Tops"}, "Please select a category"),
        ({"subcategory": ""}, "Please select a type"),
        ({"color": None}, "Please enter a color"),
    ],
)
def test_build_draft_reports_first_missing_field(overrides: dict, message: str) -> None:
    values = {
        "title": "Tee",
        "category": ClothingCategory.SHIRT,
        "subcategory": "T-Shirt",
        "color": "White",
        "image_data": b"jpeg",
    }
    values.update(overrides)

    with pytest.raises(ClothingItemValidationError, match=message):
        build_draft(**values)
