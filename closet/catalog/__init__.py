"""Wardrobe catalogue vocabulary and validation."""

from .categories import SUBCATEGORIES, ClothingCategory
from .colors import COLOR_ORDER, color_rank, sort_by_color
from .schemas import ClothingItemDraft, ClothingItemValidationError, build_draft

__all__ = [
    "COLOR_ORDER",
    "SUBCATEGORIES",
    "ClothingCategory",
    "ClothingItemDraft",
    "ClothingItemValidationError",
    "build_draft",
    "color_rank",
    "sort_by_color",
]
