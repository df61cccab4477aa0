"""Clothing categories and their fixed subcategory lists."""

from __future__ import annotations

from enum import Enum


class ClothingCategory(str, Enum):
    """Closed set of garment categories.

    Declaration order is the category ordinal used to break stack-order ties
    when layering an outfit preview.
    """

    SHOES = "Shoes"
    PANTS = "Pants"
    DRESS = "Dress"
    SHIRT = "Shirt"
    JACKET = "Jacket"
    ACCESSORY = "Accessory"

    @property
    def ordinal(self) -> int:
        return _ORDINALS[self]

    @property
    def subcategories(self) -> tuple[str, ...]:
        return SUBCATEGORIES[self]

    @classmethod
    def parse(cls, value: str) -> "ClothingCategory":
        """Resolve a category name case-insensitively.

        Raises ``ValueError`` for names outside the closed set.
        """

        normalised = value.strip().lower()
        for category in cls:
            if category.value.lower() == normalised:
                return category
        raise ValueError(f"Unknown clothing category: {value!r}")


_ORDINALS = {category: index for index, category in enumerate(ClothingCategory)}

SUBCATEGORIES: dict[ClothingCategory, tuple[str, ...]] = {
    ClothingCategory.SHIRT: ("Button-Down", "T-Shirt", "Polo", "Tank Top", "Blouse", "Other"),
    ClothingCategory.PANTS: ("Jeans", "Chinos", "Shorts", "Sweatpants", "Dress Pants", "Other"),
    ClothingCategory.JACKET: ("Bomber", "Denim", "Leather", "Blazer", "Puffer", "Windbreaker", "Other"),
    ClothingCategory.DRESS: ("Casual", "Formal", "Maxi", "Mini", "Midi", "Other"),
    ClothingCategory.SHOES: ("Sneakers", "Boots", "Dress Shoes", "Sandals", "Heels", "Loafers", "Other"),
    ClothingCategory.ACCESSORY: ("Hat", "Bag", "Belt", "Scarf", "Jewelry", "Watch", "Other"),
}
