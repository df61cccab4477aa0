"""Exceptions raised while composing outfit previews."""

from __future__ import annotations

from closet.catalog.categories import ClothingCategory


class CompositionError(RuntimeError):
    """Base class for compositor failures."""


class GarmentDecodeError(CompositionError):
    """A garment image could not be decoded; the layer is skipped."""

    def __init__(self, category: ClothingCategory, message: str) -> None:
        self.category = category
        super().__init__(f"{category.value}: {message}")


class CanvasError(CompositionError):
    """The output canvas could not be allocated or rendered."""
